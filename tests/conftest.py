"""Pytest configuration and fixtures."""

import uuid

import pytest
from kubernetes import client

from controllerspread.predicate.owners import ControllerKind
from controllerspread.predicate.policy import MIN_HOSTS_ANNOTATION
from controllerspread.stores.memory import InMemoryControllerRepository, InMemoryPodRepository

NAMESPACE = "apps"

API_VERSIONS = {
    ControllerKind.REPLICA_SET: "apps/v1",
    ControllerKind.STATEFUL_SET: "apps/v1",
    ControllerKind.JOB: "batch/v1",
    ControllerKind.CRON_JOB: "batch/v1",
}


def _metadata(name, namespace, min_hosts=None, uid=None):
    annotations = {MIN_HOSTS_ANNOTATION: min_hosts} if min_hosts is not None else None
    return client.V1ObjectMeta(
        name=name,
        namespace=namespace,
        uid=uid or str(uuid.uuid4()),
        annotations=annotations,
    )


def _pod_template():
    return client.V1PodTemplateSpec(
        metadata=client.V1ObjectMeta(labels={"app": "web"}),
        spec=client.V1PodSpec(containers=[client.V1Container(name="app", image="nginx:1.25")]),
    )


def build_controller(kind, name="web", namespace=NAMESPACE, count=None, min_hosts=None, uid=None):
    """Build a controller object of ``kind`` with ``count`` replicas/parallelism."""
    kind = ControllerKind(kind)
    metadata = _metadata(name, namespace, min_hosts, uid)
    selector = client.V1LabelSelector(match_labels={"app": "web"})

    if kind == ControllerKind.REPLICA_SET:
        return client.V1ReplicaSet(
            metadata=metadata,
            spec=client.V1ReplicaSetSpec(replicas=count, selector=selector, template=_pod_template()),
        )
    if kind == ControllerKind.STATEFUL_SET:
        return client.V1StatefulSet(
            metadata=metadata,
            spec=client.V1StatefulSetSpec(
                replicas=count,
                selector=selector,
                service_name=name,
                template=_pod_template(),
            ),
        )
    if kind == ControllerKind.JOB:
        return client.V1Job(
            metadata=metadata,
            spec=client.V1JobSpec(parallelism=count, template=_pod_template()),
        )
    return client.V1CronJob(
        metadata=metadata,
        spec=client.V1CronJobSpec(
            schedule="*/5 * * * *",
            job_template=client.V1JobTemplateSpec(
                spec=client.V1JobSpec(parallelism=count, template=_pod_template()),
            ),
        ),
    )


def owner_reference(controller, kind):
    kind = ControllerKind(kind)
    return client.V1OwnerReference(
        api_version=API_VERSIONS[kind],
        kind=kind.value,
        name=controller.metadata.name,
        uid=controller.metadata.uid,
        controller=True,
    )


def build_pod(name, owners=(), node_name=None, phase="Running", namespace=NAMESPACE):
    """Build a pod owned by ``owners`` (V1OwnerReference list)."""
    return client.V1Pod(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            owner_references=list(owners) or None,
        ),
        spec=client.V1PodSpec(
            containers=[client.V1Container(name="app", image="nginx:1.25")],
            node_name=node_name,
        ),
        status=client.V1PodStatus(phase=phase),
    )


@pytest.fixture
def controllers():
    """Empty in-memory controller store."""
    return InMemoryControllerRepository()


@pytest.fixture
def pods():
    """Empty in-memory pod store."""
    return InMemoryPodRepository()


@pytest.fixture
def replica_set():
    """ReplicaSet 'web' with 3 replicas and no annotation."""
    return build_controller(ControllerKind.REPLICA_SET, count=3)


@pytest.fixture
def scheduler_config_yaml():
    """A KubeSchedulerConfiguration carrying ControllerSpreadFilter args."""
    return """\
apiVersion: kubescheduler.config.k8s.io/v1
kind: KubeSchedulerConfiguration
leaderElection:
  leaderElect: false
profiles:
  - schedulerName: default-scheduler
  - schedulerName: controller-spread-scheduler
    plugins:
      filter:
        enabled:
          - name: ControllerSpreadFilter
    pluginConfig:
      - name: NodeResourcesFit
        args:
          scoringStrategy:
            type: LeastAllocated
      - name: ControllerSpreadFilter
        args:
          defaultMinHosts: 3
"""
