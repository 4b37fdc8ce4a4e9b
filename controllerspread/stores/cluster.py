"""Stores that read directly from the Kubernetes API server.

Used by the command-line tool for dry-run evaluation. Every call is a live
read, so results are only as fresh as the moment of the request.
"""

import logging
from typing import Any, List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from controllerspread.errors import ControllerLookupError, PodListError
from controllerspread.predicate.owners import ControllerKind
from controllerspread.stores.base import ControllerRepository, PodRepository

logger = logging.getLogger(__name__)


def load_cluster_config() -> None:
    """Load in-cluster configuration, falling back to the local kubeconfig."""
    try:
        config.load_incluster_config()
        logger.debug("Loaded in-cluster Kubernetes config")
    except config.ConfigException:
        config.load_kube_config()
        logger.debug("Loaded kubeconfig")


def _describe(e: ApiException) -> str:
    if e.status == 404:
        return "not found"
    return f"{e.status} {e.reason}"


class KubernetesControllerRepository(ControllerRepository):
    """Reads ReplicaSets, StatefulSets, Jobs and CronJobs from the API server."""

    def __init__(
        self,
        apps_api: Optional[client.AppsV1Api] = None,
        batch_api: Optional[client.BatchV1Api] = None,
    ):
        if apps_api is None or batch_api is None:
            load_cluster_config()
        self.apps_api = apps_api or client.AppsV1Api()
        self.batch_api = batch_api or client.BatchV1Api()

    def get(self, kind: ControllerKind, namespace: str, name: str) -> Any:
        kind = ControllerKind(kind)
        readers = {
            ControllerKind.REPLICA_SET: self.apps_api.read_namespaced_replica_set,
            ControllerKind.STATEFUL_SET: self.apps_api.read_namespaced_stateful_set,
            ControllerKind.JOB: self.batch_api.read_namespaced_job,
            ControllerKind.CRON_JOB: self.batch_api.read_namespaced_cron_job,
        }
        try:
            return readers[kind](name, namespace)
        except ApiException as e:
            raise ControllerLookupError(kind.value, namespace, name, _describe(e)) from e
        except HTTPError as e:
            raise ControllerLookupError(kind.value, namespace, name, str(e)) from e


class KubernetesPodRepository(PodRepository):
    """Lists pods of a namespace from the API server."""

    def __init__(self, core_api: Optional[client.CoreV1Api] = None):
        if core_api is None:
            load_cluster_config()
        self.core_api = core_api or client.CoreV1Api()

    def list(self, namespace: str) -> List[Any]:
        try:
            return list(self.core_api.list_namespaced_pod(namespace).items)
        except ApiException as e:
            raise PodListError(namespace, _describe(e)) from e
        except HTTPError as e:
            raise PodListError(namespace, str(e)) from e

    def read(self, namespace: str, name: str) -> Any:
        """Read a single pod, letting ApiException propagate."""
        return self.core_api.read_namespaced_pod(name, namespace)

    def node_names(self) -> List[str]:
        """Names of all nodes in the cluster."""
        return [node.metadata.name for node in self.core_api.list_node().items]
