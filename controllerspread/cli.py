"""controllerspread CLI - dry-run the ControllerSpreadFilter against a cluster."""

import json
import logging
import sys
from typing import List, Optional, Tuple

import click
from kubernetes.client.rest import ApiException

from controllerspread.config.loader import SpreadFilterArgs, load_args
from controllerspread.context import SchedulingContext
from controllerspread.errors import ConfigValidationError
from controllerspread.predicate.decision import StatusCode
from controllerspread.predicate.owners import resolve_controller
from controllerspread.predicate.plugin import ControllerSpreadFilter
from controllerspread.stores.cluster import (
    KubernetesControllerRepository,
    KubernetesPodRepository,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _load_args_or_exit(config_path: Optional[str]) -> SpreadFilterArgs:
    if not config_path:
        return SpreadFilterArgs()
    try:
        return load_args(config_path)
    except (FileNotFoundError, ConfigValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        for problem in getattr(e, "errors", []):
            click.echo(f"  - {problem}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="controller-spread-scheduler")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
def main(log_level: str):
    """Controller spread scheduler filter tools.

    Evaluates whether pods of a ReplicaSet, StatefulSet, Job or CronJob would
    keep their minimum spread across distinct nodes. All commands are
    read-only.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command()
@click.argument("pod_name")
@click.option("--namespace", "-n", default="default", help="Namespace of the pod")
@click.option(
    "--node",
    "nodes",
    multiple=True,
    help="Candidate node (repeatable). Defaults to every node in the cluster.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    help="Plugin args YAML or KubeSchedulerConfiguration",
)
@click.option("--timeout", type=float, default=None, help="Deadline in seconds for the whole run")
@click.option("--json", "json_output", is_flag=True, help="Output verdicts as JSON")
def evaluate(
    pod_name: str,
    namespace: str,
    nodes: Tuple[str, ...],
    config_path: Optional[str],
    timeout: Optional[float],
    json_output: bool,
):
    """Evaluate POD_NAME against candidate nodes without binding it."""
    args = _load_args_or_exit(config_path)

    pods = KubernetesPodRepository()
    controllers = KubernetesControllerRepository()
    spread_filter = ControllerSpreadFilter(controllers, pods, args)

    try:
        pod = pods.read(namespace, pod_name)
        candidates: List[str] = list(nodes) or pods.node_names()
    except ApiException as e:
        click.echo(f"Error: {e.status} {e.reason}", err=True)
        sys.exit(1)

    ctx = SchedulingContext(timeout=timeout)
    verdicts = {node: spread_filter.filter(pod, node, ctx) for node in candidates}

    if json_output:
        ref = resolve_controller(pod)
        click.echo(json.dumps({
            "pod": f"{namespace}/{pod_name}",
            "controller": str(ref) if ref else None,
            "verdicts": {node: v.to_dict() for node, v in verdicts.items()},
        }, indent=2))
    else:
        click.echo(f"Pod {namespace}/{pod_name}:")
        for node, verdict in verdicts.items():
            line = f"  {node}: {verdict.code.value}"
            if verdict.reason:
                line += f" ({verdict.reason})"
            click.echo(line)

    if any(v.code == StatusCode.ERROR for v in verdicts.values()):
        sys.exit(2)


@main.command("validate-config")
@click.argument("config_path", type=click.Path())
def validate_config(config_path: str):
    """Validate plugin args and print the effective values."""
    args = _load_args_or_exit(config_path)
    click.echo(f"Config OK: {config_path}")
    for key, value in args.to_dict().items():
        click.echo(f"  {key}: {value}")


if __name__ == "__main__":
    main()
