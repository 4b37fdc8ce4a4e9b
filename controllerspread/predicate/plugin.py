"""The ControllerSpreadFilter scheduling predicate.

Prevents pods of the same ReplicaSet, StatefulSet, Job or CronJob with more
than one desired replica from piling onto too few nodes. The number of
distinct nodes required defaults to 2 and can be changed per controller with
the ``controller-spread-scheduler/min-hosts`` annotation.

The filter is built once with its stores injected and then called for every
(pod, candidate node) pair. It keeps no state between calls, so concurrent
calls from many threads need no locking.
"""

import logging
from typing import Any, Callable, Dict, Optional

from controllerspread.config.loader import SpreadFilterArgs
from controllerspread.constants import PLUGIN_NAME
from controllerspread.context import SchedulingContext, background
from controllerspread.errors import ControllerLookupError, PodListError, SchedulingCancelled
from controllerspread.predicate.census import PlacementCensus
from controllerspread.predicate.decision import Verdict, decide
from controllerspread.predicate.desired import DesiredCountResolver
from controllerspread.predicate.owners import resolve_controller
from controllerspread.predicate.policy import resolve_spread_policy
from controllerspread.stores.base import ControllerRepository, PodRepository

logger = logging.getLogger(__name__)

NAME = PLUGIN_NAME


class ControllerSpreadFilter:
    """Admits a pod onto a node only if its controller keeps the required spread."""

    def __init__(
        self,
        controllers: ControllerRepository,
        pods: PodRepository,
        args: Optional[SpreadFilterArgs] = None,
    ):
        self.args = args or SpreadFilterArgs()
        self.desired = DesiredCountResolver(controllers)
        self.census = PlacementCensus(pods)

    def name(self) -> str:
        return NAME

    def filter(
        self,
        pod: Any,
        node_name: str,
        ctx: Optional[SchedulingContext] = None,
    ) -> Verdict:
        """Evaluate ``pod`` against the candidate node ``node_name``.

        Returns:
            Success when the pod is not governed by a controller, when the
            controller cannot be found, when it wants at most one replica, or
            when the resulting spread is sufficient. Unschedulable when the
            spread would fall short. Error when pods cannot be listed or the
            context is done.
        """
        ctx = ctx or background()
        try:
            return self._filter(pod, node_name, ctx)
        except SchedulingCancelled as e:
            return Verdict.error(str(e))

    def _filter(self, pod: Any, node_name: str, ctx: SchedulingContext) -> Verdict:
        ref = resolve_controller(pod)
        if ref is None:
            return Verdict.admit()

        namespace = pod.metadata.namespace or "default"
        try:
            controller = self.desired.resolve(ref, namespace, ctx)
        except ControllerLookupError as e:
            logger.error(
                f"Could not retrieve {ref.kind.value} controller={ref.name} "
                f"namespace={namespace}: {e.cause}"
            )
            return Verdict.admit()

        policy = resolve_spread_policy(
            controller.desired_count,
            controller.annotations,
            annotation_key=self.args.min_hosts_annotation,
            default_min_hosts=self.args.default_min_hosts,
        )
        if not policy.enforced:
            return Verdict.admit()

        try:
            snapshot = self.census.compute(namespace, ref, ctx)
        except PodListError as e:
            logger.error(f"Error listing pods namespace={namespace}: {e.cause}")
            return Verdict.error(f"error listing pods: {e.cause}")

        if snapshot.sibling_count <= 1:
            return Verdict.admit()

        verdict = decide(policy.required_hosts, snapshot.nodes, node_name)
        if not verdict.is_success:
            logger.debug(
                "Rejecting scheduling due to minimum host spread constraint "
                f"candidateNode={node_name} currentSpread={snapshot.spread} "
                f"requiredHosts={policy.required_hosts} "
                f"controllerUID={ref.uid} controllerName={ref.name}"
            )
        return verdict


def new(
    args: Optional[Dict[str, Any]],
    controllers: ControllerRepository,
    pods: PodRepository,
) -> ControllerSpreadFilter:
    """Plugin factory: build a filter from raw plugin args.

    Raises:
        ConfigValidationError: If ``args`` is invalid.
    """
    return ControllerSpreadFilter(controllers, pods, SpreadFilterArgs.from_dict(args))


PLUGIN_REGISTRY: Dict[str, Callable[..., ControllerSpreadFilter]] = {NAME: new}
