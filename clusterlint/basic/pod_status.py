"""Check for pods in an unhealthy phase."""

from __future__ import annotations

from clusterlint.basic.images import _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind

_UNHEALTHY_PHASES = frozenset({"Failed", "Unknown"})


def _phase(pod: dict) -> str:
    return (pod.get("status") or {}).get("phase", "")


class PodStatusCheck(Check):
    """Warns about pods whose phase is ``Failed`` or ``Unknown``."""

    name = "pod-state"
    groups = ("workload-health",)
    description = "Check if there are unhealthy pods in the cluster"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        return [
            _report(
                pod,
                f"Unhealthy pod. State: `{_phase(pod)}`. "
                "Pod state should be `Running`, `Pending` or `Succeeded`.",
                Kind.POD,
            )
            for pod in objects.pods
            if _phase(pod) in _UNHEALTHY_PHASES
        ]


register(PodStatusCheck())