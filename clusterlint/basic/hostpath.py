"""Check for pods that mount host paths."""

from __future__ import annotations

from clusterlint.basic.images import _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind


class HostPathCheck(Check):
    """Warns about every hostPath volume in a pod."""

    name = "hostpath-volume"
    groups = ("basic", "doks")
    description = "Check if there are pods using hostpath volumes"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        return [
            _report(pod, f"Avoid using hostpath for volume '{volume.get('name', '')}'.", Kind.POD)
            for pod in objects.pods
            for volume in (pod.get("spec") or {}).get("volumes") or []
            if volume.get("hostPath") is not None
        ]


register(HostPathCheck())