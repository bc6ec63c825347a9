"""Check that containers declare resource requests and limits."""

from __future__ import annotations

from typing import Any

from clusterlint.basic.images import _containers, _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind


def _has_requirements(container: dict[str, Any]) -> bool:
    resources = container.get("resources") or {}
    return bool(resources.get("limits")) or bool(resources.get("requests"))


class ResourceRequirementsCheck(Check):
    """Warns about containers with neither resource requests nor limits."""

    name = "resource-requirements"
    groups = ("basic", "doks")
    description = "Check if pods have resource requirements set"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        return [
            _report(
                pod,
                "Set resource requests and limits for container "
                f"`{container.get('name', '')}` to prevent resource contention",
                Kind.POD,
            )
            for pod in objects.pods
            for container in _containers(pod)
            if not _has_requirements(container)
        ]


register(ResourceRequirementsCheck())