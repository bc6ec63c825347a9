"""Check for pods that no controller owns."""

from __future__ import annotations

from typing import Any, Iterable

from clusterlint.basic.images import _metadata, _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind


def _is_static_pod(pod_name: str, nodes: Iterable[dict[str, Any]]) -> bool:
    # The kubelet names static pods after the node they run on.
    return any(
        pod_name.endswith("-" + _metadata(node).get("name", "").lower()) for node in nodes
    )


class BarePodCheck(Check):
    """Warns about pods without owner references, static pods excepted."""

    name = "bare-pods"
    groups = ("basic", "doks")
    description = "Check if there are bare pods in the cluster"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        return [
            _report(pod, "Avoid using bare pods in clusters", Kind.POD)
            for pod in objects.pods
            if not _metadata(pod).get("ownerReferences")
            and not _is_static_pod(_metadata(pod).get("name", ""), objects.nodes)
        ]


register(BarePodCheck())