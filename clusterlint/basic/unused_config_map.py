"""Check for config maps that nothing references."""

from __future__ import annotations

from typing import Any, Iterator

from clusterlint.basic.images import _containers, _metadata, _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind

_Identifier = tuple[str, str]


def _referenced_names(pod: dict[str, Any]) -> Iterator[str]:
    for volume in (pod.get("spec") or {}).get("volumes") or []:
        projected = volume.get("projected") or {}
        sources = [volume, *(projected.get("sources") or [])]
        yield from (s["configMap"].get("name", "") for s in sources if s.get("configMap") is not None)
    for container in _containers(pod):
        for env_from in container.get("envFrom") or []:
            if env_from.get("configMapRef") is not None:
                yield env_from["configMapRef"].get("name", "")
        for env in container.get("env") or []:
            key_ref = (env.get("valueFrom") or {}).get("configMapKeyRef")
            if key_ref is not None:
                yield key_ref.get("name", "")


def _node_references(node: dict[str, Any]) -> Iterator[_Identifier]:
    source = (node.get("spec") or {}).get("configSource") or {}
    config_map = source.get("configMap")
    if config_map is not None:
        yield config_map.get("name", ""), config_map.get("namespace", "")


class UnusedConfigMapCheck(Check):
    """Warns about config maps not used by any pod or node."""

    name = "unused-config-map"
    groups = ("basic",)
    description = "Checks if there are unused config maps in the cluster"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        used: set[_Identifier] = set()
        for pod in objects.pods:
            namespace = _metadata(pod).get("namespace", "")
            used.update((name, namespace) for name in _referenced_names(pod))
        for node in objects.nodes:
            used.update(_node_references(node))

        return [
            _report(config_map, "Unused config map", Kind.CONFIG_MAP)
            for config_map in objects.config_maps
            if (_metadata(config_map).get("name", ""), _metadata(config_map).get("namespace", ""))
            not in used
        ]


register(UnusedConfigMapCheck())