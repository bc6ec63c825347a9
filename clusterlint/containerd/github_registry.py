"""Check for images hosted on a registry that containerd cannot pull from."""

from __future__ import annotations

from typing import Any, Iterator

from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind, Severity
from clusterlint.reference import InvalidReferenceError, parse_normalized_named

UNSUPPORTED_DOMAIN = "docker.pkg.github.com"


def _containers(pod: dict[str, Any]) -> Iterator[dict[str, Any]]:
    spec = pod.get("spec") or {}
    yield from spec.get("containers") or []
    yield from spec.get("initContainers") or []


class DomainNameCheck(Check):
    """Reports containers whose images come from docker.pkg.github.com."""

    name = "docker-pkg-github-com-registry"
    groups = ("containerd", "doks")
    description = (
        "Checks if there are pods with container images that are hosted at the "
        "docker.pkg.github.com registry"
    )

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for pod in objects.pods:
            meta = pod.get("metadata") or {}
            owners = list(meta.get("ownerReferences") or [])
            for container in _containers(pod):
                container_name = container.get("name", "")
                try:
                    reference = parse_normalized_named(container.get("image", ""))
                except InvalidReferenceError:
                    diagnostics.append(
                        Diagnostic(
                            severity=Severity.WARNING,
                            message=f"Image name for container '{container_name}' "
                            "could not be parsed",
                            kind=Kind.POD,
                            object=meta,
                            owners=owners,
                        )
                    )
                    continue
                if reference.domain == UNSUPPORTED_DOMAIN:
                    diagnostics.append(
                        Diagnostic(
                            severity=Severity.ERROR,
                            message="containerd can't pull images from "
                            f"{UNSUPPORTED_DOMAIN}, used by container '{container_name}'",
                            kind=Kind.POD,
                            object=meta,
                            owners=owners,
                        )
                    )
        return diagnostics


register(DomainNameCheck())