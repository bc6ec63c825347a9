"""Checks on the image references used by pod containers, and shared helpers."""

from __future__ import annotations

from typing import Any, Callable, Iterator

from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind, Severity
from clusterlint.reference import (
    InvalidReferenceError,
    Reference,
    parse_any_reference,
    parse_normalized_named,
    tag_name_only,
)


def _metadata(item: dict[str, Any]) -> dict[str, Any]:
    return item.get("metadata") or {}


def _report(
    item: dict[str, Any],
    message: str,
    kind: Kind,
    severity: Severity = Severity.WARNING,
) -> Diagnostic:
    """Build a diagnostic about ``item``, carrying its metadata and owners."""
    meta = _metadata(item)
    return Diagnostic(
        severity=severity,
        message=message,
        kind=kind,
        object=meta,
        owners=list(meta.get("ownerReferences") or []),
    )


def _containers(pod: dict[str, Any]) -> Iterator[dict[str, Any]]:
    spec = pod.get("spec") or {}
    yield from spec.get("containers") or []
    yield from spec.get("initContainers") or []


def _check_images(
    objects: ClusterObjects,
    parse: Callable[[str], Reference],
    unparsable: str,
    is_flagged: Callable[[str, Reference], bool],
    flagged: str,
) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for pod in objects.pods:
        for container in _containers(pod):
            image = container.get("image", "")
            container_name = container.get("name", "")
            try:
                reference = parse(image)
            except InvalidReferenceError:
                diagnostics.append(_report(pod, unparsable.format(container_name), Kind.POD))
                continue
            if is_flagged(image, reference):
                diagnostics.append(_report(pod, flagged.format(container_name), Kind.POD))
    return diagnostics


class FullyQualifiedImageCheck(Check):
    """Warns about containers whose image names are not fully qualified."""

    name = "fully-qualified-image"
    groups = ("basic",)
    description = "Checks if containers have fully qualified image names"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        return _check_images(
            objects,
            parse_any_reference,
            "Malformed image name for container '{}'",
            lambda image, reference: str(reference) != image,
            "Use fully qualified image for container '{}'",
        )


class LatestTagCheck(Check):
    """Warns about containers whose images use the ``latest`` tag, explicitly or not."""

    name = "latest-tag"
    groups = ("basic",)
    description = "Checks if there are pods with container images having latest tag"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        return _check_images(
            objects,
            parse_normalized_named,
            "Image name for container '{}' could not be parsed",
            lambda image, reference: str(tag_name_only(reference)).endswith(":latest"),
            "Avoid using latest tag for container '{}'",
        )


register(FullyQualifiedImageCheck())
register(LatestTagCheck())