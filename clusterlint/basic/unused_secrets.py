"""Check for secrets that nothing references."""

from __future__ import annotations

from typing import Any, Iterator

from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind, Severity

SERVICE_ACCOUNT_TOKEN_TYPE = "kubernetes.io/service-account-token"

_Identifier = tuple[str, str]


def _container_references(pod: dict[str, Any], namespace: str) -> Iterator[_Identifier]:
    spec = pod.get("spec") or {}
    for key in ("containers", "initContainers"):
        for container in spec.get(key) or []:
            for env_from in container.get("envFrom") or []:
                ref = env_from.get("secretRef")
                if ref is not None:
                    yield ref.get("name", ""), namespace
            for env in container.get("env") or []:
                key_ref = (env.get("valueFrom") or {}).get("secretKeyRef")
                if key_ref is not None:
                    yield key_ref.get("name", ""), namespace


def _pod_references(pod: dict[str, Any]) -> Iterator[_Identifier]:
    namespace = (pod.get("metadata") or {}).get("namespace", "")
    spec = pod.get("spec") or {}
    for volume in spec.get("volumes") or []:
        source = volume.get("secret")
        if source is not None:
            yield source.get("secretName", ""), namespace
        projected = volume.get("projected")
        if projected is not None:
            for projection in projected.get("sources") or []:
                source = projection.get("secret")
                if source is not None:
                    yield source.get("name", ""), namespace
    for pull_ref in spec.get("imagePullSecrets") or []:
        yield pull_ref.get("name", ""), namespace
    yield from _container_references(pod, namespace)


def _service_account_references(account: dict[str, Any]) -> Iterator[_Identifier]:
    namespace = (account.get("metadata") or {}).get("namespace", "")
    for pull_ref in account.get("imagePullSecrets") or []:
        yield pull_ref.get("name", ""), namespace
    for ref in account.get("secrets") or []:
        yield ref.get("name", ""), namespace


class UnusedSecretCheck(Check):
    """Warns about secrets used by no pod or service account.

    Service account tokens are ignored.
    """

    name = "unused-secret"
    groups = ("basic",)
    description = (
        "Checks if there are unused secrets in the cluster. Ignores service account tokens"
    )

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        used: set[_Identifier] = set()
        for pod in objects.pods:
            used.update(_pod_references(pod))
        for account in objects.service_accounts:
            used.update(_service_account_references(account))

        diagnostics: list[Diagnostic] = []
        for item in objects.secrets:
            if item.get("type", "") == SERVICE_ACCOUNT_TOKEN_TYPE:
                continue
            meta = item.get("metadata") or {}
            if (meta.get("name", ""), meta.get("namespace", "")) in used:
                continue
            diagnostics.append(
                Diagnostic(
                    severity=Severity.WARNING,
                    message="Unused secret",
                    kind=Kind.SECRET,
                    object=meta,
                    owners=list(meta.get("ownerReferences") or []),
                )
            )
        return diagnostics


register(UnusedSecretCheck())