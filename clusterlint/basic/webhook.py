"""Check that admission webhooks point at services that exist."""

from __future__ import annotations

from typing import Any, Iterable

from clusterlint.basic.images import _metadata, _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind, Severity


def _namespace_exists(namespaces: Iterable[dict[str, Any]], namespace: str) -> bool:
    return any(_metadata(ns).get("name", "") == namespace for ns in namespaces)


def _service_exists(services: Iterable[dict[str, Any]], name: str, namespace: str) -> bool:
    return any(
        (_metadata(svc).get("name", ""), _metadata(svc).get("namespace", "")) == (name, namespace)
        for svc in services
    )


class WebhookCheck(Check):
    """Reports webhooks configured against a missing service or namespace."""

    name = "admission-controller-webhook"
    groups = ("basic",)
    description = "Check for admission control webhooks"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        sources = (
            ("Validating", Kind.VALIDATING_WEBHOOK_CONFIGURATION,
             objects.validating_webhook_configurations),
            ("Mutating", Kind.MUTATING_WEBHOOK_CONFIGURATION,
             objects.mutating_webhook_configurations),
        )
        for label, kind, configurations in sources:
            for config in configurations:
                for webhook in config.get("webhooks") or []:
                    service = (webhook.get("clientConfig") or {}).get("service")
                    if service is None:
                        continue
                    namespace = service.get("namespace", "")
                    if not _namespace_exists(objects.namespaces, namespace):
                        target = "a service in a namespace that does not exist"
                    elif not _service_exists(objects.services, service.get("name", ""), namespace):
                        target = "a service that does not exist"
                    else:
                        continue
                    message = (
                        f"{label} webhook {webhook.get('name', '')} is configured against {target}."
                    )
                    diagnostics.append(_report(config, message, kind, Severity.ERROR))
        return diagnostics


register(WebhookCheck())