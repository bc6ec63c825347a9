"""Check for user-created objects in the default namespace."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from clusterlint.basic.images import _metadata, _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind

DEFAULT_NAMESPACE = "default"
SERVICE_ACCOUNT_TOKEN_TYPE = "kubernetes.io/service-account-token"

_Predicate = Optional[Callable[[dict[str, Any]], bool]]


def _user_service(item: dict[str, Any]) -> bool:
    return _metadata(item).get("name", "") != "kubernetes"


def _user_secret(item: dict[str, Any]) -> bool:
    return item.get("type", "") != SERVICE_ACCOUNT_TOKEN_TYPE


def _user_service_account(item: dict[str, Any]) -> bool:
    return _metadata(item).get("name", "") != "default"


class DefaultNamespaceCheck(Check):
    """Warns about user-created objects that live in the default namespace."""

    name = "default-namespace"
    groups = ("basic",)
    description = "Checks if there are any user created k8s objects in the default namespace."

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        # A predicate of None means every object of that kind is user-created.
        sources: tuple[tuple[Kind, Iterable[dict[str, Any]], _Predicate], ...] = (
            (Kind.POD, objects.pods, None),
            (Kind.POD_TEMPLATE, objects.pod_templates, None),
            (Kind.PERSISTENT_VOLUME_CLAIM, objects.persistent_volume_claims, None),
            (Kind.CONFIG_MAP, objects.config_maps, None),
            (Kind.SERVICE, objects.services, _user_service),
            (Kind.SECRET, objects.secrets, _user_secret),
            (Kind.SERVICE_ACCOUNT, objects.service_accounts, _user_service_account),
        )
        return [
            _report(item, "Avoid using the default namespace", kind)
            for kind, items, is_user_created in sources
            for item in items
            if _metadata(item).get("namespace", "") == DEFAULT_NAMESPACE
            and (is_user_created is None or is_user_created(item))
        ]


register(DefaultNamespaceCheck())