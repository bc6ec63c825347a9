"""Loads every built-in check into the registry."""

from __future__ import annotations

# These imports register their checks as a side effect.
from clusterlint.basic import (  # noqa: F401
    bare_pods,
    cronjob,
    hostpath,
    images,
    namespace,
    pod_status,
    resources,
    unused_config_map,
    unused_pv,
    unused_pvc,
    unused_secrets,
    webhook,
)
from clusterlint.containerd import github_registry  # noqa: F401
from clusterlint.core import Check, list_checks


def load_all() -> list[Check]:
    """Return every built-in check, ordered by name, once all are registered."""
    return list_checks()