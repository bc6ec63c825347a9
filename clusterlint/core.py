"""Check interface, the check registry and check selection."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Mapping

from clusterlint.diagnostic import Diagnostic

CHECK_ANNOTATION = "clusterlint.digitalocean.com/disabled-checks"
_SEPARATOR = ","


@dataclass
class ClusterObjects:
    """The Kubernetes objects fetched from a cluster.

    Every item is a mapping in the shape of the Kubernetes API, with
    ``metadata``, ``spec`` and so on.
    """

    nodes: list[dict[str, Any]] = field(default_factory=list)
    pods: list[dict[str, Any]] = field(default_factory=list)
    pod_templates: list[dict[str, Any]] = field(default_factory=list)
    persistent_volumes: list[dict[str, Any]] = field(default_factory=list)
    persistent_volume_claims: list[dict[str, Any]] = field(default_factory=list)
    config_maps: list[dict[str, Any]] = field(default_factory=list)
    services: list[dict[str, Any]] = field(default_factory=list)
    secrets: list[dict[str, Any]] = field(default_factory=list)
    service_accounts: list[dict[str, Any]] = field(default_factory=list)
    resource_quotas: list[dict[str, Any]] = field(default_factory=list)
    limit_ranges: list[dict[str, Any]] = field(default_factory=list)
    namespaces: list[dict[str, Any]] = field(default_factory=list)
    cron_jobs: list[dict[str, Any]] = field(default_factory=list)
    validating_webhook_configurations: list[dict[str, Any]] = field(default_factory=list)
    mutating_webhook_configurations: list[dict[str, Any]] = field(default_factory=list)
    system_namespace: dict[str, Any] | None = None


class Check(ABC):
    """A check that runs over a set of cluster objects.

    Subclasses set ``name``, ``groups`` and ``description`` and implement
    :meth:`run`. Checks are stateless, so two instances of the same class
    compare equal.
    """

    name: ClassVar[str]
    groups: ClassVar[tuple[str, ...]] = ()
    description: ClassVar[str] = ""

    @abstractmethod
    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        """Return the diagnostics this check finds in ``objects``."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class CheckNotFoundError(LookupError):
    """Raised when a check or group is not registered."""


def is_enabled(name: str, metadata: Mapping[str, Any] | None) -> bool:
    """Tell whether the object's annotations leave the named check enabled."""
    annotations = (metadata or {}).get("annotations") or {}
    value = annotations.get(CHECK_ANNOTATION)
    if value is None:
        return True
    return name not in value.split(_SEPARATOR)


_lock = threading.Lock()
_checks: dict[str, Check] = {}
_groups: dict[str, list[Check]] = {}


def register(check: Check) -> None:
    """Add a check to the registry under its name and groups."""
    with _lock:
        if check.name in _checks:
            raise ValueError(f"check named {check.name} already exists")
        _checks[check.name] = check
        for group in check.groups:
            _groups.setdefault(group, []).append(check)


def get(name: str) -> Check:
    """Return the registered check with the given name."""
    with _lock:
        try:
            return _checks[name]
        except KeyError:
            raise CheckNotFoundError(f"no check named {name}") from None


def list_checks() -> list[Check]:
    """Return every registered check, ordered by name."""
    with _lock:
        return sorted(_checks.values(), key=lambda c: c.name)


def list_groups() -> list[str]:
    """Return the names of all groups that hold at least one check."""
    with _lock:
        return sorted(_groups)


def get_group(name: str) -> list[Check]:
    """Return the checks in a group, ordered by name; empty if none."""
    with _lock:
        return sorted(_groups.get(name, ()), key=lambda c: c.name)


def get_groups(names: Iterable[str]) -> list[Check]:
    """Return the checks in any of the named groups, without repeats."""
    result: list[Check] = []
    seen: set[str] = set()
    for name in names:
        with _lock:
            if name not in _groups:
                raise CheckNotFoundError(f"group {name} not found")
        for check in get_group(name):
            if check.name not in seen:
                seen.add(check.name)
                result.append(check)
    return result


def _checks_not_in_groups(groups: list[str]) -> list[Check]:
    names = [group for group in list_groups() if group not in groups]
    return get_groups(names)


@dataclass
class CheckFilter:
    """Names of checks and groups to include or exclude when running checks."""

    include_groups: list[str] = field(default_factory=list)
    exclude_groups: list[str] = field(default_factory=list)
    include_checks: list[str] = field(default_factory=list)
    exclude_checks: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.include_groups = list(self.include_groups or ())
        self.exclude_groups = list(self.exclude_groups or ())
        self.include_checks = list(self.include_checks or ())
        self.exclude_checks = list(self.exclude_checks or ())
        if self.include_groups and self.exclude_groups:
            raise ValueError("cannot specify both include and exclude group conditions")
        if self.include_checks and self.exclude_checks:
            raise ValueError("cannot specify both include and exclude check conditions")

    def filter_checks(self) -> list[Check]:
        """Return the registered checks selected by this filter."""
        candidates = self._filter_groups()
        if self.include_checks:
            return [c for c in candidates if c.name in self.include_checks]
        if self.exclude_checks:
            return [c for c in candidates if c.name not in self.exclude_checks]
        return candidates

    def _filter_groups(self) -> list[Check]:
        if self.include_groups:
            return get_groups(self.include_groups)
        if self.exclude_groups:
            return _checks_not_in_groups(self.exclude_groups)
        return list_checks()