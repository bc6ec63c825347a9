"""Diagnostics reported by checks, with their severities and object kinds."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """How urgently a diagnostic should be acted on."""

    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"

    def __str__(self) -> str:
        return self.value


class Kind(str, Enum):
    """The kind of Kubernetes object a diagnostic is about."""

    POD = "pod"
    POD_TEMPLATE = "pod template"
    PERSISTENT_VOLUME_CLAIM = "persistent volume claim"
    CONFIG_MAP = "config map"
    SERVICE = "service"
    SECRET = "secret"
    SERVICE_ACCOUNT = "service account"
    PERSISTENT_VOLUME = "persistent volume"
    VALIDATING_WEBHOOK_CONFIGURATION = "validating webhook configuration"
    MUTATING_WEBHOOK_CONFIGURATION = "mutating webhook configuration"
    NODE = "node"
    CRON_JOB = "cron job"

    def __str__(self) -> str:
        return self.value


@dataclass(kw_only=True)
class Diagnostic:
    """A single problem found by a check.

    ``object`` is the metadata mapping of the offending object and ``owners``
    its owner references.
    """

    severity: Severity
    message: str
    kind: Kind
    object: dict[str, Any] | None = None
    owners: list[dict[str, Any]] = field(default_factory=list)
    details: str = ""
    check: str = ""

    def __str__(self) -> str:
        meta = self.object or {}
        namespace = meta.get("namespace", "")
        name = meta.get("name", "")
        return f"[{self.severity}] {namespace}/{self.kind}/{name}: {self.message}"


@dataclass
class DiagnosticFilter:
    """Conditions used to select diagnostics; ``None`` means no restriction."""

    severity: Severity | None = None