"""Check for persistent volumes that no claim is bound to."""

from __future__ import annotations

from clusterlint.basic.images import _metadata, _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind


class UnusedPVCheck(Check):
    """Warns about persistent volumes without a claim reference."""

    name = "unused-pv"
    groups = ("basic",)
    description = "Check if there are unused persistent volumes in the cluster"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        return [
            _report(
                volume,
                f"Unused Persistent Volume '{_metadata(volume).get('name', '')}'.",
                Kind.PERSISTENT_VOLUME,
            )
            for volume in objects.persistent_volumes
            if (volume.get("spec") or {}).get("claimRef") is None
        ]


register(UnusedPVCheck())