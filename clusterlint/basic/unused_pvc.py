"""Check for persistent volume claims that no pod mounts."""

from __future__ import annotations

from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind, Severity


class UnusedClaimCheck(Check):
    """Warns about persistent volume claims not referenced by any pod volume."""

    name = "unused-pvc"
    groups = ("basic",)
    description = "Check if there are unused persistent volume claims in the cluster"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        used: set[tuple[str, str]] = set()
        for pod in objects.pods:
            namespace = (pod.get("metadata") or {}).get("namespace", "")
            for volume in (pod.get("spec") or {}).get("volumes") or []:
                claim = volume.get("persistentVolumeClaim")
                if claim is not None:
                    used.add((claim.get("claimName", ""), namespace))

        diagnostics: list[Diagnostic] = []
        for claim in objects.persistent_volume_claims:
            meta = claim.get("metadata") or {}
            if (meta.get("name", ""), meta.get("namespace", "")) in used:
                continue
            diagnostics.append(
                Diagnostic(
                    severity=Severity.WARNING,
                    message="Unused persistent volume claim",
                    kind=Kind.PERSISTENT_VOLUME_CLAIM,
                    object=meta,
                    owners=list(meta.get("ownerReferences") or []),
                )
            )
        return diagnostics


register(UnusedClaimCheck())