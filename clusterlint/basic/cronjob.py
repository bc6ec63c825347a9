"""Check for cron jobs that allow concurrent runs."""

from __future__ import annotations

from clusterlint.basic.images import _report
from clusterlint.core import Check, ClusterObjects, register
from clusterlint.diagnostic import Diagnostic, Kind

ALLOW_CONCURRENT = "Allow"
FORBID_CONCURRENT = "Forbid"
REPLACE_CONCURRENT = "Replace"


class CronJobConcurrencyCheck(Check):
    """Warns about cron jobs whose concurrency policy is ``Allow``."""

    name = "cronjob-concurrency"
    groups = ("basic",)
    description = "Check if any cronjobs have a concurrency policy of 'Allow'"

    def run(self, objects: ClusterObjects) -> list[Diagnostic]:
        message = (
            f"CronJob has a concurrency policy of `{ALLOW_CONCURRENT}`. "
            f"Prefer to use `{FORBID_CONCURRENT}` or `{REPLACE_CONCURRENT}`"
        )
        return [
            _report(cronjob, message, Kind.CRON_JOB)
            for cronjob in objects.cron_jobs
            if (cronjob.get("spec") or {}).get("concurrencyPolicy", "") == ALLOW_CONCURRENT
        ]


register(CronJobConcurrencyCheck())