import pytest

from clusterlint.basic.cronjob import CronJobConcurrencyCheck
from clusterlint.core import ClusterObjects, get, get_group
from clusterlint.diagnostic import Diagnostic, Kind, Severity


def _objects(policy):
    return ClusterObjects(
        cron_jobs=[
            {
                "kind": "CronJob",
                "apiVersion": "batch/v1beta1",
                "metadata": {"name": "cronjob_foo"},
                "spec": {"concurrencyPolicy": policy},
            }
        ]
    )


def test_registration():
    assert get("cronjob-concurrency") == CronJobConcurrencyCheck()
    assert CronJobConcurrencyCheck() in get_group("basic")


@pytest.mark.parametrize("policy", ["Forbid", "Replace", ""])
def test_other_policies_pass(policy):
    assert CronJobConcurrencyCheck().run(_objects(policy)) == []


def test_allow_policy_warns():
    assert CronJobConcurrencyCheck().run(_objects("Allow")) == [
        Diagnostic(
            severity=Severity.WARNING,
            message="CronJob has a concurrency policy of `Allow`. Prefer to use `Forbid` or `Replace`",
            kind=Kind.CRON_JOB,
            object={"name": "cronjob_foo"},
            owners=[],
        )
    ]


def test_no_cronjobs():
    assert CronJobConcurrencyCheck().run(ClusterObjects()) == []