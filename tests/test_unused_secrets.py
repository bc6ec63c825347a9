import pytest

from clusterlint.basic.unused_secrets import UnusedSecretCheck
from clusterlint.core import ClusterObjects, get
from clusterlint.diagnostic import Diagnostic, Kind, Severity

ITEM_NAME = "secret"
NAMED_REF = {"name": ITEM_NAME}
VOLUME_SOURCE = {"secretName": ITEM_NAME}


def _objects(pod_spec=None, service_accounts=None, item_type=None):
    pod = {"kind": "Pod", "apiVersion": "v1", "metadata": {"name": "pod_foo", "namespace": "k8s"}}
    if pod_spec is not None:
        pod["spec"] = pod_spec
    item = {"kind": "Secret", "metadata": {"name": ITEM_NAME, "namespace": "k8s"}}
    if item_type is not None:
        item["type"] = item_type
    return ClusterObjects(
        pods=[pod],
        service_accounts=list(service_accounts or []),
        secrets=[item],
    )


def _unused():
    return [
        Diagnostic(
            severity=Severity.WARNING,
            message="Unused secret",
            kind=Kind.SECRET,
            object={"name": ITEM_NAME, "namespace": "k8s"},
            owners=[],
        )
    ]


def test_meta():
    check = UnusedSecretCheck()
    assert check.name == "unused-secret"
    assert list(check.groups) == ["basic"]
    assert "service account tokens" in check.description


def test_registration():
    assert get("unused-secret") == UnusedSecretCheck()


def test_no_secrets():
    assert UnusedSecretCheck().run(ClusterObjects()) == []


def test_unused_secret_is_reported():
    assert UnusedSecretCheck().run(_objects()) == _unused()


@pytest.mark.parametrize(
    "pod_spec",
    [
        {"volumes": [{"name": "bar", "secret": VOLUME_SOURCE}]},
        {
            "volumes": [
                {"name": "bar", "projected": {"sources": [{"secret": NAMED_REF}]}}
            ]
        },
        {"imagePullSecrets": [NAMED_REF]},
        {"containers": [{"name": "c", "envFrom": [{"secretRef": NAMED_REF}]}]},
        {"initContainers": [{"name": "c", "envFrom": [{"secretRef": NAMED_REF}]}]},
        {
            "containers": [
                {
                    "name": "c",
                    "env": [{"name": "v", "valueFrom": {"secretKeyRef": NAMED_REF}}],
                }
            ]
        },
    ],
)
def test_pod_references_mark_secret_used(pod_spec):
    assert UnusedSecretCheck().run(_objects(pod_spec=pod_spec)) == []


@pytest.mark.parametrize(
    "account",
    [
        {"metadata": {"name": "sa", "namespace": "k8s"}, "imagePullSecrets": [NAMED_REF]},
        {"metadata": {"name": "sa", "namespace": "k8s"}, "secrets": [NAMED_REF]},
    ],
)
def test_service_account_references_mark_secret_used(account):
    assert UnusedSecretCheck().run(_objects(service_accounts=[account])) == []


def test_service_account_tokens_are_ignored():
    objects = _objects(item_type="kubernetes.io/service-account-token")
    assert UnusedSecretCheck().run(objects) == []


def test_reference_from_other_namespace_does_not_count():
    objects = _objects(pod_spec={"imagePullSecrets": [NAMED_REF]})
    objects.pods[0]["metadata"]["namespace"] = "other"
    assert UnusedSecretCheck().run(objects) == _unused()


def test_owners_are_reported():
    objects = _objects()
    owners = [{"name": "Deployment", "apiVersion": "apps/v1"}]
    objects.secrets[0]["metadata"]["ownerReferences"] = owners
    diagnostics = UnusedSecretCheck().run(objects)
    assert [d.owners for d in diagnostics] == [owners]