import pytest

from clusterlint.basic.hostpath import HostPathCheck
from clusterlint.core import ClusterObjects, get, get_group
from clusterlint.diagnostic import Diagnostic, Kind, Severity


def _objects(spec=None):
    pod = {"kind": "Pod", "apiVersion": "v1", "metadata": {"name": "pod_foo", "namespace": "k8s"}}
    if spec is not None:
        pod["spec"] = spec
    return ClusterObjects(pods=[pod])


def _warning(volume):
    return Diagnostic(
        severity=Severity.WARNING,
        message=f"Avoid using hostpath for volume '{volume}'.",
        kind=Kind.POD,
        object={"name": "pod_foo", "namespace": "k8s"},
        owners=[],
    )


def test_registration():
    assert get("hostpath-volume") == HostPathCheck()
    assert HostPathCheck() in get_group("basic")
    assert HostPathCheck() in get_group("doks")


@pytest.mark.parametrize(
    "objects",
    [
        ClusterObjects(),
        _objects(),
        _objects({"containers": [{"name": "bar", "image": "docker.io/nginx:foo"}]}),
        _objects({"volumes": [{"name": "bar", "gitRepo": {"repository": "boo"}}]}),
    ],
    ids=["no-pods", "no-spec", "no-volumes", "other-volume"],
)
def test_no_warnings(objects):
    assert HostPathCheck().run(objects) == []


@pytest.mark.parametrize(
    "volumes, expected",
    [
        ([{"name": "bar", "hostPath": {"path": "/tmp"}}], ["bar"]),
        (
            [
                {"name": "one", "hostPath": {"path": "/tmp"}},
                {"name": "two", "emptyDir": {}},
                {"name": "three", "hostPath": {"path": "/var"}},
            ],
            ["one", "three"],
        ),
    ],
)
def test_hostpath_volumes_reported(volumes, expected):
    result = HostPathCheck().run(_objects({"volumes": volumes}))
    assert result == [_warning(name) for name in expected]