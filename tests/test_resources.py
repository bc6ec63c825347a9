import pytest

from clusterlint.basic.resources import ResourceRequirementsCheck
from clusterlint.core import ClusterObjects, get
from clusterlint.diagnostic import Diagnostic, Kind, Severity

WARNING = Diagnostic(
    severity=Severity.WARNING,
    message="Set resource requests and limits for container `bar` to prevent resource contention",
    kind=Kind.POD,
    object={"name": "pod_foo", "namespace": "k8s"},
    owners=[],
)
REQUIREMENTS = {"limits": {"cpu": "500m"}, "requests": {"cpu": "1"}}


def _objects(spec=None):
    pod = {"kind": "Pod", "apiVersion": "v1", "metadata": {"name": "pod_foo", "namespace": "k8s"}}
    if spec is not None:
        pod["spec"] = spec
    return ClusterObjects(pods=[pod])


def _bar(resources=None):
    container = {"name": "bar", "image": "alpine"}
    if resources is not None:
        container["resources"] = resources
    return [container]


def test_meta_and_registration():
    check = ResourceRequirementsCheck()
    assert check.name == "resource-requirements"
    assert list(check.groups) == ["basic", "doks"]
    assert check.description
    assert get("resource-requirements") == check


@pytest.mark.parametrize(
    "spec, expected",
    [
        (None, []),
        ({"containers": _bar()}, [WARNING]),
        ({"initContainers": _bar()}, [WARNING]),
        ({"containers": _bar(REQUIREMENTS), "initContainers": _bar(REQUIREMENTS)}, []),
        ({"containers": _bar({"limits": {}, "requests": {}})}, [WARNING]),
        ({"containers": _bar({"limits": {"memory": "64Mi"}})}, []),
    ],
    ids=[
        "no-containers",
        "container-unset",
        "init-container-unset",
        "requirements-set",
        "empty-maps",
        "limits-only",
    ],
)
def test_resource_requirements(spec, expected):
    assert ResourceRequirementsCheck().run(_objects(spec)) == expected