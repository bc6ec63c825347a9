import pytest

from clusterlint.basic.bare_pods import BarePodCheck
from clusterlint.core import ClusterObjects, get, get_group
from clusterlint.diagnostic import Diagnostic, Kind, Severity


def _pod(name):
    return {"kind": "Pod", "apiVersion": "v1", "metadata": {"name": name, "namespace": "k8s"}}


def _node(name):
    return {"kind": "Node", "apiVersion": "v1", "metadata": {"name": name}}


def _with_refs(objects):
    for pod in objects.pods:
        pod["metadata"]["ownerReferences"] = [{"name": "Deployment", "apiVersion": "apps/v1"}]
    return objects


def _warning(name):
    return Diagnostic(
        severity=Severity.WARNING,
        message="Avoid using bare pods in clusters",
        kind=Kind.POD,
        object={"name": name, "namespace": "k8s"},
        owners=[],
    )


def test_registration():
    assert get("bare-pods") == BarePodCheck()
    assert BarePodCheck() in get_group("basic")
    assert BarePodCheck() in get_group("doks")


@pytest.mark.parametrize(
    "objects, expected",
    [
        (ClusterObjects(), []),
        (_with_refs(ClusterObjects(pods=[_pod("pod_foo")])), []),
        (_with_refs(ClusterObjects(pods=[_pod("pod_1"), _pod("pod_2")])), []),
        (ClusterObjects(pods=[_pod("pod_foo")]), [_warning("pod_foo")]),
        (
            ClusterObjects(pods=[_pod("pod_1"), _pod("pod_2")]),
            [_warning("pod_1"), _warning("pod_2")],
        ),
        (ClusterObjects(pods=[_pod("pod_foo-node_a")], nodes=[_node("node_a")]), []),
        (
            ClusterObjects(
                pods=[_pod("pod_foo-node_a"), _pod("pod_foo-node_b")],
                nodes=[_node("node_a"), _node("node_b")],
            ),
            [],
        ),
    ],
    ids=[
        "no pods",
        "pod has owner ref",
        "multiple pods with owner refs",
        "pod has no owner ref",
        "multiple pods with no owner ref",
        "static pod",
        "multiple static pods",
    ],
)
def test_bare_pods(objects, expected):
    assert BarePodCheck().run(objects) == expected


def test_static_pod_matches_lowercased_node_name():
    objects = ClusterObjects(pods=[_pod("pod_foo-node_a")], nodes=[_node("NODE_A")])
    assert BarePodCheck().run(objects) == []


def test_pod_on_other_node_is_bare():
    objects = ClusterObjects(pods=[_pod("pod_foo-node_a")], nodes=[_node("node_b")])
    assert BarePodCheck().run(objects) == [_warning("pod_foo-node_a")]