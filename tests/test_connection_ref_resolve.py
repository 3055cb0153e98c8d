from pulsar_operator.core.mapping.connection_ref import (
    ConnectionRefInfo,
    get_connection_namespace,
    resolve_connection_ref_info,
)
from pulsar_operator.core.resources.models import (
    ConnectionReference,
    ObjectMeta,
    PulsarConnection,
    PulsarPermission,
    PulsarTenant,
    PulsarTopic,
    TopicSpec,
)


def _topic(ref_name: str, ref_ns=None, obj_ns: str = "ns-a") -> PulsarTopic:
    return PulsarTopic(
        metadata=ObjectMeta(name="t1", namespace=obj_ns),
        spec=TopicSpec(connection_ref=ConnectionReference(name=ref_name, namespace=ref_ns)),
    )


def test_empty_reference_namespace_defaults_to_object_namespace():
    info = resolve_connection_ref_info(_topic("conn1", ""))
    assert info == ConnectionRefInfo(name="conn1", namespace="ns-a")


def test_missing_reference_namespace_defaults_to_object_namespace():
    info = resolve_connection_ref_info(_topic("conn1", None))
    assert info is not None
    assert info.namespace == "ns-a"


def test_cross_namespace_reference_is_honored():
    info = resolve_connection_ref_info(_topic("conn1", "ns-b", obj_ns="ns-a"))
    assert info == ConnectionRefInfo(name="conn1", namespace="ns-b")


def test_resolution_absent_without_reference():
    assert resolve_connection_ref_info(_topic("")) is None
    assert resolve_connection_ref_info(None) is None


def test_resolved_namespace_is_never_empty_for_namespaced_objects():
    for ref_ns in (None, "", "other"):
        info = resolve_connection_ref_info(_topic("conn1", ref_ns, obj_ns="home"))
        assert info is not None
        assert info.namespace


def test_effective_namespace_uses_reference_namespace():
    perm = PulsarPermission.model_validate(
        {
            "metadata": {"name": "p1", "namespace": "ns1"},
            "spec": {"connectionRef": {"name": "conn2", "namespace": "ns2"}},
        }
    )
    assert get_connection_namespace(perm) == "ns2"


def test_effective_namespace_falls_back_without_reference():
    tenant = PulsarTenant(metadata=ObjectMeta(name="tn", namespace="tenants"))
    assert get_connection_namespace(tenant) == "tenants"

    conn = PulsarConnection(metadata=ObjectMeta(name="c", namespace="conns"))
    assert get_connection_namespace(conn) == "conns"


def test_effective_namespace_of_non_resource_is_empty():
    assert get_connection_namespace(None) == ""
    assert get_connection_namespace(object()) == ""
