import pytest

from pulsar_operator.core.resources.decode import (
    ResourceDecodeError,
    decode_resource,
    references_connection,
    supported_kinds,
)
from pulsar_operator.core.resources.models import PulsarFunction, PulsarTopic


def test_decode_known_kind(topic_manifest):
    obj = decode_resource(topic_manifest)
    assert isinstance(obj, PulsarTopic)
    assert obj.name == "t1"
    assert obj.namespace == "ns1"
    assert obj.spec.partitions == 4
    assert obj.spec.connection_ref.name == "conn1"
    assert obj.spec.connection_ref.namespace is None


def test_decode_keeps_unknown_spec_fields(topic_manifest):
    topic_manifest["spec"]["geoReplicationRefs"] = [{"name": "geo"}]
    obj = decode_resource(topic_manifest)
    assert obj.to_manifest()["spec"]["geoReplicationRefs"] == [{"name": "geo"}]


def test_decode_function_spec_namespace_alias():
    obj = decode_resource(
        {
            "kind": "PulsarFunction",
            "metadata": {"name": "fn", "namespace": "k8s-ns"},
            "spec": {
                "name": "fn",
                "tenant": "public",
                "namespace": "default",
                "connectionRef": {"name": "conn1"},
            },
        }
    )
    assert isinstance(obj, PulsarFunction)
    assert obj.spec.namespace_name == "default"
    assert obj.namespace == "k8s-ns"


def test_decode_unknown_kind_returns_none():
    assert decode_resource({"kind": "ConfigMap", "metadata": {"name": "x"}}) is None


@pytest.mark.parametrize("manifest", [{}, {"kind": ""}, {"kind": 7}])
def test_decode_missing_kind_raises(manifest):
    with pytest.raises(ResourceDecodeError):
        decode_resource(manifest)


def test_decode_not_a_mapping_raises():
    with pytest.raises(ResourceDecodeError):
        decode_resource(["PulsarTopic"])


def test_decode_invalid_spec_raises_with_details():
    with pytest.raises(ResourceDecodeError) as exc_info:
        decode_resource({"kind": "PulsarTopic", "spec": {"partitions": "many"}})
    err = exc_info.value
    assert err.kind == "PulsarTopic"
    assert err.errors
    assert isinstance(err, ValueError)


def test_supported_kinds_lists_all_registered():
    kinds = supported_kinds()
    assert kinds == sorted(kinds)
    assert len(kinds) == 11
    assert "PulsarConnection" in kinds
    assert "PulsarNSIsolationPolicy" in kinds


def test_references_connection():
    assert references_connection("PulsarTopic") is True
    assert references_connection("PulsarConnection") is False
    assert references_connection("Deployment") is False


def test_decode_null_connection_ref_is_unset(topic_manifest):
    topic_manifest["spec"]["connectionRef"] = None
    obj = decode_resource(topic_manifest)
    assert isinstance(obj, PulsarTopic)
    assert obj.spec.connection_ref.name == ""
    assert obj.get_connection_ref().namespace is None


def test_decode_null_spec_is_empty(topic_manifest):
    topic_manifest["spec"] = None
    obj = decode_resource(topic_manifest)
    assert isinstance(obj, PulsarTopic)
    assert obj.spec.connection_ref.name == ""
