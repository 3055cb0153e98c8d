import pytest
from fastapi.testclient import TestClient

from pulsar_operator.api.main import app
from pulsar_operator.core.observability.metrics import reset_metrics


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def topic_manifest():
    return {
        "apiVersion": "resource.streamnative.io/v1alpha1",
        "kind": "PulsarTopic",
        "metadata": {"name": "t1", "namespace": "ns1"},
        "spec": {
            "name": "persistent://public/default/t1",
            "partitions": 4,
            "connectionRef": {"name": "conn1"},
        },
    }
