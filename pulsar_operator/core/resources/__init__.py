from .models import (
    API_VERSION,
    ConnectionReference,
    DependentResource,
    HasConnectionReference,
    ObjectMeta,
    PulsarConnection,
    PulsarFunction,
    PulsarGeoReplication,
    PulsarNamespace,
    PulsarNSIsolationPolicy,
    PulsarPackage,
    PulsarPermission,
    PulsarSink,
    PulsarSource,
    PulsarTenant,
    PulsarTopic,
    Resource,
    register_kind,
)
from .decode import ResourceDecodeError, decode_resource, references_connection, supported_kinds

__all__ = [
    "API_VERSION",
    "ConnectionReference",
    "DependentResource",
    "HasConnectionReference",
    "ObjectMeta",
    "PulsarConnection",
    "PulsarFunction",
    "PulsarGeoReplication",
    "PulsarNamespace",
    "PulsarNSIsolationPolicy",
    "PulsarPackage",
    "PulsarPermission",
    "PulsarSink",
    "PulsarSource",
    "PulsarTenant",
    "PulsarTopic",
    "Resource",
    "ResourceDecodeError",
    "decode_resource",
    "references_connection",
    "register_kind",
    "supported_kinds",
]
