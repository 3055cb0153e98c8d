from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator


API_VERSION = "resource.streamnative.io/v1alpha1"

LifecyclePolicy = Literal["CleanUpAfterDeletion", "KeepAfterDeletion"]


class ResourceModel(BaseModel):
    # Manifests use camelCase keys; python code uses snake_case attributes.
    model_config = ConfigDict(populate_by_name=True)


class SpecModel(ResourceModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ObjectMeta(ResourceModel):
    name: str = ""
    namespace: str = ""
    uid: Optional[str] = None
    resource_version: Optional[str] = Field(default=None, alias="resourceVersion")
    generation: Optional[int] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class ConnectionReference(ResourceModel):
    """Named pointer from a dependent resource to the PulsarConnection it uses.

    An empty ``namespace`` means "same namespace as the referencing object".
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = ""
    namespace: Optional[str] = None


@runtime_checkable
class HasConnectionReference(Protocol):
    def get_connection_ref(self) -> Optional[ConnectionReference]:
        ...


# kind -> model class, filled by @register_kind
_KINDS: Dict[str, Type["Resource"]] = {}

R = TypeVar("R", bound="Resource")


def register_kind(cls: Type[R]) -> Type[R]:
    kind = cls.model_fields["kind"].default
    if not isinstance(kind, str) or not kind:
        raise ValueError(f"{cls.__name__} must declare a default kind")
    if kind in _KINDS and _KINDS[kind] is not cls:
        raise ValueError(f"Duplicate resource kind: {kind}")
    _KINDS[kind] = cls
    return cls


def kind_registry() -> Dict[str, Type["Resource"]]:
    return dict(_KINDS)


class Resource(ResourceModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def to_manifest(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class DependentSpec(SpecModel):
    connection_ref: ConnectionReference = Field(default_factory=ConnectionReference, alias="connectionRef")
    lifecycle_policy: Optional[LifecyclePolicy] = Field(default=None, alias="lifecyclePolicy")

    @field_validator("connection_ref", mode="before")
    @classmethod
    def _null_ref_is_unset(cls, v: Any) -> Any:
        # `connectionRef: null` is the same as omitting the key
        return ConnectionReference() if v is None else v


class DependentResource(Resource):
    """Base for every kind that declares ``spec.connectionRef``.

    Subclasses narrow ``spec`` to their own spec model; the capability
    itself lives here so a new referencing kind only has to subclass.
    """

    spec: DependentSpec = Field(default_factory=DependentSpec)

    @field_validator("spec", mode="before")
    @classmethod
    def _null_spec_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    def get_connection_ref(self) -> Optional[ConnectionReference]:
        return self.spec.connection_ref


# ------------------------------------------------------------
# Specs
# ------------------------------------------------------------
class TenantSpec(DependentSpec):
    name: str = ""
    admin_roles: List[str] = Field(default_factory=list, alias="adminRoles")
    allowed_clusters: List[str] = Field(default_factory=list, alias="allowedClusters")


class NamespaceSpec(DependentSpec):
    name: str = ""
    bundles: Optional[int] = None
    message_ttl: Optional[str] = Field(default=None, alias="messageTTL")
    retention_time: Optional[str] = Field(default=None, alias="retentionTime")
    retention_size: Optional[str] = Field(default=None, alias="retentionSize")
    replication_clusters: List[str] = Field(default_factory=list, alias="replicationClusters")


class TopicSpec(DependentSpec):
    name: str = ""
    persistent: Optional[bool] = None
    partitions: Optional[int] = None
    max_producers: Optional[int] = Field(default=None, alias="maxProducers")
    max_consumers: Optional[int] = Field(default=None, alias="maxConsumers")


class PermissionSpec(DependentSpec):
    resource_name: str = Field(default="", alias="resourceName")
    resource_type: Literal["namespace", "topic"] = Field(default="namespace", alias="resourceType")
    roles: List[str] = Field(default_factory=list)
    actions: List[str] = Field(default_factory=list)


class GeoReplicationSpec(DependentSpec):
    destination_connection_ref: Optional[ConnectionReference] = Field(
        default=None, alias="destinationConnectionRef"
    )
    namespace_name: Optional[str] = Field(default=None, alias="namespace")
    topic_name: Optional[str] = Field(default=None, alias="topic")


class FunctionSpec(DependentSpec):
    name: str = ""
    tenant: str = ""
    namespace_name: str = Field(default="", alias="namespace")
    class_name: Optional[str] = Field(default=None, alias="className")
    inputs: List[str] = Field(default_factory=list)
    output: Optional[str] = None
    parallelism: Optional[int] = None


class SourceSpec(DependentSpec):
    name: str = ""
    tenant: str = ""
    namespace_name: str = Field(default="", alias="namespace")
    class_name: Optional[str] = Field(default=None, alias="className")
    topic_name: Optional[str] = Field(default=None, alias="topicName")
    archive: Optional[Dict[str, Any]] = None


class SinkSpec(DependentSpec):
    name: str = ""
    tenant: str = ""
    namespace_name: str = Field(default="", alias="namespace")
    class_name: Optional[str] = Field(default=None, alias="className")
    inputs: List[str] = Field(default_factory=list)
    archive: Optional[Dict[str, Any]] = None


class PackageSpec(DependentSpec):
    package_url: str = Field(default="", alias="packageURL")
    file_url: Optional[str] = Field(default=None, alias="fileURL")
    description: Optional[str] = None
    contact: Optional[str] = None


class NSIsolationPolicySpec(DependentSpec):
    name: str = ""
    cluster: str = ""
    namespaces: List[str] = Field(default_factory=list)
    primary: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)
    auto_failover_policy_type: Optional[str] = Field(default=None, alias="autoFailoverPolicyType")


class ConnectionSpec(SpecModel):
    admin_service_url: Optional[str] = Field(default=None, alias="adminServiceURL")
    admin_service_secure_url: Optional[str] = Field(default=None, alias="adminServiceSecureURL")
    broker_service_url: Optional[str] = Field(default=None, alias="brokerServiceURL")
    cluster_name: Optional[str] = Field(default=None, alias="clusterName")


# ------------------------------------------------------------
# Kinds
# ------------------------------------------------------------
@register_kind
class PulsarTenant(DependentResource):
    kind: Literal["PulsarTenant"] = "PulsarTenant"
    spec: TenantSpec = Field(default_factory=TenantSpec)


@register_kind
class PulsarNamespace(DependentResource):
    kind: Literal["PulsarNamespace"] = "PulsarNamespace"
    spec: NamespaceSpec = Field(default_factory=NamespaceSpec)


@register_kind
class PulsarTopic(DependentResource):
    kind: Literal["PulsarTopic"] = "PulsarTopic"
    spec: TopicSpec = Field(default_factory=TopicSpec)


@register_kind
class PulsarPermission(DependentResource):
    kind: Literal["PulsarPermission"] = "PulsarPermission"
    spec: PermissionSpec = Field(default_factory=PermissionSpec)


@register_kind
class PulsarGeoReplication(DependentResource):
    kind: Literal["PulsarGeoReplication"] = "PulsarGeoReplication"
    spec: GeoReplicationSpec = Field(default_factory=GeoReplicationSpec)


@register_kind
class PulsarFunction(DependentResource):
    kind: Literal["PulsarFunction"] = "PulsarFunction"
    spec: FunctionSpec = Field(default_factory=FunctionSpec)


@register_kind
class PulsarSource(DependentResource):
    kind: Literal["PulsarSource"] = "PulsarSource"
    spec: SourceSpec = Field(default_factory=SourceSpec)


@register_kind
class PulsarSink(DependentResource):
    kind: Literal["PulsarSink"] = "PulsarSink"
    spec: SinkSpec = Field(default_factory=SinkSpec)


@register_kind
class PulsarPackage(DependentResource):
    kind: Literal["PulsarPackage"] = "PulsarPackage"
    spec: PackageSpec = Field(default_factory=PackageSpec)


@register_kind
class PulsarNSIsolationPolicy(DependentResource):
    kind: Literal["PulsarNSIsolationPolicy"] = "PulsarNSIsolationPolicy"
    spec: NSIsolationPolicySpec = Field(default_factory=NSIsolationPolicySpec)


@register_kind
class PulsarConnection(Resource):
    """The referenced resource. Carries no connection reference of its own."""

    kind: Literal["PulsarConnection"] = "PulsarConnection"
    spec: ConnectionSpec = Field(default_factory=ConnectionSpec)
