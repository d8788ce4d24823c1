from typing import Any, Dict, List, NamedTuple, Optional
from kwork.types.base import BaseModel
from kwork.types.models.condition import StatusCondition


class ResourceIdentity(NamedTuple):
    """Coordinates of a tracked resource. Ordinal is deliberately absent."""

    group: str
    version: str
    kind: str
    resource: str
    namespace: str
    name: str


class ManifestResourceMeta(BaseModel):
    """Position and coordinates of a resource in the work's manifest list."""

    ordinal: int
    group: str
    version: str
    kind: str
    resource: str
    name: str
    namespace: str

    def __init__(
        self,
        ordinal: int = 0,
        group: str = "",
        version: str = "",
        kind: str = "",
        resource: str = "",
        name: str = "",
        namespace: str = "",
        **kwargs,
    ) -> None:
        super().__init__(
            ordinal=ordinal,
            group=group,
            version=version,
            kind=kind,
            resource=resource,
            name=name,
            namespace=namespace,
            **kwargs,
        )

    @property
    def identity(self) -> ResourceIdentity:
        return ResourceIdentity(
            self.group,
            self.version,
            self.kind,
            self.resource,
            self.namespace,
            self.name,
        )


class ManifestCondition(BaseModel):
    """Conditions observed for a single manifest of a work."""

    resource_meta: ManifestResourceMeta
    conditions: List[StatusCondition]

    def __init__(
        self,
        resource_meta: ManifestResourceMeta = None,
        conditions: List[StatusCondition] = None,
        **kwargs,
    ) -> None:
        super().__init__(
            resource_meta=resource_meta if resource_meta is not None else ManifestResourceMeta(),
            conditions=list(conditions or []),
            **kwargs,
        )

    @property
    def identity(self) -> ResourceIdentity:
        return self.resource_meta.identity

    @property
    def ordinal(self) -> int:
        return self.resource_meta.ordinal


class WorkStatus(BaseModel):
    """Status of a ManifestWork.

    ``conditions`` holds the work level aggregate conditions, ``manifests``
    the per-resource conditions (``status.resourceStatus.manifests`` on the
    wire).
    """

    conditions: List[StatusCondition]
    manifests: List[ManifestCondition]

    def __init__(
        self,
        conditions: List[StatusCondition] = None,
        manifests: List[ManifestCondition] = None,
        **kwargs,
    ) -> None:
        super().__init__(
            conditions=list(conditions or []),
            manifests=list(manifests or []),
            **kwargs,
        )


class WorkKey(NamedTuple):
    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


class WorkRecord(BaseModel):
    """A ManifestWork as fetched from the store.

    ``resource_version`` is the optimistic concurrency token captured at fetch
    time. ``body`` keeps the raw object so that writes can send back every
    field this package does not model.
    """

    key: WorkKey
    status: WorkStatus
    resource_version: Optional[str]
    body: Dict[str, Any]

    def __init__(
        self,
        key: WorkKey = None,
        status: WorkStatus = None,
        resource_version: Optional[str] = None,
        body: Dict[str, Any] = None,
        **kwargs,
    ) -> None:
        super().__init__(
            key=key,
            status=status if status is not None else WorkStatus(),
            resource_version=resource_version,
            body=body if body is not None else {},
            **kwargs,
        )

    def with_status(self, status: WorkStatus) -> "WorkRecord":
        """Return a record carrying ``status`` and this record's version."""
        return WorkRecord(
            key=self.key,
            status=status,
            resource_version=self.resource_version,
            body=self.body,
        )
