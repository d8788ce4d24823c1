from .condition import (
    CONDITION_TRUE,
    CONDITION_FALSE,
    CONDITION_UNKNOWN,
    CONDITION_STATUSES,
    StatusCondition,
)
from .manifestwork import (
    ResourceIdentity,
    ManifestResourceMeta,
    ManifestCondition,
    WorkStatus,
    WorkKey,
    WorkRecord,
)

__all__ = [
    "CONDITION_TRUE",
    "CONDITION_FALSE",
    "CONDITION_UNKNOWN",
    "CONDITION_STATUSES",
    "StatusCondition",
    "ResourceIdentity",
    "ManifestResourceMeta",
    "ManifestCondition",
    "WorkStatus",
    "WorkKey",
    "WorkRecord",
]
