from .condition import Time, StatusConditionSchema
from .manifestwork import (
    ManifestResourceMetaSchema,
    ManifestConditionSchema,
    WorkStatusSchema,
)

__all__ = [
    "Time",
    "StatusConditionSchema",
    "ManifestResourceMetaSchema",
    "ManifestConditionSchema",
    "WorkStatusSchema",
]
