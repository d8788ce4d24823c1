from typing import List, Sequence
from kwork.types.models import (
    CONDITION_TRUE,
    CONDITION_FALSE,
    CONDITION_UNKNOWN,
    ManifestCondition,
    StatusCondition,
)
from kwork.utils.conditions import find_status_condition

WORK_APPLIED = "Applied"
WORK_AVAILABLE = "Available"

AGGREGATED_CONDITION_TYPES = (WORK_APPLIED, WORK_AVAILABLE)

# reason templates per aggregated status
_REASONS = {
    CONDITION_TRUE: "Resources{type}",
    CONDITION_FALSE: "ResourcesNot{type}",
    CONDITION_UNKNOWN: "Resources{type}Unknown",
}


def aggregate_condition(
    manifests: List[ManifestCondition], condition_type: str
) -> StatusCondition:
    """Fold one condition type across all manifests.

    False if any manifest reports False, True if all report True, otherwise
    Unknown. A manifest without the condition counts as Unknown.
    """
    false_count = unknown_count = 0
    for manifest in manifests:
        condition = find_status_condition(manifest.conditions, condition_type)
        if condition is None or condition.status == CONDITION_UNKNOWN:
            unknown_count += 1
        elif condition.status == CONDITION_FALSE:
            false_count += 1

    total = len(manifests)
    if false_count:
        status = CONDITION_FALSE
        message = f"{false_count} of {total} resources are not {condition_type.lower()}"
    elif unknown_count:
        status = CONDITION_UNKNOWN
        message = f"{unknown_count} of {total} resources have unknown {condition_type.lower()} status"
    else:
        status = CONDITION_TRUE
        message = f"All {total} resources are {condition_type.lower()}"

    return StatusCondition(
        type=condition_type,
        status=status,
        reason=_REASONS[status].format(type=condition_type),
        message=message,
    )


def aggregate_work_conditions(
    manifests: List[ManifestCondition],
    condition_types: Sequence[str] = AGGREGATED_CONDITION_TYPES,
) -> List[StatusCondition]:
    """Work level conditions summarizing per-manifest ones.

    Nothing is reported for a work that tracks no resources.
    """
    if not manifests:
        return []
    return [aggregate_condition(manifests, t) for t in condition_types]
