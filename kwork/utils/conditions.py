"""Condition bookkeeping for ManifestWork status.

``set_status_condition`` updates a single condition in a caller-owned list.
``merge_status_conditions`` and ``merge_manifest_conditions`` reconcile a
persisted list against a freshly observed one and return a new list; they
never modify their arguments.

Transition times only move when a condition's status changes. Reason and
message updates keep the existing transition time.
"""

import copy
from typing import Dict, List, Optional
from kwork.types.models import (
    CONDITION_TRUE,
    CONDITION_FALSE,
    StatusCondition,
    ManifestCondition,
    ResourceIdentity,
)
from kwork.utils.helpers import utc_now


def find_status_condition(
    conditions: List[StatusCondition], condition_type: str
) -> Optional[StatusCondition]:
    for condition in conditions or []:
        if condition.type == condition_type:
            return condition
    return None


def is_status_condition_true(conditions: List[StatusCondition], condition_type: str) -> bool:
    condition = find_status_condition(conditions, condition_type)
    return condition is not None and condition.status == CONDITION_TRUE


def is_status_condition_false(conditions: List[StatusCondition], condition_type: str) -> bool:
    condition = find_status_condition(conditions, condition_type)
    return condition is not None and condition.status == CONDITION_FALSE


def set_status_condition(
    conditions: List[StatusCondition], incoming: StatusCondition
) -> bool:
    """Set ``incoming`` in ``conditions`` by type, in place.

    Returns True if the list was modified. The transition time supplied on
    ``incoming`` is only used when the condition is new; a status change
    stamps the current time.
    """
    existing = find_status_condition(conditions, incoming.type)
    if existing is None:
        added = copy.deepcopy(incoming)
        if added.last_transition_time is None:
            added.last_transition_time = utc_now()
        conditions.append(added)
        return True

    if existing.same_state(incoming):
        return False

    if existing.status != incoming.status:
        existing.status = incoming.status
        existing.last_transition_time = utc_now()
    existing.reason = incoming.reason
    existing.message = incoming.message
    return True


def remove_status_condition(conditions: List[StatusCondition], condition_type: str) -> bool:
    """Remove the condition of ``condition_type`` in place. Returns True if removed."""
    for i, condition in enumerate(conditions):
        if condition.type == condition_type:
            del conditions[i]
            return True
    return False


def _conditions_by_type(conditions: List[StatusCondition]) -> Dict[str, StatusCondition]:
    return {condition.type: condition for condition in conditions or []}


def _carry_transition_times(
    old_by_type: Dict[str, StatusCondition], new: List[StatusCondition]
) -> List[StatusCondition]:
    merged = []
    for condition in new or []:
        condition = copy.deepcopy(condition)
        previous = old_by_type.get(condition.type)
        if previous is not None and previous.status == condition.status:
            condition.last_transition_time = previous.last_transition_time
        merged.append(condition)
    return merged


def merge_status_conditions(
    old: List[StatusCondition], new: List[StatusCondition]
) -> List[StatusCondition]:
    """Reconcile the work level condition list.

    The result has one entry per ``new`` condition, in ``new``'s order. Types
    missing from ``new`` are dropped. When a type keeps its status, the old
    transition time is kept.
    """
    return _carry_transition_times(_conditions_by_type(old), new)


def find_manifest_condition(
    manifests: List[ManifestCondition], identity: ResourceIdentity
) -> Optional[ManifestCondition]:
    for manifest in manifests or []:
        if manifest.identity == identity:
            return manifest
    return None


def merge_manifest_conditions(
    old: List[ManifestCondition], new: List[ManifestCondition]
) -> List[ManifestCondition]:
    """Reconcile per-resource condition lists.

    Entries are matched by resource identity, ignoring ordinal. The result
    follows ``new``: its identities, ordinals and conditions, in its order.
    Resources missing from ``new`` are dropped. For matched resources, a
    condition whose status is unchanged keeps the old transition time.
    """
    old_by_identity = {manifest.identity: manifest for manifest in old or []}

    merged = []
    for manifest in new or []:
        previous = old_by_identity.get(manifest.identity)
        old_by_type = _conditions_by_type(previous.conditions) if previous else {}
        merged.append(
            ManifestCondition(
                resource_meta=copy.deepcopy(manifest.resource_meta),
                conditions=_carry_transition_times(old_by_type, manifest.conditions),
            )
        )
    return merged
