"""Mutation closures handed to ``StatusUpdater.update_status``.

Each builder captures freshly observed state and returns a function that
folds it into the fetched status copy.
"""

from typing import List, Optional, Sequence
from kwork.types.models import ManifestCondition, StatusCondition, WorkStatus
from kwork.utils.conditions import (
    merge_manifest_conditions,
    merge_status_conditions,
    remove_status_condition,
    set_status_condition,
)


def set_work_condition(condition: StatusCondition):
    """Set a single work level condition."""

    def mutate(status: WorkStatus) -> None:
        set_status_condition(status.conditions, condition)

    return mutate


def merge_work_status(
    manifests: Optional[List[ManifestCondition]] = None,
    conditions: Optional[List[StatusCondition]] = None,
):
    """Merge observed manifest conditions and set work level conditions.

    ``manifests=None`` leaves the per-resource list alone; an empty list
    means no resource is tracked any more. Each of ``conditions`` is set
    individually, other work level conditions are kept.
    """

    def mutate(status: WorkStatus) -> None:
        if manifests is not None:
            status.manifests = merge_manifest_conditions(status.manifests, manifests)
        for condition in conditions or []:
            set_status_condition(status.conditions, condition)

    return mutate


def replace_work_status(
    manifests: List[ManifestCondition], conditions: List[StatusCondition]
):
    """Replace both condition lists with the observed ones.

    Conditions or resources not observed are dropped; unchanged statuses keep
    their transition time.
    """

    def mutate(status: WorkStatus) -> None:
        status.manifests = merge_manifest_conditions(status.manifests, manifests)
        status.conditions = merge_status_conditions(status.conditions, conditions)

    return mutate


def remove_work_conditions(condition_types: Sequence[str]):
    """Drop the work level conditions of ``condition_types``."""

    def mutate(status: WorkStatus) -> None:
        for condition_type in condition_types:
            remove_status_condition(status.conditions, condition_type)

    return mutate
