from .retry import RetryPolicy
from .updater import StatusUpdater, update_work_status
from .mutators import (
    set_work_condition,
    merge_work_status,
    replace_work_status,
    remove_work_conditions,
)
from .aggregate import AGGREGATED_CONDITION_TYPES, aggregate_work_conditions

__all__ = [
    "RetryPolicy",
    "StatusUpdater",
    "update_work_status",
    "set_work_condition",
    "merge_work_status",
    "replace_work_status",
    "remove_work_conditions",
    "AGGREGATED_CONDITION_TYPES",
    "aggregate_work_conditions",
]
