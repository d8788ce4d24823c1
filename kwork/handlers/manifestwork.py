import kopf
from logging import Logger
from kubernetes_asyncio.client import ApiException
from marshmallow import ValidationError
from kwork.status import (
    AGGREGATED_CONDITION_TYPES,
    RetryPolicy,
    StatusUpdater,
    aggregate_work_conditions,
    merge_work_status,
    remove_work_conditions,
)
from kwork.types.models import WorkKey
from kwork.types.schemas import ManifestConditionSchema
from kwork.types.settings import Settings
from kwork.utils.errors import WorkStatusError, convert_api_exception, convert_work_error

WORK_GROUP = Settings.work_api_group
WORK_VERSION = Settings.work_api_version
WORK_PLURAL = Settings.work_plural


def get_updater(memo: kopf.Memo) -> StatusUpdater:
    return StatusUpdater(
        memo.work_store,
        RetryPolicy.from_settings(memo.conf),
        sensor=getattr(memo, "sensor", None),
    )


@kopf.on.field(WORK_GROUP, WORK_VERSION, WORK_PLURAL, field="status.resourceStatus")
async def aggregate_work_status(
    name: str,
    namespace: str,
    new,
    memo: kopf.Memo,
    logger: Logger,
    **kwargs,
):
    """Summarize per-manifest conditions as work level Applied/Available."""
    if not memo.conf.aggregate_work_conditions_enabled:
        return

    try:
        manifests = ManifestConditionSchema(many=True).load(
            (new or {}).get("manifests") or []
        )
    except ValidationError as ex:
        raise kopf.PermanentError(f"Malformed resourceStatus: {ex.messages}") from ex

    conditions = aggregate_work_conditions(manifests)
    if conditions:
        mutate_fn = merge_work_status(conditions=conditions)
    else:
        # no resources tracked, earlier summaries no longer hold
        mutate_fn = remove_work_conditions(AGGREGATED_CONDITION_TYPES)

    key = WorkKey(namespace, name)
    try:
        _, changed = await get_updater(memo).update_status(key, mutate_fn)
    except WorkStatusError as ex:
        convert_work_error(ex)
    except ApiException as ex:
        convert_api_exception(ex)

    if changed:
        if conditions:
            summary = ", ".join(f"{c.type}={c.status}" for c in conditions)
            logger.info(f"Updated work conditions of {key}: {summary}")
        else:
            logger.info(f"Removed work conditions of {key}, no resources tracked")
