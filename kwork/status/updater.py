import copy
import inspect
import logging
from typing import Awaitable, Callable, Optional, Tuple, Union
from kwork.resources.base import WorkStore
from kwork.sensors.base import StatusSensor
from kwork.status.retry import RetryPolicy
from kwork.types.models import WorkKey, WorkStatus
from kwork.types.schemas import WorkStatusSchema
from kwork.utils.errors import ConflictError, MutationError, RetryExhaustedError
from kwork.utils.helpers import deep_compare_dict

logger = logging.getLogger(__name__)

MutateFn = Callable[[WorkStatus], Union[None, Awaitable[None]]]


class StatusUpdater:
    """Commit work status changes under optimistic concurrency.

    Each cycle fetches the record, applies ``mutate_fn`` to a private copy of
    its status, and writes only when the copy differs from what was fetched.
    A write rejected for a stale resourceVersion restarts the cycle on a
    fresh fetch, as many times as the retry policy allows. Cancellation of
    the calling task propagates from whichever await it interrupts.
    """

    store: WorkStore
    policy: RetryPolicy
    sensor: Optional[StatusSensor]

    def __init__(
        self,
        store: WorkStore,
        policy: RetryPolicy = None,
        sensor: StatusSensor = None,
    ):
        self.store = store
        self.policy = policy or RetryPolicy()
        self.sensor = sensor
        self._schema = WorkStatusSchema()

    async def update_status(
        self, key: WorkKey, mutate_fn: MutateFn
    ) -> Tuple[WorkStatus, bool]:
        """Apply ``mutate_fn`` to the status of ``key``.

        Returns:
            The resulting status and whether it was written.
        Raises:
            NotFoundError: the record does not exist.
            MalformedStatusError: the stored status cannot be read.
            MutationError: ``mutate_fn`` raised; nothing was written.
            RetryExhaustedError: every attempt allowed by the policy conflicted.
        """
        state = self._on_start(key)
        try:
            status, changed = await self._update_status(key, mutate_fn)
        except BaseException as ex:
            # cancellation included, re-raised untouched
            self._on_complete(key, state, changed=False, success=False, error=ex)
            raise
        self._on_complete(key, state, changed=changed, success=True)
        return status, changed

    async def _update_status(
        self, key: WorkKey, mutate_fn: MutateFn
    ) -> Tuple[WorkStatus, bool]:
        delays = self.policy.delays()
        attempt = 0
        while True:
            attempt += 1
            record = await self.store.get(key)
            status = copy.deepcopy(record.status)
            await self._mutate(key, mutate_fn, status)

            if self.equal(record.status, status):
                logger.debug(f"Status of ManifestWork {key} unchanged, skipping write")
                return record.status, False

            try:
                await self.store.update_status(record.with_status(status))
            except ConflictError as ex:
                if self.sensor:
                    self.sensor.on_status_update_conflict(key.namespace, key.name, attempt)
                delay = next(delays, None)
                if delay is None:
                    logger.warning(
                        f"Giving up on status of ManifestWork {key} after {attempt} conflicting attempts"
                    )
                    raise RetryExhaustedError(key, attempt) from ex
                logger.info(
                    f"Status of ManifestWork {key} changed concurrently "
                    f"(attempt {attempt}), retrying in {delay}s"
                )
                await self.policy.sleep(delay)
                continue

            logger.debug(f"Status of ManifestWork {key} written on attempt {attempt}")
            return status, True

    async def _mutate(self, key: WorkKey, mutate_fn: MutateFn, status: WorkStatus) -> None:
        try:
            result = mutate_fn(status)
            if inspect.isawaitable(result):
                await result
        except Exception as ex:
            raise MutationError(key, ex) from ex

    def equal(self, a: WorkStatus, b: WorkStatus) -> bool:
        """Full structural equality of two statuses as they would be persisted."""
        return deep_compare_dict(self._schema.dump(a), self._schema.dump(b))

    def _on_start(self, key: WorkKey):
        if self.sensor:
            return self.sensor.on_status_update_start(key.namespace, key.name)
        return None

    def _on_complete(self, key: WorkKey, state, changed: bool, success: bool, error=None):
        if self.sensor:
            self.sensor.on_status_update_complete(
                key.namespace, key.name, state, changed, success, error
            )


async def update_work_status(
    store: WorkStore,
    key: WorkKey,
    mutate_fn: MutateFn,
    policy: RetryPolicy = None,
    sensor: StatusSensor = None,
) -> Tuple[WorkStatus, bool]:
    """Shortcut for ``StatusUpdater(store, policy, sensor).update_status(...)``."""
    return await StatusUpdater(store, policy, sensor).update_status(key, mutate_fn)
