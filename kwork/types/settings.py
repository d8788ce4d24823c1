import os
from typing import Any

_TRUE, _FALSE = {"True", "true", "yes", "1"}, {"False", "false", "no", "0"}


def _getenv(name: str, *default: Any) -> Any:
    try:
        v = os.environ[name]
        if v in _TRUE:
            return True
        elif v in _FALSE:
            return False
        else:
            return v
    except KeyError:
        pass
    if default:
        return default[0]
    raise KeyError(name)


# ------------------------------------------------
# ---- Defaults and environment variables ----
# ------------------------------------------------

#: API group of the ManifestWork custom resource
WORK_API_GROUP = str(_getenv("WORK_API_GROUP", "work.open-cluster-management.io"))

#: API version of the ManifestWork custom resource
WORK_API_VERSION = str(_getenv("WORK_API_VERSION", "v1"))

#: Plural resource name of the ManifestWork custom resource
WORK_PLURAL = str(_getenv("WORK_PLURAL", "manifestworks"))

#: Total number of write attempts for a single status update
STATUS_UPDATE_MAX_ATTEMPTS = int(_getenv("STATUS_UPDATE_MAX_ATTEMPTS", 5))

#: Seconds to wait before retrying the first conflicting status write
STATUS_UPDATE_INITIAL_DELAY_SECONDS = float(
    _getenv("STATUS_UPDATE_INITIAL_DELAY_SECONDS", 0.01)
)

#: Multiplier applied to the wait after each further conflict
STATUS_UPDATE_BACKOFF_FACTOR = float(_getenv("STATUS_UPDATE_BACKOFF_FACTOR", 2.0))

#: Upper bound in seconds for the wait between conflicting writes
STATUS_UPDATE_MAX_DELAY_SECONDS = float(
    _getenv("STATUS_UPDATE_MAX_DELAY_SECONDS", 1.0)
)

#: Aggregate per-manifest conditions into work level conditions
AGGREGATE_WORK_CONDITIONS_ENABLED = bool(
    _getenv("AGGREGATE_WORK_CONDITIONS_ENABLED", True)
)


class Settings:
    """Agent settings"""

    work_api_group: str = WORK_API_GROUP
    work_api_version: str = WORK_API_VERSION
    work_plural: str = WORK_PLURAL
    status_update_max_attempts: int = STATUS_UPDATE_MAX_ATTEMPTS
    status_update_initial_delay_seconds: float = STATUS_UPDATE_INITIAL_DELAY_SECONDS
    status_update_backoff_factor: float = STATUS_UPDATE_BACKOFF_FACTOR
    status_update_max_delay_seconds: float = STATUS_UPDATE_MAX_DELAY_SECONDS
    aggregate_work_conditions_enabled: bool = AGGREGATE_WORK_CONDITIONS_ENABLED

    def __init__(
        self,
        *args,
        work_api_group: str = None,
        work_api_version: str = None,
        work_plural: str = None,
        status_update_max_attempts: int = None,
        status_update_initial_delay_seconds: float = None,
        status_update_backoff_factor: float = None,
        status_update_max_delay_seconds: float = None,
        aggregate_work_conditions_enabled: bool = None,
        **kwargs,
    ):
        if work_api_group is not None:
            self.work_api_group = work_api_group

        if work_api_version is not None:
            self.work_api_version = work_api_version

        if work_plural is not None:
            self.work_plural = work_plural

        if status_update_max_attempts is not None:
            self.status_update_max_attempts = status_update_max_attempts

        if status_update_initial_delay_seconds is not None:
            self.status_update_initial_delay_seconds = status_update_initial_delay_seconds

        if status_update_backoff_factor is not None:
            self.status_update_backoff_factor = status_update_backoff_factor

        if status_update_max_delay_seconds is not None:
            self.status_update_max_delay_seconds = status_update_max_delay_seconds

        if aggregate_work_conditions_enabled is not None:
            self.aggregate_work_conditions_enabled = aggregate_work_conditions_enabled
