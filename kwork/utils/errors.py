import json
import kopf
import kubernetes_asyncio

_NOT_FOUND = "notfound"
_CONFLICT = "conflict"


class WorkStatusError(Exception):
    """Base class for status update failures."""


class NotFoundError(WorkStatusError):
    """The work record does not exist."""

    def __init__(self, key) -> None:
        self.key = key
        super().__init__(f"ManifestWork {key} not found")


class ConflictError(WorkStatusError):
    """The record's version changed since it was fetched."""

    def __init__(self, key, resource_version: str = None) -> None:
        self.key = key
        self.resource_version = resource_version
        super().__init__(
            f"ManifestWork {key} was modified since resourceVersion {resource_version}"
        )


class RetryExhaustedError(WorkStatusError):
    """Conflicts kept occurring until the retry policy gave up."""

    def __init__(self, key, attempts: int) -> None:
        self.key = key
        self.attempts = attempts
        super().__init__(
            f"Status update of ManifestWork {key} still conflicting after {attempts} attempts"
        )


class MalformedStatusError(WorkStatusError):
    """The stored status cannot be read."""

    def __init__(self, key, messages) -> None:
        self.key = key
        self.messages = messages
        super().__init__(f"Status of ManifestWork {key} is malformed: {messages}")


class MutationError(WorkStatusError):
    """The caller supplied mutation raised. Nothing was written."""

    def __init__(self, key, error: Exception) -> None:
        self.key = key
        self.error = error
        super().__init__(f"Status mutation for ManifestWork {key} failed: {error}")


def _reason(ex: kubernetes_asyncio.client.ApiException) -> str:
    try:
        err = json.loads(ex.body)
    except (TypeError, ValueError):
        return ""
    return str(err.get("reason", "")).lower() if isinstance(err, dict) else ""


def not_found_error(ex: kubernetes_asyncio.client.ApiException) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return ex.status == 404 or _reason(ex) == _NOT_FOUND


def conflict_error(ex: kubernetes_asyncio.client.ApiException) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return ex.status == 409 or _reason(ex) == _CONFLICT


def convert_api_exception(ex: kubernetes_asyncio.client.ApiException, permanent: bool = None):
    """
    Convert kubernetes ApiException to a Kopf-friendly exception.

    Args:
        ex: The ApiException to convert
        permanent: If True, raises PermanentError (won't retry). If False, raises TemporaryError (will retry).
                   If None, automatically determines based on status code.

    Raises:
        kopf.TemporaryError or kopf.PermanentError with serializable error details
    """
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        raise ex

    error_msg = f"Kubernetes API error ({ex.status}): {ex.reason}"
    try:
        if ex.body:
            body = json.loads(ex.body)
            if "message" in body:
                error_msg = f"{error_msg} - {body['message']}"
    except (json.JSONDecodeError, TypeError, AttributeError):
        pass

    # 4xx errors (except 408, 409, 429) are permanent
    if permanent is None:
        is_permanent = 400 <= ex.status < 500 and ex.status not in [408, 409, 429]
    else:
        is_permanent = permanent

    if is_permanent:
        raise kopf.PermanentError(error_msg) from ex
    else:
        raise kopf.TemporaryError(error_msg, delay=30) from ex


def convert_work_error(ex: WorkStatusError, delay: float = 10):
    """Convert a status update failure to a Kopf-friendly exception.

    Exhausted conflict retries are temporary, kopf retries the handler later.
    A missing record or a failing mutation will not heal by retrying.
    """
    if isinstance(ex, (RetryExhaustedError, ConflictError)):
        raise kopf.TemporaryError(str(ex), delay=delay) from ex
    elif isinstance(ex, WorkStatusError):
        raise kopf.PermanentError(str(ex)) from ex
    raise ex
