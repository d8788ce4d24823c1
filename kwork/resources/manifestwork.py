import logging
from kubernetes_asyncio.client import ApiException, CustomObjectsApi
from marshmallow import ValidationError
from kwork.resources.base import WorkStore
from kwork.types.models import WorkKey, WorkRecord
from kwork.types.schemas import WorkStatusSchema
from kwork.types.settings import Settings
from kwork.utils.errors import (
    NotFoundError,
    ConflictError,
    MalformedStatusError,
    not_found_error,
    conflict_error,
)

logger = logging.getLogger(__name__)


class ManifestWork(WorkStore):
    """ManifestWork custom objects on the hub API server.

    ``metadata.resourceVersion`` is the concurrency token; the API server
    answers a stale one with 409 Conflict.
    """

    group: str
    version: str
    plural: str

    custom_objects_api: CustomObjectsApi

    def __init__(self, custom_objects_api: CustomObjectsApi, conf: Settings = None):
        conf = conf or Settings()
        self.custom_objects_api = custom_objects_api
        self.group = conf.work_api_group
        self.version = conf.work_api_version
        self.plural = conf.work_plural
        self.status_schema = WorkStatusSchema()

    async def get(self, key: WorkKey) -> WorkRecord:
        try:
            body = await self.custom_objects_api.get_namespaced_custom_object(
                group=self.group,
                version=self.version,
                namespace=key.namespace,
                plural=self.plural,
                name=key.name,
            )
        except ApiException as ex:
            if not_found_error(ex):
                raise NotFoundError(key) from ex
            raise
        return self.to_record(key, body)

    async def update_status(self, record: WorkRecord) -> WorkRecord:
        body = self.to_body(record)
        try:
            updated = await self.custom_objects_api.replace_namespaced_custom_object_status(
                group=self.group,
                version=self.version,
                namespace=record.key.namespace,
                plural=self.plural,
                name=record.key.name,
                body=body,
            )
        except ApiException as ex:
            if conflict_error(ex):
                raise ConflictError(record.key, record.resource_version) from ex
            if not_found_error(ex):
                raise NotFoundError(record.key) from ex
            raise
        logger.debug(
            f"Replaced status of ManifestWork {record.key} "
            f"(resourceVersion {record.resource_version} -> "
            f"{updated.get('metadata', {}).get('resourceVersion')})"
        )
        return self.to_record(record.key, updated)

    def to_record(self, key: WorkKey, body: dict) -> WorkRecord:
        try:
            status = self.status_schema.load(body.get("status") or {})
        except ValidationError as ex:
            raise MalformedStatusError(key, ex.messages) from ex
        return WorkRecord(
            key=key,
            status=status,
            resource_version=(body.get("metadata") or {}).get("resourceVersion"),
            body=body,
        )

    def to_body(self, record: WorkRecord) -> dict:
        """Build the replace body from the fetched object and the new status.

        Status fields this package does not model are sent back unchanged,
        at the top level of ``status`` and of ``status.resourceStatus``.
        Unmodelled keys inside individual manifest entries are not kept.
        """
        body = dict(record.body)
        metadata = dict(body.get("metadata") or {})
        metadata.update(
            {
                "name": record.key.name,
                "namespace": record.key.namespace,
                "resourceVersion": record.resource_version,
            }
        )
        body["metadata"] = metadata
        body.setdefault("apiVersion", f"{self.group}/{self.version}")
        body.setdefault("kind", "ManifestWork")
        fetched = body.get("status") or {}
        dumped = self.status_schema.dump(record.status)
        status = dict(fetched)
        status.update(dumped)
        if "resourceStatus" in dumped:
            resource_status = dict(fetched.get("resourceStatus") or {})
            resource_status.update(dumped["resourceStatus"])
            status["resourceStatus"] = resource_status
        body["status"] = status
        return body
