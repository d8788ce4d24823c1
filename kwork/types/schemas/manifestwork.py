from marshmallow import fields, pre_load, post_dump
from kwork.types.base import BaseSchema
from kwork.types.models.manifestwork import (
    ManifestResourceMeta,
    ManifestCondition,
    WorkStatus,
)
from kwork.types.schemas.condition import StatusConditionSchema


class ManifestResourceMetaSchema(BaseSchema):
    __model__ = ManifestResourceMeta

    ordinal = fields.Int(data_key="ordinal", load_default=0)
    group = fields.Str(data_key="group", load_default="")
    version = fields.Str(data_key="version", load_default="")
    kind = fields.Str(data_key="kind", load_default="")
    resource = fields.Str(data_key="resource", load_default="")
    name = fields.Str(data_key="name", load_default="")
    namespace = fields.Str(data_key="namespace", load_default="")


class ManifestConditionSchema(BaseSchema):
    __model__ = ManifestCondition

    resource_meta = fields.Nested(
        ManifestResourceMetaSchema, data_key="resourceMeta", required=True
    )
    conditions = fields.List(
        fields.Nested(StatusConditionSchema), data_key="conditions", load_default=list
    )

    @pre_load
    def default_conditions(self, data, **kwargs):
        if isinstance(data, dict) and data.get("conditions") is None:
            data = {**data, "conditions": []}
        return data


class WorkStatusSchema(BaseSchema):
    """ManifestWork ``status``.

    The per-manifest conditions live under ``resourceStatus.manifests`` on the
    wire and are flattened into ``WorkStatus.manifests``.
    """

    __model__ = WorkStatus

    conditions = fields.List(
        fields.Nested(StatusConditionSchema), data_key="conditions", load_default=list
    )
    manifests = fields.List(
        fields.Nested(ManifestConditionSchema), data_key="manifests", load_default=list
    )

    @pre_load
    def flatten_resource_status(self, data, **kwargs):
        data = dict(data or {})
        resource_status = data.pop("resourceStatus", None) or {}
        data["manifests"] = resource_status.get("manifests") or []
        if data.get("conditions") is None:
            data["conditions"] = []
        return data

    @post_dump
    def nest_resource_status(self, data, **kwargs):
        data["resourceStatus"] = {"manifests": data.pop("manifests", [])}
        return data
