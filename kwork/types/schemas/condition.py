from marshmallow import fields, post_dump, validate, ValidationError
from kwork.types.base import BaseSchema
from kwork.types.models.condition import StatusCondition, CONDITION_STATUSES
from kwork.utils.helpers import format_time, iso_datestr_to_datetime


class Time(fields.Field):
    """metav1.Time: RFC 3339 with second precision, always UTC."""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return format_time(value)

    def _deserialize(self, value, attr, data, **kwargs):
        if value is None:
            return None
        try:
            return iso_datestr_to_datetime(value)
        except ValueError as ex:
            raise ValidationError(f"Invalid time: {value!r}") from ex


class StatusConditionSchema(BaseSchema):
    __model__ = StatusCondition

    type = fields.Str(data_key="type", required=True)
    status = fields.Str(
        data_key="status",
        required=True,
        validate=validate.OneOf(CONDITION_STATUSES),
    )
    reason = fields.Str(data_key="reason", load_default="")
    message = fields.Str(data_key="message", load_default="")
    last_transition_time = Time(
        data_key="lastTransitionTime", allow_none=True, load_default=None
    )

    @post_dump
    def drop_unset_time(self, data, **kwargs):
        if data.get("lastTransitionTime") is None:
            data.pop("lastTransitionTime", None)
        return data
