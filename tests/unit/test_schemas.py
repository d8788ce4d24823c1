"""Unit tests for ManifestWork status (de)serialization."""

import pytest
from datetime import datetime, timezone
from marshmallow import ValidationError
from kwork.types.models import ResourceIdentity, StatusCondition, WorkStatus
from kwork.types.schemas import StatusConditionSchema, WorkStatusSchema

STATUS = {
    "conditions": [
        {
            "type": "Applied",
            "status": "True",
            "reason": "AppliedManifestWorkComplete",
            "message": "Apply manifest work complete",
            "lastTransitionTime": "2024-05-01T12:00:00Z",
        }
    ],
    "resourceStatus": {
        "manifests": [
            {
                "resourceMeta": {
                    "ordinal": 1,
                    "group": "apps",
                    "version": "v1",
                    "kind": "Deployment",
                    "resource": "deployments",
                    "name": "web",
                    "namespace": "default",
                },
                "conditions": [
                    {
                        "type": "Available",
                        "status": "False",
                        "reason": "MinimumReplicasUnavailable",
                        "message": "Deployment does not have minimum availability.",
                        "lastTransitionTime": "2024-05-01T12:00:05Z",
                    }
                ],
            }
        ]
    },
}


class TestWorkStatusSchema:
    """Tests for WorkStatusSchema."""

    def test_load(self):
        status = WorkStatusSchema().load(STATUS)
        assert isinstance(status, WorkStatus)
        assert status.conditions[0].type == "Applied"
        assert status.conditions[0].last_transition_time == datetime(
            2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc
        )
        manifest = status.manifests[0]
        assert manifest.ordinal == 1
        assert manifest.identity == ResourceIdentity(
            "apps", "v1", "Deployment", "deployments", "default", "web"
        )
        assert manifest.conditions[0].status == "False"

    def test_dump_restores_wire_shape(self):
        schema = WorkStatusSchema()
        assert schema.dump(schema.load(STATUS)) == STATUS

    def test_load_empty(self):
        status = WorkStatusSchema().load({})
        assert status == WorkStatus()
        assert WorkStatusSchema().dump(status) == {
            "conditions": [],
            "resourceStatus": {"manifests": []},
        }

    def test_load_nulls(self):
        status = WorkStatusSchema().load({"conditions": None, "resourceStatus": None})
        assert status == WorkStatus()

    def test_manifest_without_conditions(self):
        status = WorkStatusSchema().load(
            {"resourceStatus": {"manifests": [{"resourceMeta": {"ordinal": 0, "name": "a"}}]}}
        )
        assert status.manifests[0].conditions == []
        assert status.manifests[0].resource_meta.kind == ""

    def test_unknown_fields_are_ignored(self):
        status = WorkStatusSchema().load({**STATUS, "observedGeneration": 3})
        assert not hasattr(status, "observedGeneration")


class TestStatusConditionSchema:
    """Tests for StatusConditionSchema."""

    def test_time_dumped_in_utc_seconds(self):
        condition = StatusCondition(
            type="Applied",
            status="True",
            last_transition_time=datetime(2024, 5, 1, 14, 0, 0, 123456, tzinfo=timezone.utc),
        )
        data = StatusConditionSchema().dump(condition)
        assert data["lastTransitionTime"] == "2024-05-01T14:00:00Z"

    def test_unset_time_omitted(self):
        data = StatusConditionSchema().dump(StatusCondition(type="Applied", status="True"))
        assert "lastTransitionTime" not in data
        assert data["reason"] == ""

    def test_offset_time_loaded(self):
        condition = StatusConditionSchema().load(
            {"type": "a", "status": "True", "lastTransitionTime": "2024-05-01T14:00:00+02:00"}
        )
        assert condition.last_transition_time == datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            StatusConditionSchema().load({"type": "a", "status": "Maybe"})

    def test_invalid_time(self):
        with pytest.raises(ValidationError):
            StatusConditionSchema().load(
                {"type": "a", "status": "True", "lastTransitionTime": "yesterday"}
            )

    def test_missing_type(self):
        with pytest.raises(ValidationError):
            StatusConditionSchema().load({"status": "True"})
