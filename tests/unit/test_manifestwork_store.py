"""Unit tests for the ManifestWork store."""

import asyncio
import json
import pytest
from unittest.mock import AsyncMock, Mock
from kubernetes_asyncio.client import ApiException
from kwork.resources import ManifestWork
from kwork.types.models import StatusCondition, WorkKey
from kwork.types.settings import Settings
from kwork.utils.errors import ConflictError, MalformedStatusError, NotFoundError

KEY = WorkKey("cluster1", "work1")


def manifestwork_body(resource_version="10", status=None):
    return {
        "apiVersion": "work.open-cluster-management.io/v1",
        "kind": "ManifestWork",
        "metadata": {
            "name": "work1",
            "namespace": "cluster1",
            "resourceVersion": resource_version,
            "labels": {"app": "web"},
        },
        "spec": {"workload": {"manifests": []}},
        "status": status
        if status is not None
        else {
            "conditions": [
                {
                    "type": "Applied",
                    "status": "True",
                    "reason": "AppliedManifestWorkComplete",
                    "message": "Apply manifest work complete",
                    "lastTransitionTime": "2024-05-01T12:00:00Z",
                }
            ],
            "resourceStatus": {"manifests": []},
            "observedGeneration": 2,
        },
    }


def api_exception(status, reason):
    ex = ApiException(status=status, reason=reason)
    ex.body = json.dumps({"kind": "Status", "reason": reason, "message": f"{reason}!"})
    return ex


@pytest.fixture
def api():
    api = Mock()
    api.get_namespaced_custom_object = AsyncMock(return_value=manifestwork_body())
    api.replace_namespaced_custom_object_status = AsyncMock(
        side_effect=lambda **kwargs: {
            **kwargs["body"],
            "metadata": {**kwargs["body"]["metadata"], "resourceVersion": "11"},
        }
    )
    return api


class TestManifestWorkGet:
    """Tests for ManifestWork.get()."""

    def test_get(self, api):
        record = asyncio.run(ManifestWork(api).get(KEY))
        assert record.key == KEY
        assert record.resource_version == "10"
        assert record.status.conditions[0].type == "Applied"
        api.get_namespaced_custom_object.assert_awaited_once_with(
            group="work.open-cluster-management.io",
            version="v1",
            namespace="cluster1",
            plural="manifestworks",
            name="work1",
        )

    def test_get_uses_settings(self, api):
        conf = Settings(work_api_group="example.io", work_api_version="v2", work_plural="works")
        asyncio.run(ManifestWork(api, conf).get(KEY))
        kwargs = api.get_namespaced_custom_object.await_args.kwargs
        assert (kwargs["group"], kwargs["version"], kwargs["plural"]) == ("example.io", "v2", "works")

    def test_get_without_status(self, api):
        body = manifestwork_body()
        del body["status"]
        api.get_namespaced_custom_object.return_value = body
        record = asyncio.run(ManifestWork(api).get(KEY))
        assert record.status.conditions == []
        assert record.status.manifests == []

    def test_get_not_found(self, api):
        api.get_namespaced_custom_object.side_effect = api_exception(404, "NotFound")
        with pytest.raises(NotFoundError):
            asyncio.run(ManifestWork(api).get(KEY))

    def test_get_malformed_status(self, api):
        api.get_namespaced_custom_object.return_value = manifestwork_body(
            status={"resourceStatus": {"manifests": [{"conditions": []}]}}
        )
        with pytest.raises(MalformedStatusError) as exc_info:
            asyncio.run(ManifestWork(api).get(KEY))
        assert exc_info.value.key == KEY
        assert "resourceMeta" in str(exc_info.value)

    def test_get_other_error_propagates(self, api):
        api.get_namespaced_custom_object.side_effect = api_exception(500, "InternalError")
        with pytest.raises(ApiException):
            asyncio.run(ManifestWork(api).get(KEY))


class TestManifestWorkUpdateStatus:
    """Tests for ManifestWork.update_status()."""

    def test_replace_sends_version_and_status(self, api):
        store = ManifestWork(api)
        record = asyncio.run(store.get(KEY))
        record.status.conditions.append(StatusCondition(type="Available", status="Unknown"))

        updated = asyncio.run(store.update_status(record))

        body = api.replace_namespaced_custom_object_status.await_args.kwargs["body"]
        assert body["metadata"]["resourceVersion"] == "10"
        assert body["metadata"]["labels"] == {"app": "web"}
        assert body["spec"] == {"workload": {"manifests": []}}
        assert [c["type"] for c in body["status"]["conditions"]] == ["Applied", "Available"]
        assert body["status"]["observedGeneration"] == 2
        assert updated.resource_version == "11"
        assert [c.type for c in updated.status.conditions] == ["Applied", "Available"]

    def test_replace_does_not_touch_fetched_body(self, api):
        store = ManifestWork(api)
        record = asyncio.run(store.get(KEY))
        record.status.conditions.clear()
        asyncio.run(store.update_status(record))
        assert len(record.body["status"]["conditions"]) == 1

    def test_conflict(self, api):
        api.replace_namespaced_custom_object_status.side_effect = api_exception(409, "Conflict")
        store = ManifestWork(api)
        record = asyncio.run(store.get(KEY))
        with pytest.raises(ConflictError) as exc_info:
            asyncio.run(store.update_status(record))
        assert exc_info.value.resource_version == "10"

    def test_deleted_while_updating(self, api):
        api.replace_namespaced_custom_object_status.side_effect = api_exception(404, "NotFound")
        store = ManifestWork(api)
        record = asyncio.run(store.get(KEY))
        with pytest.raises(NotFoundError):
            asyncio.run(store.update_status(record))

    def test_replace_keeps_unmodelled_resource_status_keys(self, api):
        api.get_namespaced_custom_object.return_value = manifestwork_body(
            status={"resourceStatus": {"manifests": [], "summary": {"total": 0}}}
        )
        store = ManifestWork(api)
        record = asyncio.run(store.get(KEY))
        asyncio.run(store.update_status(record))
        body = api.replace_namespaced_custom_object_status.await_args.kwargs["body"]
        assert body["status"]["resourceStatus"] == {"manifests": [], "summary": {"total": 0}}
