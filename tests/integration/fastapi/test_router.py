"""Integration tests for the FastAPI purge router."""

from datetime import datetime
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from edgepurge import (
    AutoPurgeEngine,
    EngineConfig,
    InMemoryPurgeGateway,
    PolicyStore,
    PurgePolicy,
)
from edgepurge.adapters.fastapi import create_purge_router
from edgepurge.infrastructure.stores.memory import InMemoryAuditSink


class FailingAuditSink:
    """Audit sink whose writes always fail."""

    async def record(
        self, event_type: str, details: dict[str, Any], timestamp: datetime
    ) -> None:
        raise OSError("audit table missing")


class FailingPolicyRepository:
    """Policy repository whose writes always fail."""

    async def get(self, key: str) -> dict[str, Any] | None:
        return None

    async def put(self, key: str, value: dict[str, Any]) -> None:
        raise OSError("settings table locked")


def make_client(engine: AutoPurgeEngine, **router_options: Any) -> TestClient:
    app = FastAPI()
    router = create_purge_router(engine, **router_options)
    app.include_router(router, prefix="/auto-purge")
    return TestClient(app)


POST_EVENT = {
    "content_type": "post",
    "action": "published",
    "content_id": "1",
    "url": "https://ex.com/p/1",
    "title": "Hello",
}


class TestPolicyRoutes:
    """Tests for GET and PUT /policy."""

    def test_get_policy(self, make_engine) -> None:
        """Test the current policy is returned."""
        client = make_client(make_engine())

        response = client.get("/auto-purge/policy")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["enabled"] is True
        assert body["data"]["purge_delay_ms"] == 0

    def test_put_policy(self, make_engine) -> None:
        """Test a new policy is applied."""
        engine = make_engine()
        client = make_client(engine)
        new_policy = PurgePolicy(purge_entire_site=True, purge_delay_ms=0).to_dict()

        response = client.put("/auto-purge/policy", json=new_policy)

        assert response.status_code == 200
        assert response.json()["data"]["purge_entire_site"] is True
        assert engine.get_policy().purge_entire_site

    def test_put_partial_policy(self, make_engine) -> None:
        """Test omitted fields take their defaults."""
        engine = make_engine()
        client = make_client(engine)

        response = client.put("/auto-purge/policy", json={"enabled": False})

        assert response.status_code == 200
        assert not engine.get_policy().enabled
        assert engine.get_policy().purge_delay_ms == 500

    def test_put_invalid_policy(self, make_engine) -> None:
        """Test invalid values are rejected and the policy is unchanged."""
        engine = make_engine()
        client = make_client(engine)

        response = client.put("/auto-purge/policy", json={"purge_delay_ms": -1})

        assert response.status_code == 400
        assert engine.get_policy().purge_delay_ms == 0

    def test_put_without_persistence(self) -> None:
        """Test persist_policy=False only updates memory."""
        engine = AutoPurgeEngine(EngineConfig(site_url="https://ex.com"))
        client = make_client(engine, persist_policy=False)

        response = client.put("/auto-purge/policy", json={"enabled": False})

        assert response.status_code == 200
        assert not engine.get_policy().enabled

    def test_put_without_repository_keeps_policy(self) -> None:
        """Test a policy that cannot be saved is not applied."""
        engine = AutoPurgeEngine(EngineConfig(site_url="https://ex.com"))
        client = make_client(engine)

        response = client.put("/auto-purge/policy", json={"enabled": False})

        assert response.status_code == 400
        assert engine.get_policy().enabled

    def test_put_storage_failure_keeps_policy(self) -> None:
        """Test a failed write rolls the in-memory policy back."""
        store = PolicyStore(repository=FailingPolicyRepository())
        engine = AutoPurgeEngine(
            EngineConfig(site_url="https://ex.com"), policy_store=store
        )
        client = make_client(engine)

        with pytest.raises(OSError):
            client.put("/auto-purge/policy", json={"enabled": False})

        assert engine.get_policy().enabled


class TestEventRoutes:
    """Tests for POST /events and /events/preview."""

    def test_post_event(
        self,
        make_engine,
        gateway: InMemoryPurgeGateway,
        audit_sink: InMemoryAuditSink,
    ) -> None:
        """Test an accepted event is audited and purged."""
        client = make_client(make_engine())

        response = client.post("/auto-purge/events", json=POST_EVENT)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["state"] == "done"
        assert data["skipped"] is None
        assert data["purged_urls"] == 12
        assert data["batches"] == 1
        assert len(gateway.url_batches) == 1
        assert len(audit_sink) == 1

    def test_post_gated_event(self, make_engine, gateway: InMemoryPurgeGateway) -> None:
        """Test skipped events report the reason."""
        client = make_client(make_engine(policy=PurgePolicy(enabled=False)))

        response = client.post("/auto-purge/events", json=POST_EVENT)

        assert response.status_code == 200
        assert response.json()["data"]["skipped"] == "disabled"
        assert gateway.calls == []

    def test_gateway_failure(self, make_engine) -> None:
        """Test purge API failures map to 502."""
        engine = make_engine(gateway=InMemoryPurgeGateway(fail_on_call=1))
        client = make_client(engine)

        response = client.post("/auto-purge/events", json=POST_EVENT)

        assert response.status_code == 502

    def test_audit_failure(self, make_engine, gateway: InMemoryPurgeGateway) -> None:
        """Test audit failures map to 503 and nothing is purged."""
        client = make_client(make_engine(audit_sink=FailingAuditSink()))

        response = client.post("/auto-purge/events", json=POST_EVENT)

        assert response.status_code == 503
        assert gateway.calls == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"action": "published"},
            {"content_type": "post", "action": "exploded"},
            {"content_type": "post", "action": "updated", "timestamp": "yesterday"},
            {"content_type": 5, "action": "created"},
            {"content_type": "post", "action": ["updated"]},
            {
                "content_type": "post",
                "action": "updated",
                "related_urls": "https://ex.com/a",
            },
            {"content_type": "post", "action": "updated", "related_urls": [1, 2]},
            {"content_type": "post", "action": "updated", "url": 42},
        ],
    )
    def test_invalid_event(self, make_engine, payload: dict[str, Any]) -> None:
        """Test malformed events are rejected with 422."""
        client = make_client(make_engine())

        response = client.post("/auto-purge/events", json=payload)

        assert response.status_code == 422

    def test_preview(
        self,
        make_engine,
        gateway: InMemoryPurgeGateway,
        audit_sink: InMemoryAuditSink,
    ) -> None:
        """Test preview lists URLs without purging or auditing."""
        client = make_client(make_engine())

        response = client.post("/auto-purge/events/preview", json=POST_EVENT)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 12
        assert "https://ex.com/p/1/" in data["urls"]
        assert gateway.calls == []
        assert len(audit_sink) == 0
