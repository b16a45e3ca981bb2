from datetime import datetime, timezone

import pytest

from app.config import Settings
from app.integrations.memory_store import InMemoryStore
from app.integrations.types import StoreResult
from app.models.steps import ExecutionRecord, StepResult, parse_steps
from app.workflows.repository import WorkflowRepository, WorkflowStoreError, build_store


class _BrokenStore:
    def get(self, key: str) -> tuple[StoreResult, str | None]:
        return StoreResult("supabase", "error", "connection reset"), None

    def put(self, key: str, value: str) -> StoreResult:
        return StoreResult("supabase", "error", "connection reset")

    def list(self, prefix: str) -> tuple[StoreResult, list[str]]:
        return StoreResult("supabase", "error", "connection reset"), []


def _record(workflow_id: str, execution_id: str, second: int, success: bool) -> ExecutionRecord:
    result = (
        StepResult(type="request", success=True, status=200)
        if success
        else StepResult(type="request", success=False, error="timeout of 30000ms exceeded")
    )
    return ExecutionRecord(
        execution_id=execution_id,
        workflow_id=workflow_id,
        status="completed" if success else "failed",
        success=success,
        results=[result],
        started_at=datetime(2026, 3, 1, 12, 0, second, tzinfo=timezone.utc),
    )


def test_create_get_and_list_workflows() -> None:
    repository = WorkflowRepository(InMemoryStore())
    steps = parse_steps([{"type": "curl", "config": {"url": "https://a.io"}}])

    first = repository.create("Daily API Health Check", "Checks status of all connected APIs", steps)
    second = repository.create("Customer Onboarding")

    assert repository.get(first.id) == first
    assert repository.get("missing") is None
    assert {w.id for w in repository.list_workflows()} == {first.id, second.id}
    assert first.status == "inactive"


def test_save_execution_stamps_workflow_and_lists_in_order() -> None:
    repository = WorkflowRepository(InMemoryStore())
    workflow = repository.create("Social Media Poster")
    other = repository.create("Other")

    repository.save_execution(_record(workflow.id, "exec_b", 30, success=False))
    repository.save_execution(_record(workflow.id, "exec_a", 10, success=True))
    repository.save_execution(_record(other.id, "exec_c", 20, success=True))

    executions = repository.list_executions(workflow.id)
    updated = repository.get(workflow.id)

    assert [e.execution_id for e in executions] == ["exec_a", "exec_b"]
    assert updated is not None
    assert updated.last_status == "completed"
    assert updated.last_run == datetime(2026, 3, 1, 12, 0, 10, tzinfo=timezone.utc)


def test_ad_hoc_execution_is_not_saved() -> None:
    store = InMemoryStore()
    repository = WorkflowRepository(store)

    repository.save_execution(_record("", "exec_1", 0, success=True))

    assert store.list("execution:")[1] == []


def test_store_errors_surface() -> None:
    repository = WorkflowRepository(_BrokenStore())  # type: ignore[arg-type]

    with pytest.raises(WorkflowStoreError, match="connection reset"):
        repository.list_workflows()
    with pytest.raises(WorkflowStoreError):
        repository.create("Anything")


def test_build_store_defaults_to_memory() -> None:
    assert isinstance(build_store(Settings()), InMemoryStore)


def test_execution_keys_sort_by_start_time() -> None:
    store = InMemoryStore()
    repository = WorkflowRepository(store)
    workflow = repository.create("Keyed")

    repository.save_execution(_record(workflow.id, "exec_1", 5, success=True))

    keys = [key for key in store._values if key.startswith("execution:")]
    assert keys == [f"execution:{workflow.id}:20260301T120005000000:exec_1"]
