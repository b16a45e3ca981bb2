import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from pydantic import ValidationError

from app.config import Settings
from app.integrations.memory_store import InMemoryStore
from app.integrations.supabase_store import SupabaseStore
from app.integrations.types import StoreResult
from app.models.steps import ExecutionRecord, StepConfig, WorkflowDefinition

logger = logging.getLogger(__name__)

KeyValueStore = InMemoryStore | SupabaseStore


class WorkflowStoreError(RuntimeError):
    pass


def build_store(settings: Settings) -> KeyValueStore:
    store = SupabaseStore(settings)
    if store.enabled:
        logger.info("workflow store: supabase table=%s", settings.supabase_workflow_table)
        return store
    logger.info("workflow store: in-memory (supabase not configured)")
    return InMemoryStore()


class WorkflowRepository:
    _WORKFLOW_PREFIX = "workflow:"
    _EXECUTION_PREFIX = "execution:"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def create(self, name: str, description: str = "", steps: Sequence[StepConfig] = ()) -> WorkflowDefinition:
        workflow = WorkflowDefinition(
            id=uuid.uuid4().hex,
            name=name,
            description=description,
            steps=list(steps),
            created_at=datetime.now(timezone.utc),
        )
        self._save_workflow(workflow)
        logger.info("workflow created: id=%s name=%s steps=%s", workflow.id, workflow.name, len(workflow.steps))
        return workflow

    def get(self, workflow_id: str) -> WorkflowDefinition | None:
        result, value = self._store.get(self._workflow_key(workflow_id))
        self._check(result)
        if value is None:
            return None
        return WorkflowDefinition.model_validate_json(value)

    def list_workflows(self) -> list[WorkflowDefinition]:
        result, values = self._store.list(self._WORKFLOW_PREFIX)
        self._check(result)
        workflows = self._parse_all(values, WorkflowDefinition)
        return sorted(workflows, key=lambda workflow: workflow.created_at)

    def save_execution(self, record: ExecutionRecord) -> None:
        if not record.workflow_id:
            return
        key = (
            f"{self._EXECUTION_PREFIX}{record.workflow_id}:"
            f"{record.started_at:%Y%m%dT%H%M%S%f}:{record.execution_id}"
        )
        self._check(self._store.put(key, record.model_dump_json()))

        workflow = self.get(record.workflow_id)
        if workflow is None:
            logger.warning("execution saved for missing workflow_id=%s", record.workflow_id)
            return
        self._save_workflow(
            workflow.model_copy(update={"last_run": record.started_at, "last_status": record.status})
        )

    def list_executions(self, workflow_id: str) -> list[ExecutionRecord]:
        result, values = self._store.list(f"{self._EXECUTION_PREFIX}{workflow_id}:")
        self._check(result)
        return self._parse_all(values, ExecutionRecord)

    def _save_workflow(self, workflow: WorkflowDefinition) -> None:
        self._check(self._store.put(self._workflow_key(workflow.id), workflow.model_dump_json()))

    def _workflow_key(self, workflow_id: str) -> str:
        return f"{self._WORKFLOW_PREFIX}{workflow_id}"

    @staticmethod
    def _parse_all(values: list[str], model):
        parsed = []
        for value in values:
            try:
                parsed.append(model.model_validate_json(value))
            except ValidationError:
                logger.warning("skipping unreadable %s entry in store", model.__name__)
        return parsed

    @staticmethod
    def _check(result: StoreResult) -> None:
        if result.status == "error":
            raise WorkflowStoreError(result.message)
