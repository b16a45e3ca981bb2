import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone

from app.models.steps import (
    ExecutionRecord,
    InvalidStep,
    PhoneCallStep,
    RequestStep,
    SiteGenerateStep,
    StepConfig,
    StepResult,
)
from app.outbound.proxy import OutboundRequestProxy
from app.outbound.simulated import analyze_phone_call, generate_site

logger = logging.getLogger(__name__)

StepHandler = Callable[[StepConfig], Awaitable[StepResult]]


class StepDispatcher:
    def __init__(self, proxy: OutboundRequestProxy, *, request_timeout_ms: int = 30000) -> None:
        self._proxy = proxy
        self._request_timeout_ms = request_timeout_ms
        self._handlers: dict[type, StepHandler] = {
            RequestStep: self._run_request,
            PhoneCallStep: self._run_phone_call,
            SiteGenerateStep: self._run_site_generate,
            InvalidStep: self._run_invalid,
        }

    async def run(self, steps: Sequence[StepConfig]) -> list[StepResult]:
        results: list[StepResult] = []
        for index, step in enumerate(steps, start=1):
            results.append(await self._run_step(index, step))
        return results

    async def execute(self, steps: Sequence[StepConfig], *, workflow_id: str | None = None) -> ExecutionRecord:
        started_at = datetime.now(timezone.utc)
        started = time.monotonic()
        results = await self.run(steps)
        success = all(result.success for result in results)
        record = ExecutionRecord(
            execution_id=uuid.uuid4().hex,
            workflow_id=workflow_id,
            status="completed" if success else "failed",
            success=success,
            results=results,
            started_at=started_at,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        logger.info(
            "workflow execution finished: workflow_id=%s execution_id=%s steps=%s status=%s duration_ms=%s",
            workflow_id,
            record.execution_id,
            len(results),
            record.status,
            record.duration_ms,
        )
        return record

    async def _run_step(self, index: int, step: StepConfig) -> StepResult:
        handler = self._handlers.get(type(step))
        if handler is None:
            step_type = step.type or "<missing>"
            logger.warning("step %s has unknown type %r", index, step_type)
            return StepResult(type=step.type, success=False, error=f"Unknown step type: {step_type}")

        try:
            return await handler(step)
        except Exception as exc:
            logger.exception("step %s (%s) raised", index, step.type)
            return StepResult(type=step.type, success=False, error=str(exc) or exc.__class__.__name__)

    async def _run_request(self, step: RequestStep) -> StepResult:
        result = await self._proxy.execute(step.config, timeout_ms=self._request_timeout_ms)
        return StepResult(
            type=step.type,
            success=result.success,
            status=result.status,
            data=result.data,
            error=result.error,
        )

    async def _run_phone_call(self, step: PhoneCallStep) -> StepResult:
        if not step.config.phone_number:
            return StepResult(type=step.type, success=False, error="phoneNumber is required for phone_call steps")
        return StepResult(type=step.type, success=True, data=analyze_phone_call(step.config))

    async def _run_site_generate(self, step: SiteGenerateStep) -> StepResult:
        return StepResult(type=step.type, success=True, data=generate_site(step.config))

    async def _run_invalid(self, step: InvalidStep) -> StepResult:
        logger.warning("step %s rejected: %s", step.type or "<missing>", step.error)
        return StepResult(type=step.type, success=False, error=step.error)
