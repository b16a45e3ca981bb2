import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.commands.base import CommandContext
from app.commands.router import CommandRouter
from app.commands.state import BotState
from app.config import get_settings
from app.models.proxy import ProxyRequest
from app.models.requests import BotExecuteRequest, BotMessageRequest, WorkflowCreateRequest, WorkflowRunRequest
from app.models.steps import ExecutionRecord, WorkflowDefinition
from app.outbound.proxy import OutboundRequestProxy
from app.time_utils import utc_now_iso
from app.workflows.dispatcher import StepDispatcher
from app.workflows.repository import WorkflowRepository, WorkflowStoreError, build_store

logger = logging.getLogger(__name__)
settings = get_settings()
bot_state = BotState(settings.bot_history_max_entries)
outbound_proxy = OutboundRequestProxy(settings.proxy_step_timeout_ms)
command_router = CommandRouter(settings, outbound_proxy)
step_dispatcher = StepDispatcher(outbound_proxy, request_timeout_ms=settings.proxy_step_timeout_ms)
workflow_repository = WorkflowRepository(build_store(settings))


@asynccontextmanager
async def lifespan(_: FastAPI):
    bot_state.is_active = True
    logger.info("%s started", settings.service_name)
    try:
        yield
    finally:
        bot_state.is_active = False
        logger.info("%s stopped", settings.service_name)


app = FastAPI(
    title="Zen API Automator",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(WorkflowStoreError)
async def workflow_store_error_handler(_: Request, exc: WorkflowStoreError) -> JSONResponse:
    logger.error("workflow store unavailable: %s", exc)
    return _error_response(503, f"workflow store unavailable: {exc}")


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.info("rejected %s %s: %s", request.method, request.url.path, details)
    return _error_response(422, f"Invalid request: {details}")


@app.get("/")
async def root() -> dict[str, Any]:
    return {
        "message": "Zen API Automator Bot Server",
        "version": app.version,
        "endpoints": [
            "/bot/message - Send message to bot",
            "/bot/status - Get bot status",
            "/bot/history - Get message history",
            "/bot/execute - Execute bot command",
            "/api/execute-curl - Proxy one HTTP request",
            "/api/test-connection - Check that an endpoint answers",
            "/api/workflows - Create, list and run workflows",
            "/health - Health check",
        ],
    }


@app.get("/health")
async def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": utc_now_iso(),
        "service": settings.service_name,
        "botActive": bot_state.is_active,
    }


@app.post("/bot/message")
async def bot_message(payload: BotMessageRequest):
    logger.info("bot received message from user_id=%s", payload.user_id)
    bot_state.record_message(payload.message, payload.user_id, "user")
    context = CommandContext(user_id=payload.user_id, text=payload.message, state=bot_state)

    try:
        result = await command_router.route(context)
    except Exception:
        logger.exception("bot message handling failed user_id=%s", payload.user_id)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Failed to process message",
                "response": "Sorry, I encountered an error. Please try again.",
                "timestamp": utc_now_iso(),
            },
        )

    bot_state.record_message(result.response_text, "bot", "bot")
    return {
        "success": True,
        "response": result.response_text,
        "intent": result.intent.model_dump(mode="json"),
        "timestamp": utc_now_iso(),
        "botStatus": bot_state.is_active,
    }


@app.get("/bot/status")
async def bot_status() -> dict[str, Any]:
    return bot_state.snapshot()


@app.get("/bot/history")
async def bot_history(limit: int = 50) -> dict[str, Any]:
    return {
        "success": True,
        "history": [entry.model_dump(mode="json", by_alias=True) for entry in bot_state.history(limit)],
        "total": bot_state.total_messages,
    }


@app.post("/bot/execute")
async def bot_execute(payload: BotExecuteRequest):
    context = CommandContext(user_id="api", text="", state=bot_state)
    try:
        result = await command_router.execute_action(payload.command, payload.parameters, context)
    except ValueError as exc:
        return _error_response(400, str(exc))
    except Exception as exc:
        logger.exception("bot action failed command=%s", payload.command)
        return _error_response(500, str(exc) or "bot action failed")

    return {"success": True, "result": result, "timestamp": utc_now_iso()}


@app.post("/api/execute-curl")
async def execute_curl(payload: ProxyRequest):
    result = await outbound_proxy.execute(payload, timeout_ms=settings.proxy_step_timeout_ms)
    content = result.model_dump(mode="json")
    content["timestamp"] = utc_now_iso()
    return JSONResponse(status_code=200 if result.success else 400, content=content)


@app.post("/api/test-connection")
async def test_connection(payload: ProxyRequest):
    result = await outbound_proxy.execute(
        payload.model_copy(update={"body": None}),
        timeout_ms=settings.proxy_command_timeout_ms,
    )
    if not result.success:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": result.error, "status": result.status},
        )
    return {
        "success": True,
        "status": result.status,
        "responseTime": result.headers.get("x-response-time") or f"{result.duration_ms}ms",
    }


@app.get("/api/workflows")
async def list_workflows() -> list[dict[str, Any]]:
    return [workflow.model_dump(mode="json") for workflow in workflow_repository.list_workflows()]


@app.post("/api/workflows")
async def create_workflow(payload: WorkflowCreateRequest) -> dict[str, Any]:
    workflow = workflow_repository.create(payload.name, payload.description, payload.steps)
    return workflow.model_dump(mode="json")


@app.post("/api/workflows/execute")
async def execute_steps(payload: WorkflowRunRequest) -> dict[str, Any]:
    record = await step_dispatcher.execute(payload.steps)
    return _execution_envelope(record)


@app.get("/api/workflows/{workflow_id}")
async def get_workflow(workflow_id: str) -> dict[str, Any]:
    return _require_workflow(workflow_id).model_dump(mode="json")


@app.post("/api/workflows/{workflow_id}/execute")
async def execute_workflow(workflow_id: str) -> dict[str, Any]:
    workflow = _require_workflow(workflow_id)
    record = await step_dispatcher.execute(workflow.steps, workflow_id=workflow.id)
    workflow_repository.save_execution(record)
    return _execution_envelope(record)


@app.get("/api/workflows/{workflow_id}/executions")
async def list_workflow_executions(workflow_id: str) -> dict[str, Any]:
    _require_workflow(workflow_id)
    executions = workflow_repository.list_executions(workflow_id)
    return {
        "success": True,
        "executions": [record.model_dump(mode="json") for record in executions],
        "total": len(executions),
    }


def _require_workflow(workflow_id: str) -> WorkflowDefinition:
    workflow = workflow_repository.get(workflow_id)
    if workflow is None:
        raise HTTPException(status_code=404, detail="workflow not found")
    return workflow


def _execution_envelope(record: ExecutionRecord) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        "success": record.success,
        "result": record.model_dump(mode="json"),
        "timestamp": utc_now_iso(),
    }
    for index, step_result in enumerate(record.results, start=1):
        if not step_result.success:
            envelope["error"] = f"Step {index} failed: {step_result.error}"
            break
    return envelope


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "timestamp": utc_now_iso()},
    )


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.app_host, port=settings.app_port)
