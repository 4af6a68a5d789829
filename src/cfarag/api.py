# src/cfarag/api.py
"""FastAPI application exposing question generation."""

from __future__ import annotations

import asyncio

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cfarag import __version__
from cfarag.exceptions import InvalidTopic
from cfarag.service import GenerateRequest, GenerateResponse, QuestionService
from cfarag.topics import TopicArea, parse_topic

logger = structlog.get_logger(__name__)

GENERATE_PATH = "/api/admin/generate-rag-question"
OBJECTIVES_PATH = "/api/admin/learning-objectives"
DISCONNECT_POLL_SECONDS = 0.5

_OUTCOME_STATUS = {
    "ok": 200,
    "no_source_material": 404,
    "save_failed": 500,
}


async def watch_disconnect(
    request: Request,
    cancel_event: asyncio.Event,
    interval: float = DISCONNECT_POLL_SECONDS,
) -> None:
    """Set ``cancel_event`` once the client has gone away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logger.info("client_disconnected", path=request.url.path)
            cancel_event.set()
            return
        await asyncio.sleep(interval)


def create_app(service: QuestionService) -> FastAPI:
    """Build the app around a configured QuestionService."""
    app = FastAPI(title="CFA RAG Question Generator", version=__version__)
    app.state.service = service

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(InvalidTopic)
    async def _invalid_topic(request: Request, exc: InvalidTopic) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": str(exc), "details": [t.value for t in TopicArea]},
        )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get(GENERATE_PATH)
    def generation_status() -> dict:
        return service.status()

    @app.post(GENERATE_PATH, response_model=GenerateResponse)
    async def generate_questions(payload: GenerateRequest, request: Request) -> JSONResponse:
        # Stop scheduling attempts once the caller disconnects
        cancel_event = asyncio.Event()
        watcher = asyncio.create_task(watch_disconnect(request, cancel_event))
        try:
            response = await service.generate(payload, cancel_event)
        except InvalidTopic:
            raise
        except ValueError as e:
            return JSONResponse(status_code=400, content={"error": str(e), "details": None})
        finally:
            watcher.cancel()
        return JSONResponse(
            status_code=_OUTCOME_STATUS[response.outcome],
            content=response.model_dump(mode="json"),
        )

    @app.get("/api/admin/topics")
    async def list_topics() -> dict:
        return {"topics": await service.topics()}

    @app.get(OBJECTIVES_PATH)
    def list_objectives(topic: str) -> dict:
        return {"topic": parse_topic(topic).value, "objectives": service.objectives(topic)}

    return app
