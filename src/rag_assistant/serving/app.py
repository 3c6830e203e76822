"""FastAPI application exposing document upload and question answering."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from rag_assistant.config import Settings, settings
from rag_assistant.container import ServiceContainer
from rag_assistant.errors import ErrorKind, RagError
from rag_assistant.generation.orchestrator import AnswerResult

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNSUPPORTED_FORMAT: 415,
    ErrorKind.SERVICE: 500,
}


def _error_response(exc: Exception, prefix: str) -> PlainTextResponse:
    """Map an exception to a plain-text response, status chosen by its kind."""
    kind = exc.kind if isinstance(exc, RagError) else ErrorKind.SERVICE
    status = STATUS_BY_KIND[kind]
    if status >= 500:
        logger.error("%s", prefix, exc_info=exc)
        return PlainTextResponse(f"{prefix}: {exc}", status_code=status)
    return PlainTextResponse(str(exc), status_code=status)


def _container(request: Request) -> ServiceContainer:
    return request.app.state.container


def create_app(container: ServiceContainer | None = None, config: Settings = settings) -> FastAPI:
    """Build the app.  Without *container*, one is created from *config* at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.container is None
        if owned:
            app.state.container = ServiceContainer.from_settings(config)
        logger.info("RAG assistant started")
        yield
        if owned:
            app.state.container.close()
            app.state.container = None
        logger.info("RAG assistant stopped")

    app = FastAPI(
        title="RAG Assistant API",
        version="0.1.0",
        description="Upload documents and ask questions answered from their content.",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ────────────────────────────────────────────────────────
    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/ready")
    def readiness(request: Request) -> JSONResponse:
        """Readiness probe: 503 until the vector store answers."""
        if _container(request).store.health_check():
            return JSONResponse({"status": "ready"})
        return JSONResponse({"status": "unavailable"}, status_code=503)

    @app.post("/api/upload", response_class=PlainTextResponse)
    def upload_document(request: Request, file: UploadFile = File(...)) -> PlainTextResponse:
        """Extract, chunk, embed and index an uploaded document."""
        try:
            data = file.file.read()
            report = _container(request).ingestor.ingest_file(file.filename or "", data)
        except Exception as exc:
            return _error_response(exc, "Error processing document")
        logger.info(
            "Indexed %s as %s (%d chunks)", report.document_name, report.document_id, report.chunk_count
        )
        return PlainTextResponse("Document processed successfully")

    @app.post("/api/ask", response_model=AnswerResult)
    def ask_question(request: Request, question: str = Form("")) -> AnswerResult | PlainTextResponse:
        """Answer a question with sources and processing time."""
        try:
            return _container(request).orchestrator.answer(question, detailed=True)
        except Exception as exc:
            return _error_response(exc, "Error generating answer")

    @app.post("/api/simple-ask", response_class=PlainTextResponse)
    def ask_simple_question(request: Request, question: str = Form("")) -> PlainTextResponse:
        """Legacy endpoint: answer text only."""
        try:
            answer = _container(request).orchestrator.answer(question, detailed=False)
        except Exception as exc:
            return _error_response(exc, "Error generating answer")
        return PlainTextResponse(answer)

    return app


app = create_app()


def main() -> None:
    """Serve :data:`app` with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
