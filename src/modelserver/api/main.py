"""FastAPI surface for the model server."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from ..config import CONFIG, ModelServerConfig
from ..engines import EngineSet, InferenceKind
from ..errors import InferenceError, ModelServerError, SerializationError, VideoProcessingError
from ..logging import get_logger
from ..models import ErrorResponse, ResizeBounds
from ..serialization import render_json
from ..video import VideoResizer
from . import deps

log = get_logger(__name__)

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
INFERENCE_PATH = "/inference"
RESIZE_VIDEO_PATH = "/resize-video"
_REJECTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "TRACE"]


def cors_headers(config: ModelServerConfig, preflight: bool = False) -> Dict[str, str]:
    headers = {ALLOW_ORIGIN: config.api.cors_allow_origin}
    if preflight:
        headers["Access-Control-Allow-Methods"] = config.api.cors_allow_methods
        headers["Access-Control-Allow-Headers"] = config.api.cors_allow_headers
    return headers


def _error_response(config: ModelServerConfig, status_code: int, error: str, details: str) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers=cors_headers(config),
    )


async def _dispatch_inference(
    request: Request,
    engines: EngineSet,
    inference_type: Optional[str],
    config: ModelServerConfig,
) -> Response:
    body = await request.body()
    text = body.decode("utf-8", errors="replace")
    kind = InferenceKind.from_header(inference_type)
    engine = engines.select(kind)
    log.info("inference.dispatch", kind=kind.value, path=request.url.path, payload_bytes=len(body))

    try:
        predictions = await run_in_threadpool(engine.infer, text)
    except Exception as exc:
        raise InferenceError(f"{kind.value} inference failed: {exc}") from exc

    content = render_json(predictions)
    return Response(content=content, media_type="application/json", headers=cors_headers(config))


def create_app(config: ModelServerConfig | None = None) -> FastAPI:
    """Build the application for ``config`` (the environment config by default)."""

    config = config or CONFIG

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        deps.load_app_engines(app)
        if config.video.enabled:
            config.video.tmp_dir.mkdir(parents=True, exist_ok=True)
        log.info(
            "server.started",
            address=f"http://{config.api.host}:{config.api.port}",
            routing=config.api.routing,
            video_enabled=config.video.enabled,
        )
        yield
        deps.reset_dependencies(app)

    app = FastAPI(
        title="Model Server",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.config = config

    @app.middleware("http")
    async def _allow_origin(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault(ALLOW_ORIGIN, config.api.cors_allow_origin)
        return response

    @app.exception_handler(SerializationError)
    async def _serialization_failed(request: Request, exc: SerializationError) -> JSONResponse:
        log.error("inference.serialization_failed", path=request.url.path, error=str(exc))
        return _error_response(config, 500, "Failed to serialize inference result", str(exc))

    @app.exception_handler(InferenceError)
    async def _inference_failed(request: Request, exc: InferenceError) -> JSONResponse:
        log.error("inference.failed", path=request.url.path, error=str(exc))
        return _error_response(config, 500, "Inference failed", str(exc))

    @app.exception_handler(ModelServerError)
    async def _server_error(request: Request, exc: ModelServerError) -> JSONResponse:
        log.error("request.failed", path=request.url.path, error=str(exc))
        return _error_response(config, 500, "Request failed", str(exc))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        log.exception("request.unhandled", path=request.url.path)
        return _error_response(config, 500, "Internal server error", str(exc))

    @app.options("/{path:path}")
    def preflight(path: str) -> Response:
        return Response(status_code=204, headers=cors_headers(config, preflight=True))

    if config.video.enabled:

        @app.post(RESIZE_VIDEO_PATH)
        async def resize_video(
            request: Request,
            resizer: VideoResizer = Depends(deps.get_video_resizer),
            x_max_width: Optional[str] = Header(default=None),
            x_max_height: Optional[str] = Header(default=None),
        ) -> Response:
            bounds = ResizeBounds.from_headers(
                x_max_width,
                x_max_height,
                config.video.default_max_width,
                config.video.default_max_height,
            )
            data = await request.body()
            log.info(
                "video.request",
                input_bytes=len(data),
                max_width=bounds.max_width,
                max_height=bounds.max_height,
            )
            try:
                payload = await run_in_threadpool(resizer.resize, data, bounds.max_width, bounds.max_height)
            except VideoProcessingError as exc:
                log.error("video.failed", error=str(exc))
                return _error_response(config, 500, "Failed to process video", str(exc))
            return Response(content=payload, media_type="video/mp4", headers=cors_headers(config))

    @app.post(INFERENCE_PATH)
    async def inference(
        request: Request,
        engines: EngineSet = Depends(deps.get_engines),
        x_inference_type: Optional[str] = Header(default=None),
    ) -> Response:
        return await _dispatch_inference(request, engines, x_inference_type, config)

    if config.api.routing == "implicit":

        @app.post("/{path:path}")
        async def inference_any_path(
            request: Request,
            path: str,
            engines: EngineSet = Depends(deps.get_engines),
            x_inference_type: Optional[str] = Header(default=None),
        ) -> Response:
            return await _dispatch_inference(request, engines, x_inference_type, config)

    else:

        @app.post("/{path:path}")
        def unknown_path(path: str) -> Response:
            return PlainTextResponse("Not found", status_code=404, headers=cors_headers(config))

    @app.api_route("/{path:path}", methods=_REJECTED_METHODS)
    def method_not_allowed(path: str) -> Response:
        return PlainTextResponse("Method not allowed", status_code=405, headers=cors_headers(config))

    return app


app = create_app()

__all__ = ["app", "cors_headers", "create_app"]
