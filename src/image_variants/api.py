"""FastAPI application exposing the variant pipeline over HTTP."""

import os
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from .core.config import ServiceConfig
from .core.exceptions import ImageVariantsError, ValidationError
from .core.factories import PipelineFactory
from .core.logging_config import get_logger
from .core.services import VariantPipeline, parse_size_label
from .schemas import (
    HealthResponse,
    ImageIDRequest,
    StatusResponse,
    UploadImageRequest,
    UploadImageResponse,
    WatermarkAssetRequest,
    WatermarkAssetResponse,
)

logger = get_logger("image-variants.api")

router = APIRouter(prefix="/v1")

frontend_router = APIRouter()


def _pipeline(request: Request) -> VariantPipeline:
    return request.app.state.pipeline


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(message="API is working fine")


@router.post("/health", response_model=UploadImageResponse)
def post_image(body: UploadImageRequest, request: Request) -> UploadImageResponse:
    result = _pipeline(request).upload(body.base64image)
    logger.info(f"Image uploaded with ID: {result.image_id}")
    return UploadImageResponse(status=result.status, imageID=result.image_id)


@router.post("/health/{size}", response_model=StatusResponse)
def post_image_resize(size: str, body: ImageIDRequest, request: Request) -> StatusResponse:
    size_label = parse_size_label(size)
    result = _pipeline(request).resize(body.imageID, size_label)
    return StatusResponse(status=result.status)


@router.post("/health/{size}/water", response_model=StatusResponse)
def post_image_watermark(size: str, body: ImageIDRequest, request: Request) -> StatusResponse:
    size_label = parse_size_label(size)
    result = _pipeline(request).ensure_watermark(body.imageID, size_label)
    return StatusResponse(status=result.status)


@router.get("/health/{image_id}/{size}")
def get_image(image_id: str, size: str, request: Request) -> Response:
    artifact = _pipeline(request).fetch_variant(image_id, parse_size_label(size))
    return Response(content=artifact.body, media_type=artifact.content_type)


@router.get("/health/{image_id}/{size}/water")
def get_watermarked_image(image_id: str, size: str, request: Request) -> Response:
    artifact = _pipeline(request).fetch_watermarked(image_id, parse_size_label(size))
    return Response(content=artifact.body, media_type=artifact.content_type)


@router.post("/uploadWatermark", response_model=WatermarkAssetResponse)
def post_watermark_image(body: WatermarkAssetRequest, request: Request) -> WatermarkAssetResponse:
    result = _pipeline(request).upload_watermark_asset(body.base64image, body.imagename)
    logger.info(f"Watermark image uploaded with name: {body.imagename}")
    return WatermarkAssetResponse(status=result.status, imageName=body.imagename or "")


@frontend_router.get("/", include_in_schema=False)
def index_page(request: Request) -> Response:
    index_path = os.path.join(request.app.state.static_dir, "index.html")
    if not os.path.isfile(index_path):
        return JSONResponse(status_code=404, content={"error": "index.html not found"})
    return FileResponse(index_path)


def _error_body(exc: ImageVariantsError) -> dict:
    body = {"error": exc.message}
    if exc.step:
        body["step"] = exc.step
    return body


async def handle_pipeline_error(request: Request, exc: ImageVariantsError) -> JSONResponse:
    status_code = 400 if isinstance(exc, ValidationError) else 500
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content=_error_body(exc))


async def handle_invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: invalid request body")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(
    pipeline: Optional[VariantPipeline] = None,
    config: Optional[ServiceConfig] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        pipeline: Pre-built pipeline; created from ``config`` when omitted
        config: Service configuration; read from the environment when omitted,
            or taken from ``pipeline``

    When ``config.static_dir`` is an existing directory, it is served under
    ``/static`` and its ``index.html`` at ``/``.
    """
    if pipeline is None:
        pipeline = PipelineFactory.create_pipeline(config=config)
    if config is None:
        config = pipeline.config

    app = FastAPI(title="Image Variants", version="0.1.0")
    app.state.pipeline = pipeline
    app.include_router(router)

    if config.static_dir and os.path.isdir(config.static_dir):
        app.state.static_dir = config.static_dir
        app.mount("/static", StaticFiles(directory=config.static_dir), name="static")
        app.include_router(frontend_router)
        logger.info(f"Serving front end from {config.static_dir}")
    elif config.static_dir:
        logger.warning(f"Static directory {config.static_dir} does not exist, front end disabled")

    app.add_exception_handler(ImageVariantsError, handle_pipeline_error)
    app.add_exception_handler(RequestValidationError, handle_invalid_request)
    return app
