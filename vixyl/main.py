"""Vixyl microservice -- FastAPI application.

Endpoints:
    POST /encode   -- Encode an uploaded file to a Vixyl PNG image
    POST /decode   -- Decode a Vixyl PNG image back to the file
    GET  /formats  -- List payload formats
    GET  /health   -- Health check
"""

from __future__ import annotations

import base64
from pathlib import PurePath

import structlog
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .decoder import decode_image
from .encoder import encode
from .errors import VixylError
from .formats import FormatTag
from .protocol import FileInfo
from .renderer import RenderOptions, render_png

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

VERSION = "0.1.0"

# Upload limits; spiral generation is linear in the input size
MAX_UPLOAD_BYTES = 1024 * 1024
MAX_IMAGE_BYTES = 32 * 1024 * 1024

app = FastAPI(
    title="vixyl",
    description="Vixyl spiral-groove file <-> image encoder/decoder",
    version=VERSION,
)


# --------------------------------------------------------------------------
# Response models
# --------------------------------------------------------------------------


class DecodeResponse(BaseModel):
    """Response body for /decode."""

    file_type: str | None = Field(
        default=None,
        description="Decoded file type label, or null if decode failed",
    )
    data_base64: str | None = Field(
        default=None,
        description="Decoded file content (base64), or null if decode failed",
    )
    size: int | None = Field(
        default=None,
        description="Decoded file size in bytes",
    )
    error: str | None = Field(
        default=None,
        description="Error message if decode failed",
    )


class FormatInfo(BaseModel):
    """One entry of /formats."""

    tag: int
    name: str


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


def _file_type_from_name(filename: str | None) -> str:
    """Extension of an uploaded file name without the dot ("" if none)."""
    if not filename:
        return ""
    return PurePath(filename).suffix.lstrip(".")


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/encode",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG-encoded Vixyl"},
        413: {"description": "Upload too large"},
        422: {"description": "Invalid input"},
        500: {"description": "Encoding failed"},
    },
)
async def encode_png(
    file: UploadFile = File(...),
    file_type: str | None = Form(default=None, description="Type label; defaults to the extension"),
    format_tag: int = Form(default=int(FormatTag.GRAY), description="Payload format tag"),
    background: str | None = Form(default=None, description="Record color as #rrggbb"),
) -> Response:
    """Encode an uploaded file into a Vixyl PNG image."""
    data = await file.read()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large (max {MAX_UPLOAD_BYTES} bytes)",
        )

    label = file_type if file_type is not None else _file_type_from_name(file.filename)

    try:
        options = RenderOptions.from_hex(background) if background else RenderOptions()
        plan = encode(FileInfo(type=label, data=data), format_tag)
        png_bytes = render_png(plan, options)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("encode_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Encoding failed")

    logger.info("encode_served", file_type=label, data_bytes=len(data), png_bytes=len(png_bytes))
    return Response(content=png_bytes, media_type="image/png")


@app.post("/decode", response_model=DecodeResponse)
async def decode_endpoint(file: UploadFile = File(...)) -> DecodeResponse:
    """Decode a Vixyl PNG image back to the original file."""
    if file.content_type and file.content_type not in ("image/png", "application/octet-stream"):
        raise HTTPException(
            status_code=422,
            detail=f"Unsupported image type: {file.content_type}. Use PNG.",
        )

    image_bytes = await file.read()
    if len(image_bytes) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Image too large (max {MAX_IMAGE_BYTES} bytes)",
        )

    try:
        decoded = decode_image(image_bytes)
    except VixylError as e:
        logger.warning("decode_failed", error=str(e), error_type=type(e).__name__)
        return DecodeResponse(error=str(e))
    except Exception as e:
        logger.error("decode_endpoint_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail="Decoding failed")

    return DecodeResponse(
        file_type=decoded.type,
        data_base64=base64.b64encode(decoded.data).decode("ascii"),
        size=len(decoded.data),
    )


@app.get("/formats", response_model=list[FormatInfo])
async def list_formats() -> list[FormatInfo]:
    """Payload formats accepted by /encode."""
    return [FormatInfo(tag=int(tag), name=tag.name) for tag in FormatTag]


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service="vixyl",
        version=VERSION,
    )
