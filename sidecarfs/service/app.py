"""FastAPI application exposing the sidecar filesystem to the remote host."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from ..config import SidecarConfig
from ..errors import AccessError, AccessErrorCode, UnsupportedOperationError
from ..logging import get_logger
from ..registration import (
    CONTENT_READER_CAPABILITY,
    FILE_SYSTEM_CAPABILITY,
    build_registry,
)
from .content_reader import ContentReader
from .file_system import FileAccessService

logger = get_logger("service.app")

_STATUS_BY_CODE: Dict[AccessErrorCode, int] = {
    AccessErrorCode.NOT_FOUND: 404,
    AccessErrorCode.ALREADY_EXISTS: 409,
    AccessErrorCode.NOT_A_DIRECTORY: 400,
    AccessErrorCode.IS_A_DIRECTORY: 400,
    AccessErrorCode.EXCEEDS_MEMORY_LIMIT: 507,
    AccessErrorCode.TOO_LARGE: 413,
    AccessErrorCode.NO_PERMISSION: 403,
    AccessErrorCode.UNAVAILABLE: 503,
    AccessErrorCode.UNKNOWN: 500,
}


class ResourceRequest(BaseModel):
    resource: str


class ReadRequest(BaseModel):
    uri: str
    encoding: Optional[str] = None


class ReadResponse(BaseModel):
    content: Optional[str] = None


class StatResponse(BaseModel):
    kind: int
    created_at_ms: int
    modified_at_ms: int
    size_bytes: int


class DeleteRequest(BaseModel):
    resource: str
    recursive: bool = False
    use_trash: bool = False


class RenameRequest(BaseModel):
    source: str
    target: str
    overwrite: bool = False


class WriteFileRequest(BaseModel):
    resource: str
    content: str = ""
    overwrite: bool = False
    create: bool = True


class HealthResponse(BaseModel):
    status: str
    schemes: List[str] = []


def status_for(code: AccessErrorCode) -> int:
    return _STATUS_BY_CODE.get(code, 500)


def create_app(
    config: SidecarConfig | None = None,
    *,
    file_system: FileAccessService | None = None,
    content_reader: ContentReader | None = None,
) -> FastAPI:
    """Create the FastAPI application serving stat/read requests."""
    config = config or SidecarConfig()
    if file_system is None:
        file_system = FileAccessService(
            build_registry(
                config.registry.url,
                FILE_SYSTEM_CAPABILITY,
                timeout=config.registry.timeout,
            ),
            machine_name=config.machine_name,
            scheme_prefix=config.scheme_prefix,
        )
    if content_reader is None:
        content_reader = ContentReader(
            build_registry(
                config.registry.url,
                CONTENT_READER_CAPABILITY,
                timeout=config.registry.timeout,
            ),
            machine_name=config.machine_name,
            scheme_prefix=config.scheme_prefix,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        # Registration happens once, before any request is served.
        file_system.on_start()
        content_reader.on_start()
        yield

    app = FastAPI(title="Sidecar File System", version="1.0.0", lifespan=lifespan)
    app.state.file_system = file_system
    app.state.content_reader = content_reader

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        schemes = [
            service.scheme
            for service in (file_system, content_reader)
            if service.registered and service.scheme
        ]
        return HealthResponse(status="ok", schemes=sorted(set(schemes)))

    @app.post("/stat", response_model=StatResponse)
    async def stat(payload: ResourceRequest) -> StatResponse:
        result = await file_system.stat(payload.resource)
        return StatResponse(
            kind=result.kind.to_bits(),
            created_at_ms=result.created_at_ms,
            modified_at_ms=result.modified_at_ms,
            size_bytes=result.size_bytes,
        )

    @app.post("/read-file")
    async def read_file(payload: ResourceRequest) -> Response:
        content = await file_system.read_file(payload.resource)
        return Response(content=content, media_type="application/octet-stream")

    @app.post("/read", response_model=ReadResponse)
    async def read(payload: ReadRequest) -> ReadResponse:
        content = await content_reader.read(payload.uri, payload.encoding)
        return ReadResponse(content=content)

    @app.post("/delete")
    async def delete(payload: DeleteRequest) -> None:
        await file_system.delete(
            payload.resource, recursive=payload.recursive, use_trash=payload.use_trash
        )

    @app.post("/mkdir")
    async def mkdir(payload: ResourceRequest) -> None:
        await file_system.mkdir(payload.resource)

    @app.post("/readdir")
    async def readdir(payload: ResourceRequest) -> None:
        await file_system.readdir(payload.resource)

    @app.post("/rename")
    async def rename(payload: RenameRequest) -> None:
        await file_system.rename(
            payload.source, payload.target, overwrite=payload.overwrite
        )

    @app.post("/write-file")
    async def write_file(payload: WriteFileRequest) -> None:
        await file_system.write_file(
            payload.resource,
            payload.content.encode("utf-8"),
            overwrite=payload.overwrite,
            create=payload.create,
        )

    @app.exception_handler(AccessError)
    async def access_error_handler(_: Any, exc: AccessError) -> JSONResponse:
        logger.debug("Request failed with %s: %s", exc.code.value, exc.message)
        return JSONResponse(status_code=status_for(exc.code), content=exc.to_payload())

    @app.exception_handler(UnsupportedOperationError)
    async def unsupported_handler(
        _: Any, exc: UnsupportedOperationError
    ) -> JSONResponse:
        return JSONResponse(status_code=501, content=exc.to_payload())

    return app


def run_service(config: SidecarConfig) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(config)
    uvicorn.run(app, host=config.server.host, port=config.server.port)
