"""FastAPI surface for the navbar manager (``/api/navbars``)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from navsync.config import NavsyncConfig, load_config
from navsync.errors import ConfigurationError, ErrorKind, NavbarError
from navsync.navbar.service import NavbarSyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class CreateNavbarRequest(BaseModel):
    # Optional so that missing fields surface as our own 400, not a 422.
    id: str | None = None
    label: str | None = None


class DeleteNavbarRequest(BaseModel):
    id: str | None = None


def get_service(request: Request) -> NavbarSyncService:
    service = request.app.state.service
    if service is None:
        raise request.app.state.startup_error
    return service


def _error(status: int, message: str, kind: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message, "kind": kind})


@router.get("/navbars")
async def list_navbars(service: NavbarSyncService = Depends(get_service)) -> JSONResponse:
    navbars = await service.list_navbars()
    return JSONResponse(status_code=200, content=[n.to_wire() for n in navbars])


@router.post("/navbars")
async def create_navbar(
    body: CreateNavbarRequest, service: NavbarSyncService = Depends(get_service)
) -> JSONResponse:
    result = await service.create(body.id, body.label)
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "message": f'Created navbar "{body.label.strip()}" and pushed to GitHub',
            "commitId": result.commit_sha,
        },
    )


@router.delete("/navbars")
async def delete_navbar(
    body: DeleteNavbarRequest, service: NavbarSyncService = Depends(get_service)
) -> JSONResponse:
    result = await service.delete(body.id)
    if result.created:
        message = f'Deleted navbar "{result.navbar_id}" and pushed to GitHub'
    else:
        message = f'Navbar "{result.navbar_id}" does not exist; nothing to delete'
    return JSONResponse(
        status_code=200,
        content={"success": True, "message": message, "commitId": result.commit_sha},
    )


async def _navbar_error_handler(request: Request, exc: NavbarError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(
            "%s %s failed [%s/%s]: %s",
            request.method, request.url.path, exc.kind.value, exc.operation, exc.message,
            exc_info=exc.__cause__,
        )
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error(exc.http_status, exc.message, exc.kind.value)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error(400, "Request body must be a JSON object", ErrorKind.validation.value)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code, content={"error": message}, headers=exc.headers
    )


def create_app(
    config: NavsyncConfig | None = None,
    service: NavbarSyncService | None = None,
) -> FastAPI:
    """Build the API app.

    Credentials are resolved once here. If they are missing the app still
    starts, but every request fails with 500 before any remote call.
    """
    app = FastAPI(title="navsync", version="0.1.0")
    app.state.startup_error = None
    if service is None:
        try:
            service = NavbarSyncService.from_config(config or load_config())
        except ConfigurationError as e:
            logger.error("navbar API started without credentials: %s", e)
            app.state.startup_error = e
    app.state.service = service

    app.add_exception_handler(NavbarError, _navbar_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.include_router(router)
    return app
