"""FastAPI routes for install and install-file.

The routes read and write paths on the server's filesystem as the service user, so the
service must only be reachable by trusted build agents. An install-file request may
only redirect its target repository to a directory under
``Settings.repository_override_roots``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from mvninstall.modules.install.errors import BuildGraphInconsistency, ConfigurationError, InstallError
from mvninstall.modules.install.service import BuildRegistry, InstallService, UnknownBuildError

from .schemas import BuildBody, InstallFileBody, ModuleReportBody, serialize_result

router = APIRouter(prefix="/install", tags=["install"])
log = logging.getLogger(__name__)


def get_service(request: Request) -> InstallService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "install_service", None):
        raise HTTPException(status_code=500, detail="Install service not initialized.")
    return container.install_service


def get_builds(request: Request) -> BuildRegistry:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "build_registry", None):
        raise HTTPException(status_code=500, detail="Build registry not initialized.")
    return container.build_registry


def _raise_http(exc: InstallError) -> NoReturn:
    if isinstance(exc, ConfigurationError):
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if isinstance(exc, BuildGraphInconsistency):
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    log.error("Install failed: %s", exc)
    raise HTTPException(status_code=500, detail=str(exc)) from exc


def _check_repository_override(svc: InstallService, value: Optional[str]) -> None:
    if not value:
        return
    target = Path(value).expanduser().resolve()
    for root in svc.settings.repository_override_roots:
        if target.is_relative_to(Path(root).expanduser().resolve()):
            return
    log.warning("Refused local repository override %s", target)
    raise HTTPException(status_code=403, detail=f"local repository override {value} is not allowed")


@router.post("/file")
def install_file(payload: InstallFileBody, svc: InstallService = Depends(get_service)) -> Dict[str, Any]:
    _check_repository_override(svc, payload.local_repository_path)
    try:
        result = svc.install_file(payload.to_request())
    except InstallError as exc:
        _raise_http(exc)
    return serialize_result(result)


@router.post("/builds")
async def register_build(payload: BuildBody, builds: BuildRegistry = Depends(get_builds)) -> Dict[str, Any]:
    try:
        coordinator = builds.register([item.to_module() for item in payload.modules], payload.build_id)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except InstallError as exc:
        _raise_http(exc)
    return {"build_id": coordinator.build_id, "modules": coordinator.phases()}


@router.get("/builds/{build_id}")
async def build_status(build_id: str, builds: BuildRegistry = Depends(get_builds)) -> Dict[str, Any]:
    try:
        coordinator = builds.get(build_id)
    except UnknownBuildError as exc:
        raise HTTPException(status_code=404, detail=f"unknown build {build_id}") from exc
    return {"build_id": build_id, "flushed": coordinator.flushed, "modules": coordinator.phases()}


@router.post("/builds/{build_id}/modules")
def report_module(
    build_id: str,
    payload: ModuleReportBody,
    builds: BuildRegistry = Depends(get_builds),
    svc: InstallService = Depends(get_service),
) -> Dict[str, Any]:
    try:
        coordinator = builds.get(build_id)
    except UnknownBuildError as exc:
        raise HTTPException(status_code=404, detail=f"unknown build {build_id}") from exc
    options = payload.to_options(svc.default_options())
    try:
        result = svc.install_project(payload.module.to_module(), coordinator, options)
    except InstallError as exc:
        _raise_http(exc)
    return serialize_result(result)


@router.delete("/builds/{build_id}")
async def discard_build(build_id: str, builds: BuildRegistry = Depends(get_builds)) -> Dict[str, str]:
    try:
        builds.discard(build_id)
    except UnknownBuildError as exc:
        raise HTTPException(status_code=404, detail=f"unknown build {build_id}") from exc
    return {"status": "ok"}
