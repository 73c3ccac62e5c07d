"""Endpoints persisting the token form settings."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from jencoder.api.config_store import load_config, reset_config, save_config
from jencoder.api.deps import load_settings
from jencoder.api.errors import HTTP_UNPROCESSABLE
from jencoder.api.schemas import CONFIG_EXPORT_FILENAME, JWTConfig
from jencoder.core.settings import AppSettings
from jencoder.db.engine import get_session

router = APIRouter(prefix="/api/config")


@router.get("")
async def get_config(
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[AppSettings, Depends(load_settings)],
) -> JWTConfig:
    """GET /api/config -- saved settings, or the defaults."""
    return await load_config(db, settings)


@router.put("", response_model=None)
async def put_config(
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[AppSettings, Depends(load_settings)],
    updates: Annotated[dict[str, Any], Body()],
) -> JWTConfig | JSONResponse:
    """PUT /api/config -- save or import a full or partial settings blob."""
    try:
        return await save_config(db, settings, updates)
    except ValidationError as exc:
        return JSONResponse(
            {
                "error": "invalid_config",
                "error_description": f"{exc.error_count()} invalid field(s)",
            },
            status_code=HTTP_UNPROCESSABLE,
        )


@router.delete("")
async def delete_config(
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[AppSettings, Depends(load_settings)],
) -> JWTConfig:
    """DELETE /api/config -- forget saved settings."""
    return await reset_config(db, settings)


@router.get("/export")
async def export_config(
    db: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[AppSettings, Depends(load_settings)],
) -> JSONResponse:
    """GET /api/config/export -- settings as a downloadable JSON file."""
    config = await load_config(db, settings)
    return JSONResponse(
        config.model_dump(by_alias=True),
        headers={
            "Content-Disposition": f'attachment; filename="{CONFIG_EXPORT_FILENAME}"'
        },
    )
