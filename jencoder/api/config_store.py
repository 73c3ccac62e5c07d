"""Load and save the token form settings in the persisted-configuration store.

When an encryption key is configured, the secret and private key fields are
Fernet-encrypted before they are written and listed under ``SEALED_MARKER``.
"""

import logging
from typing import Any

from cryptography.fernet import InvalidToken
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from jencoder.api.schemas import CONFIG_STORE_KEY, SECRET_FIELDS, JWTConfig
from jencoder.core.settings import AppSettings
from jencoder.crypto.keys import decrypt_key_material, encrypt_key_material
from jencoder.db.repo_config import delete_value, get_value, put_value

logger = logging.getLogger(__name__)

SEALED_MARKER = "_sealed"


def default_config(settings: AppSettings) -> JWTConfig:
    return JWTConfig(algorithm=settings.default_algorithm)


def _seal(config: JWTConfig, settings: AppSettings) -> dict[str, Any]:
    blob = config.model_dump(by_alias=True)
    fernet_key = settings.config_encryption_key
    if not fernet_key:
        return blob
    for field in SECRET_FIELDS:
        blob[field] = encrypt_key_material(blob[field], fernet_key)
    blob[SEALED_MARKER] = list(SECRET_FIELDS)
    return blob


def _unseal(blob: dict[str, Any], settings: AppSettings) -> dict[str, Any]:
    opened = dict(blob)
    sealed = opened.pop(SEALED_MARKER, [])
    fernet_key = settings.config_encryption_key
    for field in sealed:
        if field not in opened:
            continue
        if not fernet_key:
            logger.warning("Stored %s is encrypted but no key is configured", field)
            del opened[field]
            continue
        try:
            opened[field] = decrypt_key_material(opened[field], fernet_key)
        except InvalidToken:
            logger.warning("Stored %s could not be decrypted; using default", field)
            del opened[field]
    return opened


async def load_config(session: AsyncSession, settings: AppSettings) -> JWTConfig:
    """Stored settings merged over the defaults."""
    defaults = default_config(settings)
    stored = await get_value(session, CONFIG_STORE_KEY)
    if not isinstance(stored, dict):
        return defaults
    merged = {**defaults.model_dump(by_alias=True), **_unseal(stored, settings)}
    try:
        return JWTConfig.model_validate(merged)
    except ValidationError as exc:
        logger.error("Failed to parse saved config: %s", exc)
        return defaults


async def save_config(
    session: AsyncSession, settings: AppSettings, updates: dict[str, Any]
) -> JWTConfig:
    """Merge a partial settings blob over the stored one and persist it.

    Raises:
        ValidationError: if ``updates`` holds values of the wrong type.
    """
    incoming = JWTConfig.model_validate(updates)
    current = await load_config(session, settings)
    changed = {name: getattr(incoming, name) for name in incoming.model_fields_set}
    config = current.model_copy(update=changed)
    await put_value(session, CONFIG_STORE_KEY, _seal(config, settings))
    return config


async def reset_config(session: AsyncSession, settings: AppSettings) -> JWTConfig:
    await delete_value(session, CONFIG_STORE_KEY)
    return default_config(settings)
