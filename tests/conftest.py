"""Shared test fixtures for jencoder."""

from collections.abc import AsyncIterator

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519, rsa
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from jencoder.api.deps import get_clock
from jencoder.core.app import create_app
from jencoder.db.base import BaseEntity
from jencoder.db.engine import get_session

FIXED_NOW = 1_700_000_000


def private_pem(key: object, fmt: serialization.PrivateFormat) -> str:
    """Serialize a private key as unencrypted PEM text."""
    return key.private_bytes(  # type: ignore[attr-defined]
        encoding=serialization.Encoding.PEM,
        format=fmt,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for test settings."""
    monkeypatch.setenv("JENCODER_LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("JENCODER_CONFIG_ENCRYPTION_KEY", raising=False)
    monkeypatch.delenv("JENCODER_DEFAULT_ALGORITHM", raising=False)


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_pkcs8_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    return private_pem(rsa_key, serialization.PrivateFormat.PKCS8)


@pytest.fixture(scope="session")
def rsa_pkcs1_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    return private_pem(rsa_key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture(scope="session")
def ec_p256_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_p256_sec1_pem(ec_p256_key: ec.EllipticCurvePrivateKey) -> str:
    return private_pem(ec_p256_key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture(scope="session")
def ec_p256_pkcs8_pem(ec_p256_key: ec.EllipticCurvePrivateKey) -> str:
    return private_pem(ec_p256_key, serialization.PrivateFormat.PKCS8)


@pytest.fixture(scope="session")
def ec_p384_sec1_pem() -> str:
    key = ec.generate_private_key(ec.SECP384R1())
    return private_pem(key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture(scope="session")
def ec_p521_pkcs8_pem() -> str:
    key = ec.generate_private_key(ec.SECP521R1())
    return private_pem(key, serialization.PrivateFormat.PKCS8)


@pytest.fixture(scope="session")
def ed25519_pem() -> str:
    key = ed25519.Ed25519PrivateKey.generate()
    return private_pem(key, serialization.PrivateFormat.PKCS8)


@pytest.fixture(scope="session")
def ed448_pem() -> str:
    key = ed448.Ed448PrivateKey.generate()
    return private_pem(key, serialization.PrivateFormat.PKCS8)


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Create an in-memory SQLite async session for tests."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Create an httpx test client with DB session and clock overrides."""
    app = create_app()

    async def _override_session() -> AsyncIterator[AsyncSession]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_session] = _override_session
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
