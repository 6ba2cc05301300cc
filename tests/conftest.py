"""Shared pytest fixtures for the paillierkit test suite."""

import pytest
from httpx import ASGITransport, AsyncClient

from paillierkit.crypto.keys import generate_keypair
from paillierkit.main import app

TEST_KEY_BITS = 256


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session")
def key_pair():
    """One small key pair shared by the whole session; generation dominates test time."""
    return generate_keypair(TEST_KEY_BITS)


@pytest.fixture()
def pub(key_pair):
    return key_pair.public_key


@pytest.fixture()
def priv(key_pair):
    return key_pair.private_key


@pytest.fixture()
async def client():
    """Provide an async HTTP test client bound to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
