"""Pytest configuration and fixtures"""
import os

# Keep tracing local: no Cloud Trace exporter during tests
os.environ.setdefault("LOCAL_DEV", "1")

import pytest  # noqa: E402
from nacl.signing import SigningKey  # noqa: E402


@pytest.fixture
def signing_key():
    """Fresh Ed25519 key pair standing in for Discord's."""
    return SigningKey.generate()


@pytest.fixture
def public_key_hex(signing_key):
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def sign(signing_key):
    """Return the hex signature Discord would send for (timestamp, body)."""
    def _sign(timestamp: str, body) -> str:
        if isinstance(body, str):
            body = body.encode()
        return signing_key.sign(timestamp.encode() + body).signature.hex()
    return _sign


class Recorder:
    """Async handler that records its calls."""

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    async def __call__(self, ctx, interaction, *args):
        self.calls.append((ctx, interaction, args))
        return self.result


@pytest.fixture
def recorder():
    return Recorder
