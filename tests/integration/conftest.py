"""Fixtures for client integration tests."""

import socket

import pytest
import pytest_asyncio
from grpc import aio


class MockServer:
    """In-process gRPC server with no services, enough for channels to connect."""

    def __init__(self, host: str = "127.0.0.1"):
        self._host = host
        self._server = None
        self.port = 0

    @property
    def address(self) -> str:
        return f"{self._host}:{self.port}"

    async def start(self) -> None:
        """Start the server on a free port."""
        self._server = aio.server()
        self.port = self._server.add_insecure_port(f"{self._host}:0")
        await self._server.start()

    async def stop(self) -> None:
        """Stop the server."""
        if self._server is not None:
            await self._server.stop(grace=None)
            self._server = None


def _find_free_port() -> int:
    """Find a port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest_asyncio.fixture
async def mock_server():
    """A running gRPC server."""
    server = MockServer()
    await server.start()
    yield server
    await server.stop()


@pytest.fixture
def unreachable_address() -> str:
    """An address with no server behind it."""
    return f"127.0.0.1:{_find_free_port()}"
