import socket

import pytest

from gatewarden.utils import probe_tcp

pytestmark = pytest.mark.anyio


async def test_open_port() -> None:
    with socket.create_server(("127.0.0.1", 0)) as server:
        port = server.getsockname()[1]

        assert await probe_tcp("127.0.0.1", port, timeout=2) is True


async def test_closed_port() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    assert await probe_tcp("127.0.0.1", port, timeout=2) is False
