"""Network probes shared by the health monitor and the schedule registrar."""

import anyio


async def probe_tcp(host: str, port: int, timeout: float) -> bool:
    """Check whether something accepts TCP connections on host:port.

    Args:
        host: Host to connect to.
        port: Port to connect to.
        timeout: Hard deadline in seconds for the connection attempt.

    Returns:
        True if a connection was established within the timeout.
    """
    with anyio.move_on_after(timeout):
        try:
            stream = await anyio.connect_tcp(host, port)
        except OSError:
            return False
        await stream.aclose()
        return True
    return False
