from __future__ import annotations

import asyncio

from .models import DEFAULT_TIMEOUT, ProbeResult
from .ports import MAX_PORT, MIN_PORT
from .targets import Target


async def probe(target: Target, port: int, timeout_s: float = DEFAULT_TIMEOUT) -> ProbeResult:
    """
    One TCP connect attempt with a hard deadline.
    The connection is closed as soon as the handshake completes; nothing is read.
    """
    if port < MIN_PORT or port > MAX_PORT:
        raise ValueError(f"Port out of range: {port}")

    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host=str(target), port=port),
            timeout=timeout_s,
        )
    except (asyncio.TimeoutError, OSError):
        return ProbeResult.CLOSED_OR_FILTERED

    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        # peer reset during teardown; the handshake already succeeded
        pass
    return ProbeResult.OPEN
