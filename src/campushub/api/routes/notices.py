"""Server-Sent Events (SSE) endpoint."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse

from campushub.api.dependencies import NoticeBoardDep

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

router = APIRouter(prefix="/notices", tags=["notices"])


@router.get("/stream")
async def notice_stream(
    board: NoticeBoardDep,
    role: str | None = Query(default=None, description="Only notices for this role"),
) -> StreamingResponse:
    """Subscribe to the notice stream.

    Navigation, toast and session notices go to everyone; review notices
    are addressed to a role. A heartbeat is sent every 30 seconds to keep
    the connection alive.
    """
    subscriber = board.subscribe(role)

    async def generate() -> AsyncGenerator[str, None]:
        try:
            while True:
                try:
                    notice = await asyncio.wait_for(
                        subscriber.queue.get(),
                        timeout=board._heartbeat_interval,
                    )
                    yield notice.to_sse()
                except TimeoutError:
                    yield board.create_heartbeat().to_sse()
        except asyncio.CancelledError:
            # Client disconnected
            pass
        finally:
            board.unsubscribe(subscriber.id)

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
