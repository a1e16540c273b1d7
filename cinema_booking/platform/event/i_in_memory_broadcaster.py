"""
In-memory Event Broadcaster Interface

Pub/sub channels used by booking stores to push changes (a user's bookings,
a user's favorites, a movie's reviews) to open SSE streams in the same process.
"""

from typing import Protocol

from anyio.streams.memory import MemoryObjectReceiveStream


class IInMemoryEventBroadcaster(Protocol):
    async def subscribe(self, *, channel: str) -> MemoryObjectReceiveStream[dict]:
        """
        Subscribe to one change channel

        Returns:
            MemoryObjectReceiveStream that will receive event dictionaries
        """
        ...

    async def broadcast(self, *, channel: str, event_data: dict) -> None:
        """
        Note:
            - Silently ignores if no subscribers exist
            - Drops event if subscriber stream is full (prevents blocking)
        """
        ...

    async def unsubscribe(self, *, channel: str, stream: MemoryObjectReceiveStream[dict]) -> None:
        """Safe to call with a stream that was never registered"""
        ...
