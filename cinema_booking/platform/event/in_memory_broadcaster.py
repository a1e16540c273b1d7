"""
In-memory Event Broadcaster Implementation

Distributes change events from the booking store to every open SSE stream
of the affected channel.
"""

from typing import Dict, List

from anyio import WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from cinema_booking.platform.logging.loguru_io import Logger


class InMemoryEventBroadcasterImpl:
    """
    In-memory pub/sub keyed by channel name

    Memory Management:
    - Stream max buffer: 10 events
    - Drop policy: drop if stream full (send_nowait raises WouldBlock)
    - Cleanup: Remove empty lists on unsubscribe and close streams
    """

    MAX_BUFFER_SIZE = 10

    def __init__(self) -> None:
        # channel -> list of (send_stream, receive_stream) tuples
        self._subscribers: Dict[
            str, List[tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]]
        ] = {}

    async def subscribe(self, *, channel: str) -> MemoryObjectReceiveStream[dict]:
        send_stream, receive_stream = create_memory_object_stream[dict](
            max_buffer_size=self.MAX_BUFFER_SIZE
        )
        self._subscribers.setdefault(channel, []).append((send_stream, receive_stream))

        Logger.base.debug(
            f'📡 [BROADCASTER] Subscribed to channel {channel} '
            f'(total subscribers: {len(self._subscribers[channel])})'
        )
        return receive_stream

    async def broadcast(self, *, channel: str, event_data: dict) -> None:
        if channel not in self._subscribers:
            Logger.base.debug(f'📡 [BROADCASTER] No subscribers for channel {channel}')
            return

        delivered = 0
        dropped = 0
        for send_stream, _ in self._subscribers[channel]:
            try:
                send_stream.send_nowait(event_data)
                delivered += 1
            except WouldBlock:
                # Slow consumer; it re-reads the full list on the next event anyway
                dropped += 1
                Logger.base.warning(
                    f'⚠️ [BROADCASTER] Stream full for channel {channel}, '
                    f'dropping event (type={event_data.get("event_type")})'
                )

        Logger.base.info(
            f'📡 [BROADCASTER] Broadcast to channel {channel}: '
            f'delivered={delivered}, dropped={dropped}'
        )

    async def unsubscribe(self, *, channel: str, stream: MemoryObjectReceiveStream[dict]) -> None:
        subscribers = self._subscribers.get(channel)
        if subscribers is None:
            return

        for i, (send_stream, receive_stream) in enumerate(subscribers):
            if receive_stream is stream:
                await send_stream.aclose()
                await receive_stream.aclose()
                subscribers.pop(i)
                Logger.base.debug(
                    f'📡 [BROADCASTER] Unsubscribed from channel {channel} '
                    f'(remaining: {len(subscribers)})'
                )
                break

        if not subscribers:
            del self._subscribers[channel]

    def subscriber_count(self, *, channel: str) -> int:
        return len(self._subscribers.get(channel, []))
