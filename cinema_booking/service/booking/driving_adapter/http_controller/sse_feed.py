from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import anyio
import orjson
from sse_starlette.sse import EventSourceResponse

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_booking_store import IBookingStore
from cinema_booking.service.booking.domain.enum.booking_event_type import BookingEventType
from cinema_booking.service.booking.domain.enum.feed_topic import FeedTopic


def snapshot_feed(
    *,
    booking_store: IBookingStore,
    topic: FeedTopic,
    key: str,
    snapshot: Callable[[], Awaitable[Any]],
) -> EventSourceResponse:
    """
    SSE response that re-sends a snapshot whenever the topic changes

    Flow:
    1. Subscribe to the store's change feed for (topic, key)
    2. Send the current snapshot as 'initial_list'
    3. On every change event, send the refreshed snapshot under the event's type,
       with the event's ids merged in when the snapshot is an object
    The subscription is released however the stream ends.
    """
    Logger.base.info(f'📡 [SSE] Client subscribing to {topic.channel(key)}')

    async def payload(event_data: dict) -> str:
        body = await snapshot()
        if isinstance(body, dict):
            body = body | {k: v for k, v in event_data.items() if k != 'event_type'}
        return orjson.dumps(body).decode()

    async def event_generator() -> AsyncIterator[dict[str, str]]:
        stream = await booking_store.subscribe(topic=topic, key=key)
        try:
            yield {'event': BookingEventType.INITIAL_LIST.value, 'data': await payload({})}
            async for event_data in stream:
                yield {
                    'event': str(event_data.get('event_type', BookingEventType.INITIAL_LIST)),
                    'data': await payload(event_data),
                }
        except anyio.get_cancelled_exc_class():
            Logger.base.info(f'🔌 [SSE] Client disconnected: {topic.channel(key)}')
            raise
        finally:
            with anyio.CancelScope(shield=True):
                await booking_store.unsubscribe(topic=topic, key=key, stream=stream)

    return EventSourceResponse(event_generator())
