from anyio.streams.memory import MemoryObjectReceiveStream

from cinema_booking.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from cinema_booking.service.booking.domain.enum.feed_topic import FeedTopic


class ChangeFeed:
    """Topic-keyed view over the in-process broadcaster, shared by the booking stores"""

    def __init__(self, *, broadcaster: IInMemoryEventBroadcaster) -> None:
        self.broadcaster = broadcaster

    async def publish(self, *, topic: FeedTopic, key: str, event_data: dict) -> None:
        await self.broadcaster.broadcast(channel=topic.channel(key), event_data=event_data)

    async def subscribe(self, *, topic: FeedTopic, key: str) -> MemoryObjectReceiveStream[dict]:
        return await self.broadcaster.subscribe(channel=topic.channel(key))

    async def unsubscribe(
        self, *, topic: FeedTopic, key: str, stream: MemoryObjectReceiveStream[dict]
    ) -> None:
        await self.broadcaster.unsubscribe(channel=topic.channel(key), stream=stream)
