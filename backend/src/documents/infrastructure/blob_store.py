from redis.asyncio import Redis


class RedisBlobStore:
    """Serialized documents stored under their object path."""

    def __init__(self, redis: Redis):
        self.redis = redis

    async def get(self, key: str) -> bytes | None:
        return await self.redis.get(key)

    async def put(self, key: str, payload: bytes) -> None:
        await self.redis.set(key, payload)

    async def delete(self, key: str) -> bool:
        return bool(await self.redis.delete(key))
