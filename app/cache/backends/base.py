from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """
    Distributed cache capability used by cached repositories.

    Values are strings; ``ttl`` is an absolute expiration in seconds counted
    from the write. Reads never extend an entry's lifetime.
    """

    async def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        ...

    async def delete(self, key: str) -> bool:
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def close(self) -> None:
        ...
