"""Abstract object store definition."""

from abc import ABC, abstractmethod
from collections.abc import Mapping


class ObjectStore(ABC):
    """Base interface for object-store backends."""

    bucket: str

    @property
    @abstractmethod
    def link_expiry(self) -> int | None:
        """Seconds a read link stays valid, ``None`` when links are permanent."""

    @abstractmethod
    async def put_object(
        self, key: str, body: bytes, content_type: str, metadata: Mapping[str, str]
    ) -> None:
        """Store ``body`` at ``key``, overwriting any existing object."""

    @abstractmethod
    async def get_read_link(self, key: str, expiry_seconds: int | None = None) -> str:
        """Return a public URL, or a presigned one valid for ``expiry_seconds``.

        ``expiry_seconds`` defaults to :attr:`link_expiry` and is ignored when
        links are permanent.
        """

    @abstractmethod
    async def delete_object(self, key: str) -> None:
        """Remove ``key``; a missing object counts as deleted."""
