"""Key-value storage for short links.

A store maps ``short_id`` to ``target_url`` and nothing else. Only single-key
operations are assumed to be atomic.
"""
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from sqlalchemy import delete as sql_delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.future import select

from db import Base, make_session_factory
from errors import StoreError
from models import Link


class LinkStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the target stored under ``key``, or None."""

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Write ``value`` under ``key``, overwriting any existing value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is a no-op."""

    @abstractmethod
    async def list_keys(self) -> List[str]:
        """Return every stored key, in no particular order."""

    async def put_if_absent(self, key: str, value: str) -> bool:
        """Store ``value`` only if ``key`` is free. Returns False on conflict.

        This fallback is check-then-write: two concurrent callers can both see
        the key as free and the later ``put`` wins. Stores with a conditional
        write must override it.
        """
        if await self.get(key) is not None:
            return False
        await self.put(key, value)
        return True

    async def items(self) -> Dict[str, str]:
        links = {}
        for key in await self.list_keys():
            value = await self.get(key)
            # deleted between list and get
            if value is not None:
                links[key] = value
        return links


class MemoryLinkStore(LinkStore):
    def __init__(self, links: Optional[Dict[str, str]] = None):
        self._links = dict(links or {})

    async def get(self, key):
        return self._links.get(key)

    async def put(self, key, value):
        self._links[key] = value

    async def delete(self, key):
        self._links.pop(key, None)

    async def list_keys(self):
        return list(self._links)

    async def put_if_absent(self, key, value):
        # No await between the check and the write, so this is atomic on one event loop.
        if key in self._links:
            return False
        self._links[key] = value
        return True


class SqlLinkStore(LinkStore):
    def __init__(self, engine):
        self.engine = engine
        self.session_factory = make_session_factory(engine)

    async def create_all(self):
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise StoreError(f"Error creating link table: {exc}") from exc

    @asynccontextmanager
    async def _session(self):
        try:
            async with self.session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError(f"Link store error: {exc}") from exc

    async def get(self, key):
        async with self._session() as session:
            entry = await session.get(Link, key)
            return entry.target_url if entry else None

    async def put(self, key, value):
        async with self._session() as session:
            await session.merge(Link(short_id=key, target_url=value))
            await session.commit()

    async def delete(self, key):
        async with self._session() as session:
            await session.execute(sql_delete(Link).where(Link.short_id == key))
            await session.commit()

    async def list_keys(self):
        async with self._session() as session:
            result = await session.execute(select(Link.short_id))
            return list(result.scalars().all())

    async def put_if_absent(self, key, value):
        # The primary key makes the insert itself the uniqueness check.
        async with self._session() as session:
            session.add(Link(short_id=key, target_url=value))
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                return False
            return True

    async def items(self):
        async with self._session() as session:
            result = await session.execute(select(Link))
            return {entry.short_id: entry.target_url for entry in result.scalars().all()}
