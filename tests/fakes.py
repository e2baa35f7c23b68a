"""Protocol, mock and code under test shared by the test-suite."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from mockery import Mock


@dataclass(frozen=True, slots=True)
class User:
    user_id: int
    name: str


class UserService(Protocol):
    def greet(self, name: str) -> str: ...

    def fetch_user(self, user_id: int) -> User: ...

    def find_cache(self, key: str) -> User | None: ...

    def find_legacy(self, key: str) -> Optional[User]: ...

    def compute_score(self, x: int) -> int: ...

    def rename(self, user_id: int, name: str) -> User: ...

    def track(self, event: str, count: int) -> None: ...

    async def load_profile(self, user_id: int) -> User: ...

    async def lookup_alias(self, alias: str) -> User | None: ...

    async def flush(self) -> None: ...


class MockUserService(Mock):
    def greet(self, name: str) -> str:
        return self.invoke(self.greet, args=name)

    def fetch_user(self, user_id: int) -> User:
        return self.invoke(self.fetch_user, args=user_id)

    def find_cache(self, key: str) -> User | None:
        return self.invoke(self.find_cache, args=key)

    def find_legacy(self, key: str) -> Optional[User]:
        return self.invoke(self.find_legacy, args=key)

    def compute_score(self, x: int) -> int:
        return self.invoke(self.compute_score, args=x, default=0)

    def rename(self, user_id: int, name: str) -> User:
        return self.invoke(self.rename, args=(user_id, name))

    def track(self, event: str, count: int) -> None:
        self.invoke(self.track, args=(event, count))

    async def load_profile(self, user_id: int) -> User:
        return await self.ainvoke(self.load_profile, args=user_id)

    async def lookup_alias(self, alias: str) -> User | None:
        return await self.ainvoke(self.lookup_alias, args=alias)

    async def flush(self) -> None:
        await self.ainvoke(self.flush)


class Endpoint(Enum):
    users = "users"
    orders = "orders"


class MockTransport(Mock):
    """Keyed by explicit symbols rather than by method reference."""

    def get(self, endpoint: Endpoint, path: str) -> dict[str, object]:
        return self.invoke(endpoint, args=path, default={})

    def send(self, payload: bytes) -> int:
        return self.invoke("send", args=payload)


class WelcomeFlow:
    """Small piece of code under test that talks to a ``UserService``."""

    def __init__(self, service: UserService) -> None:
        self._service = service

    def welcome(self, user_id: int) -> str:
        user = self._service.fetch_user(user_id)
        self._service.track("welcome", 1)
        return self._service.greet(user.name)

    def cached_name(self, key: str) -> str:
        user = self._service.find_cache(key)
        return "anonymous" if user is None else user.name

    async def welcome_async(self, user_id: int) -> str:
        profile = await self._service.load_profile(user_id)
        await self._service.flush()
        return self._service.greet(profile.name)
