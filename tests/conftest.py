from __future__ import annotations

import os

import pytest

from tests.fakes import MockTransport, MockUserService


@pytest.fixture(autouse=True)
def isolate_mockery_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("MOCKERY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def service() -> MockUserService:
    return MockUserService()


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()
