"""Shared test fixtures for fakestore-catalog."""

import json
import logging
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from fakestore_catalog.cache import TTLCache
from fakestore_catalog.config import CatalogConfig
from fakestore_catalog.log import LOGGER_NAME

BASE_URL = "https://fakestore.test"

Handler = Callable[[httpx.Request], httpx.Response]


class StubRandom:
    """Random source returning queued values, then the low end of the range."""

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if self.values:
            return self.values.pop(0)
        return a


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSleep:
    """Records sleeps instead of waiting."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class ScriptedAPI:
    """MockTransport handler that replays a list of responses or errors.

    The last entry repeats once the script runs out.
    """

    def __init__(self, *script: httpx.Response | Exception | int):
        self.script = list(script)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.script)) - 1
        step = self.script[index]
        if isinstance(step, Exception):
            raise step
        if isinstance(step, int):
            return httpx.Response(step, request=request)
        return step

    @property
    def call_count(self) -> int:
        return len(self.requests)


def make_client(handler: Handler) -> httpx.Client:
    """An httpx client backed by an in-process handler."""
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() so caplog sees package records."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def products_payload() -> list[dict]:
    """Sample /products response body."""
    path = Path(__file__).parent / "fixtures" / "products.json"
    with open(path) as f:
        return json.load(f)


@pytest.fixture
def ok_response(products_payload: list[dict]) -> httpx.Response:
    return httpx.Response(200, json=products_payload)


@pytest.fixture
def config() -> CatalogConfig:
    return CatalogConfig(base_url=BASE_URL)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(clock=clock)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()
