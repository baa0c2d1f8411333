from typing import Any

import pytest

from sciro.adapters.clock import ManualClock
from sciro.adapters.dev_delivery import DevDelivery
from sciro.adapters.scheduler import ManualScheduler
from sciro.adapters.synthetic_source import SyntheticPlaybackSource
from sciro.adapters.ui_host import InMemoryUiHost
from sciro.app_shell.config import build_config
from sciro.app_shell.engine import LearnerStateEngine
from sciro.components.publisher import InsightPayload

START_MS = 1_700_000_000_000


@pytest.fixture
def clock():
    return ManualClock(START_MS)


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def source():
    return SyntheticPlaybackSource(duration=600.0)


@pytest.fixture
def delivery():
    return DevDelivery()


@pytest.fixture
def ui_host():
    return InMemoryUiHost()


@pytest.fixture
def insights() -> list[InsightPayload]:
    return []


@pytest.fixture
def make_engine(clock, scheduler, source, delivery, ui_host, insights):
    """
    Factory for engines wired to deterministic adapters.

    Keyword arguments are forwarded to build_config; on_insight defaults to
    appending into the `insights` fixture.
    """
    engines: list[LearnerStateEngine] = []

    def _make(**options: Any) -> LearnerStateEngine:
        options.setdefault("on_insight", insights.append)
        config = build_config(options.pop("source", source), **options)
        engine = LearnerStateEngine(
            config,
            clock=clock,
            scheduler=scheduler,
            delivery=delivery,
            ui_host=ui_host,
        )
        engines.append(engine)
        return engine

    yield _make

    for engine in engines:
        engine.close()
