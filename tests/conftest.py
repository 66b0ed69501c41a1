"""
pytest configuration and shared fixtures
"""
import copy

import pytest

from gacha_api.banner_loader import build_engine, load_banner
from gacha_api.draw_engine import DrawEngine
from gacha_api.rng import get_rng


# =============================================================================
# Random sources
# =============================================================================


class ScriptedRandom:
    """Replays fixed values from random(); falls back to `default` once exhausted."""

    def __init__(self, values, default=None):
        self._values = list(values)
        self._default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self._values:
            return self._values.pop(0)
        if self._default is None:
            raise AssertionError("scripted random source exhausted")
        return self._default


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom"""
    return ScriptedRandom


# =============================================================================
# Engine fixtures
# =============================================================================


SMALL_RATES = {"SSR": 0.1, "SR": 0.2, "R": 0.3, "Common": 0.4}


@pytest.fixture
def engine_factory():
    """Engine with the small test rate table; pity defaults to hard 5 / soft 3 / x5"""

    def _create_engine(
        rng=None,
        tier_rates=None,
        hard_threshold: int = 5,
        soft_start: int = 3,
        multiplier: float = 5.0,
    ) -> DrawEngine:
        return DrawEngine(
            tier_rates=tier_rates or SMALL_RATES,
            rng=rng if rng is not None else get_rng(0),
            hard_threshold=hard_threshold,
            soft_start=soft_start,
            multiplier=multiplier,
        )

    return _create_engine


@pytest.fixture
def banner() -> dict:
    """Fresh copy of the bundled banner"""
    return copy.deepcopy(load_banner())


@pytest.fixture
def banner_engine(banner) -> DrawEngine:
    """Engine built from the bundled banner with a fixed seed"""
    return build_engine(banner, rng=get_rng(1234))


# =============================================================================
# API fixtures
# =============================================================================


@pytest.fixture
def client(banner_engine):
    """TestClient whose engine is isolated per test"""
    from fastapi.testclient import TestClient

    from gacha_api.main import app
    from gacha_api.services.engine_state import get_engine

    app.dependency_overrides[get_engine] = lambda: banner_engine
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
