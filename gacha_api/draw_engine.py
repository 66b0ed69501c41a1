import logging
import math
from typing import Dict, List, Optional

from gacha_api.banner_rules import (
    DEFAULT_HARD_PITY,
    DEFAULT_SIMULATION_CAP,
    DEFAULT_SOFT_PITY_MULTIPLIER,
    DEFAULT_SOFT_PITY_START,
    DEFAULT_TIER_RATES,
    PULL_COST,
)
from gacha_api.exceptions import (
    CatalogNotReadyError,
    InvalidTierRatesError,
    InvalidWeightError,
    UnknownTierError,
)
from gacha_api.models.gacha_models import DrawResult, GachaItem, PityConfig, TopTierRun
from gacha_api.rng import get_rng

logger = logging.getLogger(__name__)


def _is_finite_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _check_tier_rates(tier_rates: Dict[str, float]) -> Dict[str, float]:
    if not tier_rates:
        raise InvalidTierRatesError("at least one tier is required")

    for tier, rate in tier_rates.items():
        if not _is_finite_number(rate):
            raise InvalidTierRatesError(f"rate for {tier} must be a finite number")
        if rate < 0:
            raise InvalidTierRatesError(f"rate for {tier} must be >= 0")

    top_tier = next(iter(tier_rates))
    if tier_rates[top_tier] <= 0:
        raise InvalidTierRatesError(f"top tier {top_tier} must have a rate > 0")

    return {tier: float(rate) for tier, rate in tier_rates.items()}


def _pity_is_valid(hard_threshold, soft_start, multiplier) -> bool:
    return (
        hard_threshold > 0
        and soft_start > 0
        and soft_start < hard_threshold
        and _is_finite_number(multiplier)
        and multiplier > 1.0
    )


class DrawEngine:
    """
    Weighted gacha draw engine with hard and soft pity.

    Tier rates are given highest rarity first; the first tier is the top
    tier that hard pity guarantees. `rng` is any object with a `random()`
    method returning floats in [0, 1).
    """

    def __init__(
        self,
        tier_rates: Optional[Dict[str, float]] = None,
        rng=None,
        hard_threshold: int = DEFAULT_HARD_PITY,
        soft_start: int = DEFAULT_SOFT_PITY_START,
        multiplier: float = DEFAULT_SOFT_PITY_MULTIPLIER,
    ):
        if tier_rates is None:
            tier_rates = DEFAULT_TIER_RATES
        rates = _check_tier_rates(dict(tier_rates))

        if not _pity_is_valid(hard_threshold, soft_start, multiplier):
            raise ValueError(
                f"Invalid pity settings: hard={hard_threshold}, "
                f"soft={soft_start}, multiplier={multiplier}"
            )

        self._tier_rates = rates
        self._tiers = list(rates)
        self._rng = rng if rng is not None else get_rng()
        self._pity = PityConfig(
            hard_threshold=hard_threshold,
            soft_start=soft_start,
            multiplier=multiplier,
        )

        self._items: List[GachaItem] = []
        self._items_by_tier: Dict[str, List[GachaItem]] = {t: [] for t in self._tiers}
        self._weight_totals: Dict[str, float] = {t: 0.0 for t in self._tiers}

        self._draw_count = 0
        self._guaranteed_index = 0
        self._history: List[DrawResult] = []

    # ============================================================
    # CATALOG
    # ============================================================

    @property
    def tiers(self) -> List[str]:
        return list(self._tiers)

    @property
    def top_tier(self) -> str:
        return self._tiers[0]

    def add_item(self, name: str, tier: str, weight: float,
                 title: Optional[str] = None, flavor: Optional[str] = None) -> GachaItem:
        if tier not in self._items_by_tier:
            raise UnknownTierError(tier)
        if not _is_finite_number(weight) or weight <= 0:
            raise InvalidWeightError(name, weight)

        item = GachaItem(name=name, tier=tier, weight=weight, title=title, flavor=flavor)

        self._items.append(item)
        self._items_by_tier[tier].append(item)
        self._weight_totals[tier] += item.weight

        logger.debug("Added %s item %r (weight %s)", tier, name, weight)
        return item

    def list_by_tier(self, tier: str) -> List[GachaItem]:
        return list(self._items_by_tier.get(tier, []))

    def all_items(self) -> List[GachaItem]:
        return list(self._items)

    def find_item(self, name: str, tier: str) -> Optional[GachaItem]:
        """First catalog item with this name in this tier, for display lookups."""
        for item in self._items_by_tier.get(tier, []):
            if item.name == name:
                return item
        return None

    def tier_weight_totals(self) -> Dict[str, float]:
        return dict(self._weight_totals)

    def tier_rate(self, tier: str) -> float:
        return self._tier_rates.get(tier, 0.0)

    def tier_rates(self) -> Dict[str, float]:
        return dict(self._tier_rates)

    # ============================================================
    # GUARANTEE
    # ============================================================

    def guaranteed_item(self) -> Optional[GachaItem]:
        top_items = self._items_by_tier[self.top_tier]
        if not top_items:
            return None
        return top_items[self._guaranteed_index]

    def set_guaranteed_item(self, index: int) -> bool:
        """Select the guarantee by position in the top-tier list."""
        top_items = self._items_by_tier[self.top_tier]
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if index < 0 or index >= len(top_items):
            logger.warning("Rejected guaranteed index %s (top tier has %d items)", index, len(top_items))
            return False

        self._guaranteed_index = index
        logger.info("Guaranteed item set to %r", top_items[index].name)
        return True

    def set_guaranteed_item_by_name(self, name: str) -> bool:
        for index, item in enumerate(self._items_by_tier[self.top_tier]):
            if item.name == name:
                self._guaranteed_index = index
                logger.info("Guaranteed item set to %r", name)
                return True

        logger.warning("Rejected guaranteed item %r: not a %s item", name, self.top_tier)
        return False

    # ============================================================
    # PITY CONFIGURATION
    # ============================================================

    def pity_config(self) -> PityConfig:
        return self._pity

    def configure_pity(self, hard_threshold: int, soft_start: int, multiplier: float) -> bool:
        """
        Replace all pity parameters at once.
        Returns False and keeps the current settings if any check fails.
        """
        if not _pity_is_valid(hard_threshold, soft_start, multiplier):
            logger.warning(
                "Rejected pity settings hard=%s soft=%s multiplier=%s; keeping %s",
                hard_threshold, soft_start, multiplier, self._pity,
            )
            return False

        self._pity = PityConfig(
            hard_threshold=hard_threshold,
            soft_start=soft_start,
            multiplier=multiplier,
        )
        logger.info("Pity configured: %s", self._pity)
        return True

    # ============================================================
    # QUERIES
    # ============================================================

    @property
    def draw_count(self) -> int:
        return self._draw_count

    def pulls_until_hard_pity(self) -> int:
        return self._pity.hard_threshold - self._draw_count

    def pulls_until_soft_pity(self) -> int:
        return self._pity.soft_start - self._draw_count

    def is_in_soft_pity(self) -> bool:
        return self._pity.soft_start <= self._draw_count < self._pity.hard_threshold

    def current_top_tier_rate(self) -> float:
        base = self._tier_rates[self.top_tier]
        if self.is_in_soft_pity():
            return base * self._pity.multiplier
        return base

    def effective_top_tier_rate(self, draw_count: int) -> float:
        base = self._tier_rates[self.top_tier]
        if draw_count >= self._pity.soft_start:
            return base * self._pity.multiplier
        return base

    def normalized_tier_rates(self, draw_count: Optional[int] = None) -> Dict[str, float]:
        """
        Tier probabilities for a draw made at `draw_count` (defaults to the
        current counter), with the soft-pity boost applied. Sums to 1.0.
        """
        if draw_count is None:
            draw_count = self._draw_count

        effective = dict(self._tier_rates)
        effective[self.top_tier] = self.effective_top_tier_rate(draw_count)
        total = sum(effective.values())

        return {tier: effective[tier] / total for tier in self._tiers}

    def history(self) -> List[DrawResult]:
        return list(self._history)

    def history_summary(self) -> Dict[str, Dict[str, int]]:
        counts: Dict[str, Dict[str, int]] = {}
        for result in self._history:
            by_item = counts.setdefault(result.tier, {})
            by_item[result.item] = by_item.get(result.item, 0) + 1

        return {tier: counts[tier] for tier in self._tiers if tier in counts}

    # ============================================================
    # DRAWING
    # ============================================================

    def is_ready(self) -> bool:
        return bool(self._items_by_tier[self.top_tier])

    def _ensure_ready(self):
        if not self.is_ready():
            raise CatalogNotReadyError(self.top_tier)

    def _select_tier(self, rates: Dict[str, float], roll: float) -> str:
        # Top tier first, so a roll on a boundary lands in the rarer tier
        cumulative = 0.0
        for tier in self._tiers:
            cumulative += rates[tier]
            if roll < cumulative:
                return tier
        return self._tiers[-1]

    def _select_item(self, tier: str) -> Optional[GachaItem]:
        items = self._items_by_tier[tier]
        if not items:
            return None

        total = sum(item.weight for item in items)
        roll = self._rng.random() * total

        cumulative = 0.0
        for item in items:
            cumulative += item.weight
            if roll <= cumulative:
                return item
        return items[-1]

    def draw(self) -> DrawResult:
        self._ensure_ready()
        self._draw_count += 1

        if self._draw_count >= self._pity.hard_threshold:
            item = self.guaranteed_item()
            result = DrawResult(
                item=item.name,
                tier=self.top_tier,
                is_guaranteed=True,
                sequence=self._draw_count,
            )
            logger.info("Hard pity fired at pull %d: %s", self._draw_count, item.name)
            self._draw_count = 0
            self._history.append(result)
            return result

        rates = self.normalized_tier_rates(self._draw_count)
        tier = self._select_tier(rates, self._rng.random())

        item = self._select_item(tier)
        if item is None:
            logger.warning("Tier %s has no items; returning placeholder", tier)
            item_name = f"{tier} Item"
        else:
            item_name = item.name

        result = DrawResult(
            item=item_name,
            tier=tier,
            is_guaranteed=False,
            sequence=self._draw_count,
        )

        if tier == self.top_tier:
            self._draw_count = 0

        logger.debug("Pull %d -> %s (%s)", result.sequence, item_name, tier)
        self._history.append(result)
        return result

    def draw_many(self, count: int) -> List[DrawResult]:
        if count < 0:
            raise ValueError("count must be >= 0")
        return [self.draw() for _ in range(count)]

    def draw_until_top_tier(self, max_draws: int = DEFAULT_SIMULATION_CAP) -> TopTierRun:
        """Keep pulling until a top-tier item lands or `max_draws` is reached."""
        if max_draws < 1:
            raise ValueError("max_draws must be >= 1")

        results = []
        got_top_tier = False

        while len(results) < max_draws:
            result = self.draw()
            results.append(result)
            if result.tier == self.top_tier:
                got_top_tier = True
                break

        return TopTierRun(
            results=results,
            got_top_tier=got_top_tier,
            pulls=len(results),
            currency_spent=len(results) * PULL_COST,
        )
