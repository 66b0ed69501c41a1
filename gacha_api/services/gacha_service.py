from collections import Counter
from typing import Any, Dict

from gacha_api.banner_loader import build_engine
from gacha_api.banner_rules import PULL_COST, TIER_STARS
from gacha_api.draw_engine import DrawEngine
from gacha_api.models.gacha_models import DrawResult
from gacha_api.rng import get_rng


def render_result(engine: DrawEngine, result: DrawResult) -> Dict[str, Any]:
    """Draw result plus catalog display fields (title, flavor, stars)."""
    item = engine.find_item(result.item, result.tier)
    return {
        "item": result.item,
        "tier": result.tier,
        "title": item.title if item else None,
        "flavor": item.flavor if item else None,
        "stars": TIER_STARS.get(result.tier, ""),
        "is_guaranteed": result.is_guaranteed,
        "sequence": result.sequence,
    }


def pity_status(engine: DrawEngine) -> Dict[str, Any]:
    config = engine.pity_config()
    guaranteed = engine.guaranteed_item()
    return {
        "draw_count": engine.draw_count,
        "hard_threshold": config.hard_threshold,
        "soft_start": config.soft_start,
        "multiplier": config.multiplier,
        "pulls_until_hard_pity": engine.pulls_until_hard_pity(),
        "pulls_until_soft_pity": engine.pulls_until_soft_pity(),
        "in_soft_pity": engine.is_in_soft_pity(),
        "current_top_tier_rate": engine.current_top_tier_rate(),
        "guaranteed_item": guaranteed.name if guaranteed else None,
    }


def simulate_pulls(banner: dict, simulations: int, seed: int | None = None) -> dict:
    """Run `simulations` pulls on a fresh engine and return distribution stats."""
    engine = build_engine(banner, rng=get_rng(seed))
    results = engine.draw_many(simulations)

    tier_counts = Counter(r.tier for r in results)
    item_counts = Counter(r.item for r in results)

    top_hits = [r for r in results if r.tier == engine.top_tier]
    guaranteed = sum(1 for r in top_hits if r.is_guaranteed)

    tier_distribution = {
        tier: round((tier_counts.get(tier, 0) / simulations) * 100, 2)
        for tier in engine.tiers
    }

    average_pulls = None
    if top_hits:
        average_pulls = round(sum(r.sequence for r in top_hits) / len(top_hits), 2)

    warnings = []
    if top_hits and guaranteed / len(top_hits) > 0.5:
        warnings.append(
            f"Most {engine.top_tier} results came from hard pity; "
            f"the base {engine.top_tier} rate may be too low."
        )

    return {
        "simulations": simulations,
        "tier_counts": {tier: tier_counts.get(tier, 0) for tier in engine.tiers},
        "tier_distribution": tier_distribution,
        "top_items": item_counts.most_common(10),
        "top_tier_hits": len(top_hits),
        "guaranteed_hits": guaranteed,
        "average_pulls_per_top_tier": average_pulls,
        "currency_spent": simulations * PULL_COST,
        "warnings": warnings,
    }
