import json
import logging
from pathlib import Path

from gacha_api.banner_rules import BANNER_PATH, FATAL_PITY_FIELDS
from gacha_api.banner_validator import validate_banner
from gacha_api.draw_engine import DrawEngine
from gacha_api.exceptions import CatalogValidationError

logger = logging.getLogger(__name__)

DEFAULT_BANNER_PATH = Path(__file__).parent / "banner.json"


def load_banner(path=None) -> dict:
    banner_path = Path(path or BANNER_PATH or DEFAULT_BANNER_PATH)

    with open(banner_path, "r", encoding="utf-8") as f:
        banner = json.load(f)

    logger.info("Loaded banner from %s", banner_path)
    return banner


def build_engine(banner: dict, rng=None) -> DrawEngine:
    """Validates a banner dict and builds a ready-to-draw engine from it."""
    validation = validate_banner(banner)
    if not validation["valid"]:
        raise CatalogValidationError(validation["errors"])

    for warning in validation["warnings"]:
        logger.warning("Banner %s: %s", warning["path"], warning["message"])

    engine_kwargs = {}
    if "pity" in banner:
        engine_kwargs = {field: banner["pity"][field] for field in FATAL_PITY_FIELDS}

    engine = DrawEngine(
        tier_rates=banner.get("tier_rates"),
        rng=rng,
        **engine_kwargs,
    )

    for tier in engine.tiers:
        for item in banner["items"].get(tier, []):
            engine.add_item(
                name=item["name"],
                tier=tier,
                weight=item["weight"],
                title=item.get("title"),
                flavor=item.get("flavor"),
            )

    if banner.get("guaranteed"):
        engine.set_guaranteed_item_by_name(banner["guaranteed"])

    logger.info(
        "Built engine for %r with %d items",
        banner.get("name", "unnamed banner"),
        len(engine.all_items()),
    )
    return engine
