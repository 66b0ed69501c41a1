from fastapi import APIRouter, Depends, HTTPException

from gacha_api.banner_validator import validate_banner
from gacha_api.draw_engine import DrawEngine
from gacha_api.exceptions import GachaError
from gacha_api.schemas import AddItemRequest, BannerValidateRequest
from gacha_api.services.engine_state import engine_lock, get_engine

router = APIRouter(prefix="/catalog", tags=["Catalog"])


def _tier_listing(engine: DrawEngine, tier: str) -> dict:
    return {
        "tier": tier,
        "rate": engine.tier_rate(tier),
        "weight_total": engine.tier_weight_totals()[tier],
        "items": [item.model_dump() for item in engine.list_by_tier(tier)],
    }


@router.get(
    "",
    summary="Full catalog grouped by tier",
    description="Tier base rates, cached weight totals, and every item in insertion order.",
    response_model=dict,
)
def full_catalog(engine: DrawEngine = Depends(get_engine)):
    with engine_lock:
        return {
            "item_count": len(engine.all_items()),
            "tiers": [_tier_listing(engine, tier) for tier in engine.tiers],
        }


@router.get(
    "/{tier}",
    summary="Items of a single tier",
    response_model=dict,
)
def catalog_by_tier(tier: str, engine: DrawEngine = Depends(get_engine)):
    if tier not in engine.tiers:
        raise HTTPException(404, f"Unknown tier: {tier}")

    with engine_lock:
        return _tier_listing(engine, tier)


@router.post(
    "/items",
    summary="Add an item to the catalog",
    description="No uniqueness check; duplicate names stay independently drawable.",
    response_model=dict,
)
def add_item(req: AddItemRequest, engine: DrawEngine = Depends(get_engine)):
    try:
        with engine_lock:
            item = engine.add_item(
                name=req.name,
                tier=req.tier,
                weight=req.weight,
                title=req.title,
                flavor=req.flavor,
            )
    except GachaError as e:
        raise HTTPException(400, e.message)

    return {"added": item.model_dump(), "item_count": len(engine.all_items())}


@router.post(
    "/validate",
    summary="Validate a banner JSON",
    description=(
        "Structural validation of a banner file (errors & warnings with JSON paths).\n\n"
        "This endpoint NEVER modifies the loaded catalog."
    ),
    response_model=dict,
)
def validate_catalog(req: BannerValidateRequest):
    return validate_banner(req.banner)
