from fastapi import APIRouter, Depends, HTTPException

from gacha_api.draw_engine import DrawEngine
from gacha_api.schemas import GuaranteedItemRequest, PityConfigRequest
from gacha_api.services.engine_state import engine_lock, get_engine
from gacha_api.services.gacha_service import pity_status

router = APIRouter(prefix="/pity", tags=["Pity"])


@router.get(
    "",
    summary="Current pity counter and settings",
    description="Pulls left until soft/hard pity, boosted rate, and the guaranteed item.",
    response_model=dict,
)
def get_pity(engine: DrawEngine = Depends(get_engine)):
    with engine_lock:
        return pity_status(engine)


@router.put(
    "",
    summary="Configure pity thresholds",
    description="Rejected settings leave the current configuration untouched.",
    response_model=dict,
)
def configure_pity(req: PityConfigRequest, engine: DrawEngine = Depends(get_engine)):
    with engine_lock:
        accepted = engine.configure_pity(req.hard_threshold, req.soft_start, req.multiplier)
        status = pity_status(engine)

    if not accepted:
        raise HTTPException(
            400,
            {
                "message": "Pity settings rejected: need hard_threshold > 0, "
                           "0 < soft_start < hard_threshold, multiplier > 1.0",
                "current": status,
            },
        )

    return status


@router.put(
    "/guaranteed",
    summary="Choose the hard pity item",
    description="Select by top-tier item name or by its position in the top-tier list.",
    response_model=dict,
)
def set_guaranteed(req: GuaranteedItemRequest, engine: DrawEngine = Depends(get_engine)):
    with engine_lock:
        if req.name is not None:
            accepted = engine.set_guaranteed_item_by_name(req.name)
        else:
            accepted = engine.set_guaranteed_item(req.index)
        status = pity_status(engine)

    if not accepted:
        target = req.name if req.name is not None else f"index {req.index}"
        raise HTTPException(404, f"No {engine.top_tier} item matches {target}")

    return status
