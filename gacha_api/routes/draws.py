from fastapi import APIRouter, Depends, HTTPException

from gacha_api.draw_engine import DrawEngine
from gacha_api.exceptions import GachaError
from gacha_api.schemas import DrawManyRequest, DrawUntilTopTierRequest
from gacha_api.services.engine_state import engine_lock, get_engine
from gacha_api.services.gacha_service import pity_status, render_result

router = APIRouter(prefix="/draw", tags=["Draws"])


@router.post(
    "",
    summary="Single pull",
    description="Resolves tier (with soft pity boost), then item within the tier.",
    response_model=dict,
)
def draw_one(engine: DrawEngine = Depends(get_engine)):
    try:
        with engine_lock:
            result = engine.draw()
            return {
                "result": render_result(engine, result),
                "pity": pity_status(engine),
            }
    except GachaError as e:
        raise HTTPException(400, e.message)


@router.post(
    "/many",
    summary="Multi pull",
    description="Sequential pulls, results in call order.",
    response_model=dict,
)
def draw_many(req: DrawManyRequest, engine: DrawEngine = Depends(get_engine)):
    try:
        with engine_lock:
            results = engine.draw_many(req.count)
            rendered = [render_result(engine, r) for r in results]
            status = pity_status(engine)
    except GachaError as e:
        raise HTTPException(400, e.message)

    top_hits = sum(1 for r in results if r.tier == engine.top_tier)

    return {
        "count": len(rendered),
        "results": rendered,
        "top_tier_hits": top_hits,
        "pity": status,
    }


@router.post(
    "/until-top-tier",
    summary="Pull until a top-tier item",
    description="Stops at the first top-tier result or after max_draws pulls.",
    response_model=dict,
)
def draw_until_top_tier(req: DrawUntilTopTierRequest, engine: DrawEngine = Depends(get_engine)):
    try:
        with engine_lock:
            run = engine.draw_until_top_tier(req.max_draws)
            rendered = [render_result(engine, r) for r in run.results]
            status = pity_status(engine)
    except GachaError as e:
        raise HTTPException(400, e.message)

    return {
        "got_top_tier": run.got_top_tier,
        "pulls": run.pulls,
        "currency_spent": run.currency_spent,
        "last": rendered[-1],
        "results": rendered,
        "pity": status,
    }
