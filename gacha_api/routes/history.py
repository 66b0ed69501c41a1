from typing import Optional

from fastapi import APIRouter, Depends, Query

from gacha_api.draw_engine import DrawEngine
from gacha_api.services.engine_state import engine_lock, get_engine
from gacha_api.services.gacha_service import render_result

router = APIRouter(prefix="/history", tags=["History"])


@router.get(
    "",
    summary="Pull history",
    description="Oldest first. Pass limit to get only the most recent pulls.",
    response_model=dict,
)
def get_history(
    limit: Optional[int] = Query(default=None, ge=1),
    engine: DrawEngine = Depends(get_engine),
):
    with engine_lock:
        history = engine.history()
        total = len(history)
        if limit is not None:
            history = history[-limit:]
        start = total - len(history)

        return {
            "total_pulls": total,
            "results": [
                {"pull": start + i + 1, **render_result(engine, r)}
                for i, r in enumerate(history)
            ],
        }


@router.get(
    "/summary",
    summary="Items obtained, grouped by tier",
    response_model=dict,
)
def history_summary(engine: DrawEngine = Depends(get_engine)):
    with engine_lock:
        summary = engine.history_summary()
        total = len(engine.history())

    return {
        "total_pulls": total,
        "by_tier": summary,
        "tier_totals": {tier: sum(items.values()) for tier, items in summary.items()},
    }
