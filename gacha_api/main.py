import logging

from fastapi import Depends, FastAPI

from gacha_api.banner_rules import LOG_LEVEL
from gacha_api.draw_engine import DrawEngine
from gacha_api.routes import catalog, draws, history, pity, simulation
from gacha_api.services.engine_state import engine_lock, get_banner, get_engine

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Gacha Pity API",
    description="Weighted gacha pulls with hard and soft pity, pull history and simulation.",
    version="1.0.0",
)

app.include_router(catalog.router)
app.include_router(pity.router)
app.include_router(draws.router)
app.include_router(history.router)
app.include_router(simulation.router)

# ============================================================
# HEALTH CHECK
# ============================================================

@app.get("/health", tags=["Health"], response_model=dict)
def health_check():
    return {"status": "ok"}


# ============================================================
# METADATA ENDPOINTS
# ============================================================
@app.get(
    "/info",
    tags=["Metadata"],
    summary="API info + banner metadata",
    description="Returns API version, banner name, item count and tier order.",
    response_model=dict
)
def info(engine: DrawEngine = Depends(get_engine), banner: dict = Depends(get_banner)):
    return {
        "name": "Gacha Pity API",
        "version": app.version,
        "banner": banner.get("name"),
        "item_count": len(engine.all_items()),
        "tiers": engine.tiers,
        "top_tier": engine.top_tier,
    }


@app.get(
    "/rates",
    tags=["Metadata"],
    summary="Tier rates right now",
    description="Base rates and the normalized rates including any soft pity boost.",
    response_model=dict
)
def rates(engine: DrawEngine = Depends(get_engine)):
    with engine_lock:
        config = engine.pity_config()
        return {
            "base_rates": engine.tier_rates(),
            "normalized_rates": engine.normalized_tier_rates(),
            "current_top_tier_rate": engine.current_top_tier_rate(),
            "in_soft_pity": engine.is_in_soft_pity(),
            "hard_threshold": config.hard_threshold,
            "soft_start": config.soft_start,
            "multiplier": config.multiplier,
        }
