from fastapi import APIRouter, Depends

from gacha_api.schemas import SimulationRequest
from gacha_api.services.engine_state import get_banner
from gacha_api.services.gacha_service import simulate_pulls

router = APIRouter(prefix="/simulate", tags=["Simulation"])


@router.post(
    "",
    summary="Run pull simulation",
    description=(
        "Runs pulls on a fresh engine built from the loaded banner file. "
        "Tier distribution, top items, and pity statistics. "
        "Does not touch the live engine's counter or history."
    ),
    response_model=dict,
)
def simulate(req: SimulationRequest, banner: dict = Depends(get_banner)):
    return simulate_pulls(banner, req.simulations, req.seed)
