import threading

from gacha_api.banner_loader import build_engine, load_banner
from gacha_api.banner_rules import GACHA_SEED
from gacha_api.draw_engine import DrawEngine
from gacha_api.rng import get_rng, parse_seed

BANNER = load_banner()

_engine = build_engine(
    BANNER,
    rng=get_rng(parse_seed(GACHA_SEED)),
)

# FastAPI runs sync handlers on a threadpool; the engine is single-caller
engine_lock = threading.Lock()


def get_engine() -> DrawEngine:
    return _engine


def get_banner() -> dict:
    return BANNER
