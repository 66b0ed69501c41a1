import logging
import random

logger = logging.getLogger(__name__)


def get_rng(seed: int | None = None) -> random.Random:
    """Returns a private generator. Same seed always produces the same pulls."""
    return random.Random(seed)


def parse_seed(raw: str | None) -> int | None:
    """Integer seed from an environment value; unset or invalid means OS entropy."""
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring GACHA_SEED=%r: not an integer; using an unseeded generator", raw)
        return None
