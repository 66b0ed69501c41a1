import os

# Highest rarity first; hard pity guarantees the first tier
TIER_ORDER = ["SSR", "SR", "R", "Common"]

DEFAULT_TIER_RATES = {
    "SSR": 0.01,
    "SR": 0.05,
    "R": 0.15,
    "Common": 0.79,
}

TIER_STARS = {
    "SSR": "★★★★★",
    "SR": "★★★★",
    "R": "★★★",
}

DEFAULT_HARD_PITY = 90
DEFAULT_SOFT_PITY_START = 75
DEFAULT_SOFT_PITY_MULTIPLIER = 5.0

# Currency spent per pull, reporting only
PULL_COST = 160

DEFAULT_SIMULATION_CAP = 100
MAX_BATCH_SIZE = 1_000
MAX_SIMULATIONS = 100_000

# Fatal errors = banner cannot be loaded
FATAL_MISSING_ITEM_FIELDS = ["name", "weight"]
FATAL_PITY_FIELDS = ["hard_threshold", "soft_start", "multiplier"]

# Soft warnings = loads fine, but display will be bare
OPTIONAL_ITEM_FIELDS = ["title", "flavor"]

BANNER_PATH = os.getenv("GACHA_BANNER_PATH")
GACHA_SEED = os.getenv("GACHA_SEED")
LOG_LEVEL = os.getenv("GACHA_LOG_LEVEL", "INFO")
