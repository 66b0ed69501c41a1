from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Optional

from gacha_api.banner_rules import DEFAULT_SIMULATION_CAP, MAX_BATCH_SIZE, MAX_SIMULATIONS

# -----------------------------
# CATALOG
# -----------------------------

class AddItemRequest(BaseModel):
    name: str = Field(description="Item name. Duplicates are allowed.")
    tier: str = Field(description="Rarity tier label (SSR, SR, R, Common).")
    weight: float = Field(
        gt=0,
        description="Draw weight relative to other items of the same tier."
    )
    title: Optional[str] = Field(default=None, description="Display title")
    flavor: Optional[str] = Field(default=None, description="Element / category tag")

    @field_validator("name")
    @classmethod
    def non_empty(cls, v):
        if not v.strip():
            raise ValueError("name cannot be empty")
        return v


class BannerValidateRequest(BaseModel):
    banner: Any = Field(
        description="Banner JSON to validate. Never replaces the loaded banner."
    )


# -----------------------------
# PITY
# -----------------------------

class PityConfigRequest(BaseModel):
    hard_threshold: int = Field(description="Pull number at which the top tier is forced.")
    soft_start: int = Field(description="Pull number at which the top-tier rate is boosted.")
    multiplier: float = Field(description="Top-tier rate multiplier during soft pity (> 1.0).")

    model_config = {
        "json_schema_extra": {
            "example": {
                "hard_threshold": 90,
                "soft_start": 75,
                "multiplier": 5.0,
            }
        }
    }


class GuaranteedItemRequest(BaseModel):
    name: Optional[str] = Field(default=None, description="Top-tier item name")
    index: Optional[int] = Field(default=None, description="Position in the top-tier list")

    @model_validator(mode="after")
    def exactly_one(self):
        if (self.name is None) == (self.index is None):
            raise ValueError("provide exactly one of name or index")
        return self


# -----------------------------
# DRAWS
# -----------------------------

class DrawManyRequest(BaseModel):
    count: int = Field(
        default=10,
        ge=1,
        le=MAX_BATCH_SIZE,
        description=f"Number of sequential pulls. Max: {MAX_BATCH_SIZE}"
    )


class DrawUntilTopTierRequest(BaseModel):
    max_draws: int = Field(
        default=DEFAULT_SIMULATION_CAP,
        ge=1,
        le=MAX_BATCH_SIZE,
        description="Stop after this many pulls even without a top-tier item."
    )


# -----------------------------
# SIMULATION REQUEST
# -----------------------------

class SimulationRequest(BaseModel):
    simulations: int = Field(
        default=1000,
        ge=1,
        le=MAX_SIMULATIONS,
        description=f"Number of simulated pulls. Max: {MAX_SIMULATIONS:,}"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Optional RNG seed. Same seed always produces the same pulls."
    )
