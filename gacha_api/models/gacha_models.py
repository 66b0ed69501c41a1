from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class GachaItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name of the item")
    tier: str = Field(..., description="Rarity tier label")
    weight: float = Field(..., gt=0, description="Draw weight relative to items in the same tier")
    title: Optional[str] = Field(default=None, description="Display title")
    flavor: Optional[str] = Field(default=None, description="Category / element tag")


class DrawResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: str
    tier: str
    is_guaranteed: bool = False
    sequence: int = Field(..., description="Pity counter value at the moment of the draw")


class PityConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    hard_threshold: int
    soft_start: int
    multiplier: float


class TopTierRun(BaseModel):
    results: list[DrawResult]
    got_top_tier: bool
    pulls: int
    currency_spent: int
