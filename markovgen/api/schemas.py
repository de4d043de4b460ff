from pydantic import BaseModel, Field
from typing import Optional


class GenerateIn(BaseModel):
    seed: Optional[str] = None
    output_size: Optional[int] = Field(default=None, ge=0)
    short_seed: Optional[str] = None
    random_seed: Optional[int] = None


class GenerateOut(BaseModel):
    tokens: list[str]
    text: str
    requested: int
    produced: int
    truncated: bool


class TrainIn(BaseModel):
    text: str
    state_size: Optional[int] = Field(default=None, ge=1)


class StatsOut(BaseModel):
    state_size: int
    states: int
    transitions: int
    vocabulary: int
    branching: float
    entropy: float
