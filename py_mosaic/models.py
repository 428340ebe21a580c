"""Pydantic models exchanged with the surrounding application."""

from datetime import datetime
from types import MappingProxyType
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Points per difficulty for tasks created without an explicit score
DIFFICULTY_SCORES: Mapping[str, int] = MappingProxyType({
    "easy": 10,
    "medium": 20,
    "hard": 30,
})
DEFAULT_TASK_SCORE = 10


class Task(BaseModel):
    """A task of the day; task ``i`` owns region ``i`` of the board."""

    id: str = Field(description="Task identifier")
    name: str = Field(default="", description="Display name")
    difficulty: str = Field(default="medium", description="easy, medium or hard")
    score: Optional[int] = Field(
        default=None, ge=0, description="Points granted on completion, by difficulty if omitted"
    )
    completed: bool = Field(default=False, description="Task marked complete")

    @model_validator(mode="after")
    def default_score(self) -> "Task":
        if self.score is None:
            self.score = DIFFICULTY_SCORES.get(self.difficulty, DEFAULT_TASK_SCORE)
        return self


class Quote(BaseModel):
    """Motivational quote painted on the hidden background."""

    text: str
    author: str = ""
    category: str = ""


class CheckinRecord(BaseModel):
    """
    Persisted state of one day's board.

    Only region indices are stored. Shapes are regenerated on resume and may
    differ from the original session.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(description="Day of the session, YYYY-MM-DD")
    revealed_region_ids: List[int] = Field(default_factory=list, alias="revealedRegionIds")
    score_total: int = Field(default=0, alias="scoreTotal")
    region_count: int = Field(default=0, alias="regionCount")
    timestamp: datetime = Field(default_factory=datetime.now)
