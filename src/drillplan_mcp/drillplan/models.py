"""Drill plan data models.

Field aliases keep the camelCase names of the persisted snapshot shape.
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from drillplan_mcp.drillplan.constants import DEFAULT_FACT, DEFAULT_REST, DEFAULT_TARGET_SETS
from drillplan_mcp.drillplan.volume import parse_sets, round_half_up, to_number


def new_id() -> str:
    return str(uuid4())


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Drill(_Model):
    """A trainable exercise with coach-set base/fact inputs and derived weekly volume."""
    id: str = Field(default_factory=new_id)
    category: str = ""
    name: str = ""
    base: float = 0
    fact: float = DEFAULT_FACT
    total: float = 0
    daily_values: list[int] = Field(default_factory=lambda: [0] * 6, alias="dailyValues")

    @field_validator("base", "fact", mode="before")
    @classmethod
    def _coerce_number(cls, value):
        return to_number(value)


class PrescribedSession(_Model):
    """A (day, drill) pairing with a prescribed set/rep/rest target."""
    id: int
    day: str
    category: str
    drill: str
    target_sets: str = Field(default=DEFAULT_TARGET_SETS, alias="targetSets")
    reps_per_set: int = Field(alias="repsPerSet")
    rest: str = DEFAULT_REST

    @property
    def total_reps(self) -> int:
        return round_half_up(self.reps_per_set * parse_sets(self.target_sets))

    @property
    def rounded_volume(self) -> int:
        return round_half_up(self.total_reps / 10) * 10


class Variation(_Model):
    """A named sub-breakdown of a session's prescribed sets.

    ``drill_id`` holds the owning session's id, not a drill id.
    """
    id: str = Field(default_factory=new_id)
    drill_id: int = Field(alias="drillId")
    name: str = ""
    sets: float = 0
    reps: str = ""

    @field_validator("sets", mode="before")
    @classmethod
    def _coerce_sets(cls, value):
        return to_number(value)

    @field_validator("reps", mode="before")
    @classmethod
    def _reps_as_text(cls, value):
        return "" if value is None else str(value)


class AppSnapshot(_Model):
    """The persisted unit. Sessions are never part of it."""
    team_name: str = Field(default="", alias="teamName")
    drills: list[Drill] = []
    variations: dict[str, list[Variation]] = {}


class User(_Model):
    """A signed-in coach."""
    uid: str
    display_name: str | None = Field(default=None, alias="displayName")
    email: str | None = None
    photo_url: str | None = Field(default=None, alias="photoURL")
