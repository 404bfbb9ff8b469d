"""The collection of drills a coach is editing."""

import logging

from drillplan_mcp.drillplan.models import Drill
from drillplan_mcp.drillplan.volume import recompute, to_number

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("category", "name", "base", "fact")
VOLUME_FIELDS = ("base", "fact")


class DrillRegistry:
    """Ordered drills, in insertion order. Editing base or fact recomputes the drill in place."""

    def __init__(self, drills: list[Drill] | None = None):
        self._drills: list[Drill] = list(drills or [])

    def __iter__(self):
        return iter(self._drills)

    def __len__(self) -> int:
        return len(self._drills)

    @property
    def drills(self) -> list[Drill]:
        return list(self._drills)

    def get(self, drill_id: str) -> Drill | None:
        for drill in self._drills:
            if drill.id == drill_id:
                return drill
        return None

    def add(self) -> Drill:
        drill = Drill()
        self._drills.append(drill)
        logger.debug("Added drill %s", drill.id)
        return drill

    def remove(self, drill_id: str) -> None:
        self._drills = [d for d in self._drills if d.id != drill_id]

    def update(self, drill_id: str, field: str, value) -> Drill | None:
        """Set one field of a drill. Returns the drill, or None if no drill has that id."""
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Drill field {field!r} is not editable")

        drill = self.get(drill_id)
        if drill is None:
            return None

        if field in VOLUME_FIELDS:
            number = to_number(value)
            base, fact = (number, drill.fact) if field == "base" else (drill.base, number)
            total, daily_values = recompute(base, fact)
            setattr(drill, field, number)
            drill.total, drill.daily_values = total, daily_values
            logger.debug("Recomputed drill %s: total=%s daily=%s", drill.id, drill.total, drill.daily_values)
        else:
            setattr(drill, field, "" if value is None else str(value))
        return drill

    def replace_all(self, drills: list[Drill]) -> None:
        self._drills = list(drills)

    def names(self) -> list[str]:
        return [d.name for d in self._drills]
