"""Variation ledger: named sub-drills breaking a session's sets down.

Entries are stored under ``"<day>-<session id>"`` for every day. The selected
day only decides which key new, edited and removed variations go through.
"""

import logging

from drillplan_mcp.drillplan.constants import DAYS
from drillplan_mcp.drillplan.exceptions import UnknownDayError
from drillplan_mcp.drillplan.models import PrescribedSession, Variation
from drillplan_mcp.drillplan.volume import format_number, to_number

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "sets", "reps")


def ledger_key(day: str, session_id: int) -> str:
    return f"{day}-{session_id}"


def remaining_status(remaining: float) -> str:
    if remaining == 0:
        return "balanced"
    return "under" if remaining > 0 else "over"


class VariationLedger:
    """Keyed mapping from (day, session id) to variations in insertion order."""

    def __init__(self, entries: dict[str, list[Variation]] | None = None, selected_day: str = DAYS[0]):
        self.entries: dict[str, list[Variation]] = {k: list(v) for k, v in (entries or {}).items()}
        self.selected_day = selected_day

    def select_day(self, day: str) -> None:
        if day not in DAYS:
            raise UnknownDayError(day)
        self.selected_day = day

    def for_session(self, session_id: int, day: str | None = None) -> list[Variation]:
        return list(self.entries.get(ledger_key(day or self.selected_day, session_id), []))

    def add_variation(self, session_id: int, seed_reps) -> Variation:
        variation = Variation(drill_id=session_id, name="", sets=0, reps=format_number(seed_reps))
        key = ledger_key(self.selected_day, session_id)
        self.entries.setdefault(key, []).append(variation)
        logger.debug("Added variation %s under %s", variation.id, key)
        return variation

    def update_variation(self, session_id: int, variation_id: str, field: str, value) -> Variation | None:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Variation field {field!r} is not editable")

        for variation in self.entries.get(ledger_key(self.selected_day, session_id), []):
            if variation.id == variation_id:
                if field == "sets":
                    variation.sets = to_number(value)
                else:
                    setattr(variation, field, "" if value is None else str(value))
                return variation
        return None

    def remove_variation(self, session_id: int, variation_id: str) -> None:
        key = ledger_key(self.selected_day, session_id)
        if key in self.entries:
            self.entries[key] = [v for v in self.entries[key] if v.id != variation_id]

    def assigned_sets(self, session_id: int, day: str | None = None) -> float:
        return sum(to_number(v.sets) for v in self.for_session(session_id, day))

    def remaining_sets(self, session: PrescribedSession, day: str | None = None) -> float:
        """Target sets minus the sets already given to variations. Can go negative."""
        return to_number(session.target_sets) - self.assigned_sets(session.id, day or session.day)
