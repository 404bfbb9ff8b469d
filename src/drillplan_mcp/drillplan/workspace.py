"""The coach's working state: team, drills, the generated plan and its variations."""

import logging

from drillplan_mcp.drillplan.models import AppSnapshot, PrescribedSession, Variation
from drillplan_mcp.drillplan.registry import DrillRegistry
from drillplan_mcp.drillplan.sessions import SessionPlan
from drillplan_mcp.drillplan.variations import VariationLedger

logger = logging.getLogger(__name__)


class Workspace:
    """Everything one coach edits, plus the snapshot boundary used for save/load.

    The session plan is derived state: it is never saved, and restoring a
    snapshot leaves it unbuilt until the coach generates it again.
    """

    def __init__(self, team_name: str = ""):
        self.team_name = team_name
        self.drills = DrillRegistry()
        self.plan = SessionPlan()
        self.variations = VariationLedger()

    @property
    def selected_day(self) -> str:
        return self.variations.selected_day

    def select_day(self, day: str) -> None:
        self.variations.select_day(day)

    def generate_plan(self) -> list[PrescribedSession]:
        return self.plan.generate(self.drills)

    def sessions_for_selected_day(self) -> list[PrescribedSession]:
        return self.plan.for_day(self.selected_day)

    def add_variation(self, session_id: int) -> Variation | None:
        session = self.plan.get(session_id)
        if session is None or session.day != self.selected_day:
            return None
        return self.variations.add_variation(session_id, session.reps_per_set)

    def remaining_sets(self, session_id: int, day: str | None = None) -> float | None:
        session = self.plan.get(session_id)
        if session is None:
            return None
        return self.variations.remaining_sets(session, day or self.selected_day)

    def drill_summary(self) -> str:
        return ", ".join(self.drills.names())

    def snapshot(self) -> AppSnapshot:
        return AppSnapshot(
            team_name=self.team_name,
            drills=[d.model_copy(deep=True) for d in self.drills],
            variations={k: [v.model_copy() for v in vs] for k, vs in self.variations.entries.items()},
        )

    def restore(self, snapshot: AppSnapshot) -> None:
        self.team_name = snapshot.team_name
        self.drills.replace_all([d.model_copy(deep=True) for d in snapshot.drills])
        self.variations = VariationLedger(
            {k: [v.model_copy() for v in vs] for k, vs in snapshot.variations.items()},
            selected_day=self.selected_day,
        )
        self.plan.reset()
        logger.info(
            "Restored %d drills and %d variation groups; session plan needs regenerating",
            len(snapshot.drills), len(snapshot.variations),
        )

