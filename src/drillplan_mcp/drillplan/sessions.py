"""Daily session plan: generation from drill volumes and per-session target edits."""

import logging
from collections.abc import Iterable

from drillplan_mcp.drillplan.constants import (
    DAYS, DEFAULT_REST, DEFAULT_TARGET_SETS, UNCATEGORIZED, UNTITLED_DRILL,
)
from drillplan_mcp.drillplan.models import Drill, PrescribedSession
from drillplan_mcp.drillplan.volume import parse_sets, round_half_up

logger = logging.getLogger(__name__)

INITIAL_SETS = 4


def generate_sessions(drills: Iterable[Drill]) -> list[PrescribedSession]:
    """Sweep drills into sessions, grouped by day in week order, then by drill order.

    A drill contributes a session on a day only when its raw allocation for
    that day is positive. Identities are numbered from 1.
    """
    drills = list(drills)
    sessions: list[PrescribedSession] = []
    counter = 1

    for day_index, day in enumerate(DAYS):
        for drill in drills:
            raw = drill.daily_values[day_index]
            if raw <= 0:
                continue
            rounded = round_half_up(raw / 10) * 10
            sessions.append(PrescribedSession(
                id=counter,
                day=day,
                category=drill.category or UNCATEGORIZED,
                drill=drill.name or UNTITLED_DRILL,
                target_sets=DEFAULT_TARGET_SETS,
                reps_per_set=round_half_up(rounded / INITIAL_SETS),
                rest=DEFAULT_REST,
            ))
            counter += 1

    return sessions


def adjust_target(session: PrescribedSession, target_sets: str) -> PrescribedSession:
    """Change a session's target set count, keeping its prescribed volume.

    The volume is rebuilt from the session's current reps and previous target,
    so repeated edits can drift away from the drill's own volume.
    """
    new_sets = parse_sets(target_sets)
    implied_total = round_half_up((session.reps_per_set * parse_sets(session.target_sets)) / 10) * 10
    session.reps_per_set = round_half_up(implied_total / new_sets)
    session.target_sets = target_sets
    return session


class SessionPlan:
    """Derived session list.

    Starts unbuilt (``sessions is None``), which is distinct from a plan that
    was generated and came out empty.
    """

    def __init__(self):
        self.sessions: list[PrescribedSession] | None = None

    @property
    def is_built(self) -> bool:
        return self.sessions is not None

    def reset(self) -> None:
        self.sessions = None

    def generate(self, drills: Iterable[Drill]) -> list[PrescribedSession]:
        self.sessions = generate_sessions(drills)
        logger.info("Generated %d sessions", len(self.sessions))
        return self.sessions

    def get(self, session_id: int) -> PrescribedSession | None:
        for session in self.sessions or []:
            if session.id == session_id:
                return session
        return None

    def for_day(self, day: str) -> list[PrescribedSession]:
        return [s for s in self.sessions or [] if s.day == day]

    def adjust_target(self, session_id: int, target_sets: str) -> PrescribedSession | None:
        session = self.get(session_id)
        if session is None:
            return None
        return adjust_target(session, target_sets)

    def set_rest(self, session_id: int, rest: str) -> PrescribedSession | None:
        session = self.get(session_id)
        if session is None:
            return None
        session.rest = rest
        return session
