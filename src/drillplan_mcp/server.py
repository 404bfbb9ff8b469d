"""Drill Plan MCP Server."""

import logging
from typing import Literal

import httpx
from mcp.server.fastmcp import FastMCP

from drillplan_mcp.drillplan.advice import AdviceService
from drillplan_mcp.drillplan.auth import FirebaseAuth
from drillplan_mcp.drillplan.config import get_settings
from drillplan_mcp.drillplan.constants import DAYS, DRILL_CATEGORIES, DRILL_PRESETS, PERCENTS
from drillplan_mcp.drillplan.exceptions import AuthenticationError, DrillPlanError, UnknownDayError
from drillplan_mcp.drillplan.models import PrescribedSession
from drillplan_mcp.drillplan.storage import CloudSnapshotStore, LocalSnapshotStore, SnapshotStore
from drillplan_mcp.drillplan.variations import remaining_status
from drillplan_mcp.drillplan.volume import format_number
from drillplan_mcp.drillplan.workspace import Workspace

logger = logging.getLogger(__name__)

settings = get_settings()

mcp = FastMCP("drillplan")
auth = FirebaseAuth(settings.firebase_api_key)
store = SnapshotStore(
    LocalSnapshotStore(settings.local_data_path),
    CloudSnapshotStore(auth, settings.firebase_project_id) if settings.cloud_enabled else None,
)
advice = AdviceService(settings.gemini_api_key, settings.advice_model)
workspace = Workspace(team_name=settings.default_team_name)

NOT_GENERATED = "The daily plan has not been generated yet. Run generate_plan first."


def _format_session(s: PrescribedSession) -> str:
    return (
        f"- [{s.id}] **{s.drill}** ({s.category}): {s.target_sets} sets x {s.reps_per_set} reps, "
        f"rest {s.rest} | total {s.total_reps}, rounded {s.rounded_volume}"
    )


def _format_plan(day: str | None = None) -> str:
    if not workspace.plan.is_built:
        return NOT_GENERATED

    lines = []
    for d in [day] if day else DAYS:
        sessions = workspace.plan.for_day(d)
        if not sessions:
            continue
        lines.append(f"## {d}")
        lines.extend(_format_session(s) for s in sessions)
        lines.append("")

    if not lines:
        return f"No sessions for {day}." if day else "No sessions: every drill has zero daily volume."
    return "\n".join(lines).rstrip()


@mcp.tool()
async def set_team_name(name: str) -> str:
    """Rename the team this plan belongs to."""
    workspace.team_name = name
    return f"Team name set to {name}."


@mcp.tool()
async def list_drill_catalogue() -> str:
    """List the drill categories and preset drill names a coach can pick from."""
    lines = ["Categories:"]
    lines.extend(f"- {c}" for c in DRILL_CATEGORIES)
    lines.append("\nPresets:")
    lines.extend(f"- {p}" for p in DRILL_PRESETS)
    return "\n".join(lines)


@mcp.tool()
async def add_drill(
    category: str = "",
    name: str = "",
    base: float | None = None,
    fact: float | None = None,
) -> str:
    """Add a drill to the weekly volume table.

    Args:
        category: Drill category, e.g. "Core".
        name: Drill name.
        base: Base volume. Omit to start at 0.
        fact: Volume factor. Omit to keep the default of 8.
    """
    drill = workspace.drills.add()
    if category:
        workspace.drills.update(drill.id, "category", category)
    if name:
        workspace.drills.update(drill.id, "name", name)
    if base is not None:
        workspace.drills.update(drill.id, "base", base)
    if fact is not None:
        workspace.drills.update(drill.id, "fact", fact)
    return f"Added drill {drill.id}: total {format_number(drill.total)}, daily {drill.daily_values}"


@mcp.tool()
async def update_drill(
    drill_id: str,
    field: Literal["category", "name", "base", "fact"],
    value: str,
) -> str:
    """Edit one field of a drill. Editing base or fact recalculates its weekly and daily volume.

    Args:
        drill_id: The drill ID (from list_drills).
        field: Which field to set.
        value: New value. Non-numeric base/fact values count as 0.
    """
    drill = workspace.drills.update(drill_id, field, value)
    if drill is None:
        return f"No drill with id {drill_id}."
    return f"Updated {drill.name or drill.id}: total {format_number(drill.total)}, daily {drill.daily_values}"


@mcp.tool()
async def remove_drill(drill_id: str) -> str:
    """Remove a drill from the weekly volume table."""
    workspace.drills.remove(drill_id)
    return f"Removed drill {drill_id}."


@mcp.tool()
async def list_drills() -> str:
    """Show the weekly volume table: every drill with its total and per-day allocation."""
    if not len(workspace.drills):
        return "No drills yet."

    day_headers = " | ".join(f"{d[:3]} ({p})" for d, p in zip(DAYS, PERCENTS))
    lines = [
        f"# {workspace.team_name}",
        f"| ID | Category | Drill | Base | Fact | Total | {day_headers} |",
        "|" + "---|" * (6 + len(DAYS)),
    ]
    for d in workspace.drills:
        daily = " | ".join(str(v) for v in d.daily_values)
        lines.append(
            f"| {d.id} | {d.category} | {d.name} | {format_number(d.base)} | "
            f"{format_number(d.fact)} | {format_number(d.total)} | {daily} |"
        )
    return "\n".join(lines)


@mcp.tool()
async def generate_plan() -> str:
    """Build the daily session plan from the current drills, replacing any previous plan and its edits."""
    sessions = workspace.generate_plan()
    return f"Generated {len(sessions)} sessions.\n\n{_format_plan()}"


@mcp.tool()
async def show_plan(day: str | None = None) -> str:
    """Show the generated daily plan.

    Args:
        day: Only show this day (e.g. "Monday"). Omit for the whole week.
    """
    if day is not None and day not in DAYS:
        return f"Unknown day {day}. Use one of: {', '.join(DAYS)}."
    return _format_plan(day)


@mcp.tool()
async def set_session_target(session_id: int, target_sets: str) -> str:
    """Change a session's target set count. Reps per set are recalculated to keep the volume.

    Args:
        session_id: The session ID (from show_plan).
        target_sets: New target, as typed. Non-numeric or zero counts as 1 set.
    """
    if not workspace.plan.is_built:
        return NOT_GENERATED
    session = workspace.plan.adjust_target(session_id, target_sets)
    if session is None:
        return f"No session with id {session_id}."
    return _format_session(session)


@mcp.tool()
async def set_session_rest(session_id: int, rest: str) -> str:
    """Change the rest period of a session, e.g. "60s"."""
    if not workspace.plan.is_built:
        return NOT_GENERATED
    session = workspace.plan.set_rest(session_id, rest)
    if session is None:
        return f"No session with id {session_id}."
    return _format_session(session)


@mcp.tool()
async def select_day(day: str) -> str:
    """Choose which day the variation builder works on."""
    try:
        workspace.select_day(day)
    except UnknownDayError as e:
        return f"{e}. Use one of: {', '.join(DAYS)}."
    return f"Selected {day}."


@mcp.tool()
async def add_variation(session_id: int) -> str:
    """Add an empty variation to a session on the selected day, seeded with the session's reps per set."""
    variation = workspace.add_variation(session_id)
    if variation is None:
        return f"No session with id {session_id} on {workspace.selected_day}."
    return f"Added variation {variation.id} ({variation.reps} reps) to session {session_id} on {workspace.selected_day}."


@mcp.tool()
async def update_variation(
    session_id: int,
    variation_id: str,
    field: Literal["name", "sets", "reps"],
    value: str,
) -> str:
    """Edit a variation of a session on the selected day.

    Args:
        session_id: The owning session ID.
        variation_id: The variation ID (from show_variations).
        field: Which field to set.
        value: New value. Non-numeric sets count as 0.
    """
    variation = workspace.variations.update_variation(session_id, variation_id, field, value)
    if variation is None:
        return f"No variation {variation_id} for session {session_id} on {workspace.selected_day}."
    remaining = workspace.remaining_sets(session_id, workspace.selected_day)
    if remaining is None:
        return f"Updated variation {variation_id}."
    return f"Updated variation {variation_id}. Remaining sets: {format_number(remaining)}"


@mcp.tool()
async def remove_variation(session_id: int, variation_id: str) -> str:
    """Remove a variation from a session on the selected day."""
    workspace.variations.remove_variation(session_id, variation_id)
    return f"Removed variation {variation_id}."


@mcp.tool()
async def show_variations(day: str | None = None) -> str:
    """Show the variation builder: each session of the day, its variations and remaining sets.

    Args:
        day: Switch the builder to this day first. Omit to keep the selected day.
    """
    if day is not None:
        try:
            workspace.select_day(day)
        except UnknownDayError as e:
            return f"{e}. Use one of: {', '.join(DAYS)}."

    if not workspace.plan.is_built:
        return NOT_GENERATED

    selected = workspace.selected_day
    sessions = workspace.sessions_for_selected_day()
    if not sessions:
        return f"No session data for {selected}. Add drills first."

    lines = [f"# Variations for {selected}"]
    for s in sessions:
        remaining = workspace.variations.remaining_sets(s, selected)
        lines.append(
            f"\n## [{s.id}] {s.drill} ({s.category}): target {s.target_sets} sets, "
            f"{s.reps_per_set} reps, rest {s.rest}"
        )
        lines.append(f"Remaining sets: {format_number(remaining)} ({remaining_status(remaining)})")
        for v in workspace.variations.for_session(s.id, selected):
            lines.append(f"- {v.id}: {v.name or '(unnamed)'}, {format_number(v.sets)} sets x {v.reps} reps")
    return "\n".join(lines)


@mcp.tool()
async def sign_in() -> str:
    """Sign in with the configured Firebase account so saves go to the cloud. Falls back to guest mode."""
    if not settings.cloud_enabled or not settings.has_credentials:
        return "Firebase is not configured. Using guest mode."
    try:
        user = await auth.login(settings.email, settings.password)
    except (AuthenticationError, httpx.HTTPError) as e:
        logger.warning("Sign-in failed: %s", e)
        return "Authentication failed. Continuing in guest mode."
    return f"Signed in as {user.display_name or user.email or user.uid}."


@mcp.tool()
async def sign_out() -> str:
    """Sign out. Later saves go to the local file."""
    auth.sign_out()
    return "Signed out. Using guest mode."


@mcp.tool()
async def save_plan() -> str:
    """Save the team name, drills and variations. The generated plan itself is not saved."""
    try:
        result = await store.save(workspace.snapshot(), auth.user)
    except DrillPlanError as e:
        logger.warning("Save failed: %s", e)
        return "Error saving data. Nothing was saved."
    return result.notice


@mcp.tool()
async def load_plan() -> str:
    """Load the last saved team name, drills and variations. Run generate_plan afterwards to rebuild sessions."""
    try:
        snapshot = await store.load(auth.user)
    except (DrillPlanError, httpx.HTTPError) as e:
        logger.warning("Load failed: %s", e)
        return "Error loading saved data. Nothing was changed."
    if snapshot is None:
        return "No saved data found."
    workspace.restore(snapshot)
    return (
        f"Loaded {workspace.team_name}: {len(workspace.drills)} drills. "
        "Run generate_plan to rebuild the daily sessions."
    )


@mcp.tool()
async def training_advice() -> str:
    """Ask for brief sport-science advice on the current drill selection."""
    if not len(workspace.drills):
        return "Add drills first."
    return await advice.training_advice(workspace.team_name, workspace.drill_summary())


@mcp.tool()
async def suggest_drills(category: str) -> str:
    """Suggest advanced drills for a category.

    Args:
        category: A category such as "Agility" (see list_drill_catalogue).
    """
    suggestions = await advice.drill_suggestions(category)
    if not suggestions:
        return "No suggestions available."
    return "\n".join(f"- {s}" for s in suggestions)


def main():
    logging.basicConfig(level=settings.log_level.upper())
    mcp.run()


if __name__ == "__main__":
    main()
