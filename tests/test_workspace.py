"""Tests for the workspace and its snapshot boundary."""

from __future__ import annotations

from drillplan_mcp.drillplan.models import AppSnapshot
from drillplan_mcp.drillplan.workspace import Workspace


def _workspace() -> Workspace:
    workspace = Workspace(team_name="U-20")
    plank = workspace.drills.add()
    workspace.drills.update(plank.id, "name", "Plank")
    workspace.drills.update(plank.id, "base", 10)
    sprint = workspace.drills.add()
    workspace.drills.update(sprint.id, "name", "Suicides")
    workspace.drills.update(sprint.id, "base", 25)
    return workspace


def test_drill_edits_do_not_regenerate_plan():
    workspace = _workspace()
    workspace.generate_plan()
    drill = workspace.drills.drills[0]
    workspace.drills.update(drill.id, "base", 50)
    assert workspace.plan.get(1).reps_per_set == 3


def test_add_variation_seeds_reps_from_current_session():
    workspace = _workspace()
    workspace.generate_plan()
    workspace.plan.adjust_target(1, "2")
    variation = workspace.add_variation(1)
    assert variation.reps == "5"
    assert variation.drill_id == 1

    # Later target edits do not touch existing variations
    workspace.plan.adjust_target(1, "1")
    assert variation.reps == "5"


def test_add_variation_for_unknown_session():
    workspace = _workspace()
    workspace.generate_plan()
    assert workspace.add_variation(99) is None


def test_remaining_sets_end_to_end():
    workspace = _workspace()
    workspace.generate_plan()
    variation = workspace.add_variation(1)
    workspace.variations.update_variation(1, variation.id, "sets", 4)
    assert workspace.remaining_sets(1) == 0
    extra = workspace.add_variation(1)
    workspace.variations.update_variation(1, extra.id, "sets", 1)
    assert workspace.remaining_sets(1) == -1


def test_sessions_for_selected_day():
    workspace = _workspace()
    workspace.generate_plan()
    workspace.select_day("Thursday")
    sessions = workspace.sessions_for_selected_day()
    assert [s.drill for s in sessions] == ["Plank", "Suicides"]
    assert {s.day for s in sessions} == {"Thursday"}


def test_drill_summary():
    assert _workspace().drill_summary() == "Plank, Suicides"
    assert Workspace().drill_summary() == ""


def test_snapshot_excludes_sessions_and_is_detached():
    workspace = _workspace()
    workspace.generate_plan()
    workspace.add_variation(1)
    snapshot = workspace.snapshot()

    assert "sessions" not in snapshot.model_dump(by_alias=True)
    assert snapshot.team_name == "U-20"
    assert [d.name for d in snapshot.drills] == ["Plank", "Suicides"]
    assert list(snapshot.variations) == ["Monday-1"]

    workspace.drills.update(workspace.drills.drills[0].id, "name", "Changed")
    assert snapshot.drills[0].name == "Plank"


def test_restore_resets_plan_to_unbuilt():
    source = _workspace()
    source.generate_plan()
    source.add_variation(1)
    snapshot = source.snapshot()

    target = Workspace()
    target.generate_plan()
    assert target.plan.is_built

    target.restore(snapshot)
    assert target.team_name == "U-20"
    assert [d.name for d in target.drills] == ["Plank", "Suicides"]
    assert target.plan.is_built is False
    assert target.variations.for_session(1, "Monday")[0].reps == "3"


def test_restore_then_regenerate_reconnects_variations():
    source = _workspace()
    source.generate_plan()
    variation = source.add_variation(1)
    source.variations.update_variation(1, variation.id, "sets", 3)

    target = Workspace()
    target.restore(source.snapshot())
    target.generate_plan()
    assert target.remaining_sets(1) == 1


def test_restore_keeps_selected_day():
    workspace = _workspace()
    workspace.select_day("Friday")
    workspace.restore(AppSnapshot(team_name="Other"))
    assert workspace.selected_day == "Friday"
    assert len(workspace.drills) == 0


def test_add_variation_only_for_sessions_on_selected_day():
    workspace = _workspace()
    workspace.generate_plan()
    workspace.select_day("Tuesday")

    # Session 1 is Monday's first session
    assert workspace.add_variation(1) is None
    assert "Tuesday-1" not in workspace.snapshot().variations

    tuesday = workspace.sessions_for_selected_day()[0]
    variation = workspace.add_variation(tuesday.id)
    assert variation.drill_id == tuesday.id
    assert list(workspace.snapshot().variations) == [f"Tuesday-{tuesday.id}"]


def test_remaining_sets_follows_selected_day():
    workspace = _workspace()
    workspace.generate_plan()
    variation = workspace.add_variation(1)
    workspace.variations.update_variation(1, variation.id, "sets", 3)
    assert workspace.remaining_sets(1) == 1

    workspace.select_day("Tuesday")
    assert workspace.remaining_sets(1) == 4
    assert workspace.remaining_sets(1, "Monday") == 1
