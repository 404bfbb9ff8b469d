from drillplan_mcp.drillplan.constants import DAYS, COEFFS, PERCENTS, DRILL_CATEGORIES, DRILL_PRESETS
from drillplan_mcp.drillplan.models import Drill, PrescribedSession, Variation, AppSnapshot, User
from drillplan_mcp.drillplan.volume import recompute
from drillplan_mcp.drillplan.registry import DrillRegistry
from drillplan_mcp.drillplan.sessions import SessionPlan, generate_sessions, adjust_target
from drillplan_mcp.drillplan.variations import VariationLedger, remaining_status
from drillplan_mcp.drillplan.workspace import Workspace
from drillplan_mcp.drillplan.exceptions import (
    DrillPlanError, AuthenticationError, APIError, UnknownDayError, StorageError,
)

__all__ = [
    "DAYS", "COEFFS", "PERCENTS", "DRILL_CATEGORIES", "DRILL_PRESETS",
    "Drill", "PrescribedSession", "Variation", "AppSnapshot", "User",
    "recompute", "DrillRegistry", "SessionPlan", "generate_sessions", "adjust_target",
    "VariationLedger", "remaining_status", "Workspace",
    "DrillPlanError", "AuthenticationError", "APIError", "UnknownDayError", "StorageError",
]
