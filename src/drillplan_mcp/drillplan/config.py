"""Server settings, resolved from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TEAM_NAME = "TIM: INDONESIA WARRIORS (U-20)"
DEFAULT_ADVICE_MODEL = "gemini-3-flash-preview"


@dataclass(frozen=True)
class Settings:
    """Immutable settings for the drill plan server."""

    firebase_api_key: str = ""
    firebase_project_id: str = "sport-science-system"
    email: str | None = None
    password: str | None = None
    gemini_api_key: str = ""
    advice_model: str = DEFAULT_ADVICE_MODEL
    local_data_path: Path = Path.home() / ".drillplan" / "sport_science_data.json"
    default_team_name: str = DEFAULT_TEAM_NAME
    log_level: str = "INFO"

    @property
    def cloud_enabled(self) -> bool:
        return bool(self.firebase_api_key)

    @property
    def has_credentials(self) -> bool:
        return bool(self.email and self.password)


def get_settings() -> Settings:
    """Build Settings from the environment, falling back to the defaults above."""
    data_path = os.environ.get("DRILLPLAN_DATA_PATH")
    return Settings(
        firebase_api_key=os.environ.get("FIREBASE_API_KEY", ""),
        firebase_project_id=os.environ.get("FIREBASE_PROJECT_ID", "sport-science-system"),
        email=os.environ.get("DRILLPLAN_EMAIL") or None,
        password=os.environ.get("DRILLPLAN_PASSWORD") or None,
        gemini_api_key=os.environ.get("GOOGLE_API_KEY", ""),
        advice_model=os.environ.get("DRILLPLAN_ADVICE_MODEL", DEFAULT_ADVICE_MODEL),
        local_data_path=Path(data_path).expanduser() if data_path else Settings.local_data_path,
        default_team_name=os.environ.get("DRILLPLAN_TEAM_NAME", DEFAULT_TEAM_NAME),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
