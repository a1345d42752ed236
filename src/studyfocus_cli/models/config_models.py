"""Configuration models for StudyFocus CLI."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """API configuration."""

    endpoint: str = Field(default="https://studyfocus.app")
    timeout: int = Field(default=30)
    retry: int = Field(default=3)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Strip whitespace and trailing slashes from the endpoint."""
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")  # pretty, json
    color: bool = Field(default=True)


class FocusConfig(BaseModel):
    """Concentration-mode timer configuration (all values in seconds)."""

    milestone_interval: float = Field(default=300.0, gt=0)
    autosave_interval: float = Field(default=30.0, gt=0)
    beep: bool = Field(default=True)
    focus_reporting: bool = Field(
        default=True, description="Track terminal focus-in/out as distractions"
    )


class PomodoroConfig(BaseModel):
    """Pomodoro timer defaults (minutes)."""

    work_duration: int = Field(default=25, ge=1, le=180)
    break_duration: int = Field(default=5, ge=1, le=60)


class AppConfig(BaseModel):
    """Main StudyFocus configuration"""

    api: APIConfig = Field(default_factory=APIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    pomodoro: PomodoroConfig = Field(default_factory=PomodoroConfig)
