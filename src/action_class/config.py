"""Process settings for an action invocation.

Configuration is loaded from:
- environment variables set by the runner
- and a local `.env` file (if present), which is handy when running an action
  outside of a workflow

Notes:
    Pydantic-settings supports overriding the env file in tests via:
    `ActionSettings(_env_file=path_to_env)`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BYPASS_SENTINEL = "true"


class ActionSettings(BaseSettings):
    """Settings for a single action invocation.

    Environment variables:
    - ACTION_YAML_GENERATOR (set to "true" by the action.yml generator)
    - LOG_LEVEL             (optional)
    - LOG_FORMAT            (optional)
    - GITHUB_OUTPUT         (set by the runner)
    - GITHUB_STATE          (set by the runner)
    - RUNNER_DEBUG          (set by the runner when step debugging is enabled)
    """

    action_yaml_generator: str = Field(
        default="",
        validation_alias="ACTION_YAML_GENERATOR",
        description="When exactly 'true', actions are introspected but never run",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_format: Literal["actions", "json"] = Field(
        default="actions",
        validation_alias="LOG_FORMAT",
        description="'actions' forwards log records as workflow commands, 'json' prints JSON lines",
    )

    github_output: Path | None = Field(
        default=None,
        validation_alias="GITHUB_OUTPUT",
        description="File command target for step outputs",
    )
    github_state: Path | None = Field(
        default=None,
        validation_alias="GITHUB_STATE",
        description="File command target for phase state",
    )
    runner_debug: bool = Field(
        default=False,
        validation_alias="RUNNER_DEBUG",
        description="Step debug logging is enabled for the job",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("github_output", "github_state", mode="before")
    @classmethod
    def _empty_path_is_unset(cls, value: object) -> object:
        return None if value == "" else value

    @field_validator("runner_debug", mode="before")
    @classmethod
    def _empty_flag_is_false(cls, value: object) -> object:
        return False if value == "" else value

    @property
    def bypass(self) -> bool:
        """True while the action.yml generator imports the action module."""

        return self.action_yaml_generator == BYPASS_SENTINEL

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.runner_debug else self.log_level.upper()
