from __future__ import annotations

from pathlib import Path
from typing import Self

import tomllib
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

CONFIG_FILENAME = "pagecheck.toml"


class CheckSettings(BaseModel):
    """Settings shared by every check."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    enabled: bool = Field(default=True, description="Run this check")


class PaginationSizeSettings(CheckSettings):
    """Bounds for the PaginationSize check."""

    min_size: PositiveInt = Field(
        default=1,
        alias="minSize",
        description="Smallest allowed page size (inclusive)",
    )
    max_size: PositiveInt = Field(
        default=50,
        alias="maxSize",
        description="Largest allowed page size (inclusive)",
    )

    @model_validator(mode="after")
    def check_bounds_order(self) -> Self:
        if self.min_size > self.max_size:
            msg = (
                f"minSize ({self.min_size}) must not be greater than "
                f"maxSize ({self.max_size})"
            )
            raise ValueError(msg)
        return self


class ChecksConfig(BaseModel):
    """Per-check settings keyed by check code."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    pagination_size: PaginationSizeSettings = Field(
        default_factory=PaginationSizeSettings,
        alias="PaginationSize",
    )

    def settings_for(self, code: str) -> CheckSettings:
        """Return the settings block whose alias matches a check code."""
        for name, field in type(self).model_fields.items():
            if field.alias == code:
                return getattr(self, name)
        msg = f"No settings registered for check '{code}'"
        raise KeyError(msg)


class PageCheckConfig(BaseModel):
    """Configuration for a pagecheck run."""

    model_config = ConfigDict(extra="forbid")

    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all .liquid files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    checks: ChecksConfig = Field(
        default_factory=ChecksConfig,
        description="Per-check settings",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> PageCheckConfig:
    """Load configuration from pagecheck.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return PageCheckConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return PageCheckConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


def with_bounds(
    config: PageCheckConfig,
    *,
    min_size: int | None = None,
    max_size: int | None = None,
) -> PageCheckConfig:
    """Return a copy of ``config`` with PaginationSize bounds overridden."""
    if min_size is None and max_size is None:
        return config

    current = config.checks.pagination_size
    data = current.model_dump()
    if min_size is not None:
        data["min_size"] = min_size
    if max_size is not None:
        data["max_size"] = max_size

    try:
        settings = PaginationSizeSettings.model_validate(data)
    except Exception as e:
        msg = f"Invalid pagination bounds: {e}"
        raise ConfigError(msg) from e

    checks = config.checks.model_copy(update={"pagination_size": settings})
    return config.model_copy(update={"checks": checks})
