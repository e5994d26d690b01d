from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from casework.compare import Tolerance
from casework.exceptions import ConfigError


class ReportFormat(str, Enum):
    TEXT = "text"
    JUNIT = "junit"
    HTML = "html"


class ComparisonConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    rel_tol: float = Field(default=1e-9, ge=0.0)
    abs_tol: float = Field(default=0.0, ge=0.0)

    def to_tolerance(self) -> Tolerance:
        return Tolerance(rel_tol=self.rel_tol, abs_tol=self.abs_tol)


class ReportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    format: ReportFormat = ReportFormat.TEXT
    output: str | None = None
    only_failures: bool = False
    indent: int = Field(default=2, ge=1)


class CaseworkConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    suites: list[str] = []
    comparison: ComparisonConfig = ComparisonConfig()
    report: ReportConfig = ReportConfig()

    @field_validator("suites")
    @classmethod
    def suite_paths_must_not_be_blank(cls, v: list[str]) -> list[str]:
        for path in v:
            if not path.strip():
                raise ValueError("suite paths must not be blank")
        return v


def load_config(path: Path) -> CaseworkConfig:
    """Load and validate a casework config from a YAML file."""
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")

    config_dir = path.parent.resolve()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    try:
        config = CaseworkConfig(**(raw or {}))
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}:\n{e}") from e
    except TypeError as e:
        raise ConfigError(f"invalid config {path}: expected a mapping") from e

    # Resolve relative paths relative to config file location
    config.suites = [_resolve(config_dir, p) for p in config.suites]
    if config.report.output is not None:
        config.report.output = _resolve(config_dir, config.report.output)

    return config


def _resolve(base: Path, value: str) -> str:
    p = Path(value)
    if p.is_absolute():
        return str(p)
    return str((base / p).resolve())
