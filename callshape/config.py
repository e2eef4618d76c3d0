"""
callshape — Configuration System

All configuration is Pydantic-validated and loaded from:
1. a YAML file (defaults, see config/default.yaml)
2. Environment variables (overrides)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from callshape.rules.types import RuleCheck, RuleConfigMap, RuleType, build_config_map

# ─── Sub-configs ──────────────────────────────────────────────────


class RulesConfig(BaseModel):
    # Rule type → checks enforced at validation time. Unlisted types are
    # type-only: any value of a trained type conforms.
    checks: dict[RuleType, list[RuleCheck]] = Field(default_factory=dict)

    def to_config_map(self) -> RuleConfigMap:
        return build_config_map(self.checks)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "console"  # "console" | "json"


# ─── Root Config ──────────────────────────────────────────────────


class CallshapeConfig(BaseSettings):
    """
    Root configuration. Loads from YAML, overridable by env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="CALLSHAPE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    rules: RulesConfig = Field(default_factory=RulesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _parse_checks(value: str) -> dict[str, list[str]]:
    """Parse "integer:range,string:length" into {"integer": ["range"], ...}."""
    checks: dict[str, list[str]] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        rule_type, _, check = item.partition(":")
        checks.setdefault(rule_type.strip(), [])
        if check.strip():
            checks[rule_type.strip()].append(check.strip())
    return checks


def load_config(config_path: str | Path | None = None) -> CallshapeConfig:
    """
    Load configuration from YAML file, then apply environment variable overrides.
    """
    raw: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    if log_level := os.environ.get("CALLSHAPE_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level
    if log_format := os.environ.get("CALLSHAPE_LOG_FORMAT"):
        raw.setdefault("logging", {})["format"] = log_format
    if rule_checks := os.environ.get("CALLSHAPE_RULE_CHECKS"):
        raw.setdefault("rules", {})["checks"] = _parse_checks(rule_checks)

    return CallshapeConfig(**raw)
