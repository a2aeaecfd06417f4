"""Pydantic schema for DELTALINE configuration validation.

Mirrors the YAML structure in config/default.yaml. Used when
``validate=True`` is passed to ``DeltalineConfig.load()``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SystemConfig(BaseModel):
    name: str = "DELTALINE"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str | None = None
    log_json: bool = False
    validate_config: bool = False


class MachineSection(BaseModel):
    validate_invariants: bool = False
    log_seeks: bool = True


class DeltalineRootConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    machine: MachineSection = Field(default_factory=MachineSection)

    model_config = {"extra": "allow"}


class DeltalineConfigSchema(BaseModel):
    """Top-level wrapper matching YAML root key ``deltaline:``."""

    deltaline: DeltalineRootConfig

    model_config = {"extra": "allow"}


def validate_config(cfg_dict: dict) -> DeltalineConfigSchema:
    """Validate a raw config dict (e.g. from OmegaConf) against the schema.

    Raises ``pydantic.ValidationError`` on invalid config.
    """
    return DeltalineConfigSchema.model_validate(cfg_dict)
