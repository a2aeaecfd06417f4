"""YAML configuration for DELTALINE using OmegaConf."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

logger = logging.getLogger(__name__)


@dataclass
class MachineConfig:
    """Per-machine behaviour switches."""

    validate_invariants: bool = False
    log_seeks: bool = True

    @classmethod
    def from_omegaconf(cls, cfg: Any) -> MachineConfig:
        """Build from an OmegaConf node, a plain dict, or *None*.

        Accepts either the ``machine`` section itself or a full
        ``deltaline`` tree containing one.
        """
        if cfg is None:
            return cls()

        if isinstance(cfg, DictConfig):
            cfg = OmegaConf.to_container(cfg, resolve=True)

        if not isinstance(cfg, dict):
            cfg = dict(cfg)

        if "deltaline" in cfg:
            cfg = cfg["deltaline"] or {}
        if "machine" in cfg:
            cfg = cfg["machine"] or {}

        return cls(
            validate_invariants=bool(cfg.get("validate_invariants", False)),
            log_seeks=bool(cfg.get("log_seeks", True)),
        )


class DeltalineConfig:
    """Loads a YAML configuration file and applies overrides.

    Example::

        config = DeltalineConfig("config/default.yaml")
        cfg = config.load()
        config.override("deltaline.machine.validate_invariants", True)
    """

    def __init__(self, config_path: str | Path = "config/default.yaml"):
        self._config_path = Path(config_path)
        self._config: DictConfig | None = None

    def load(self, validate: bool = False) -> DictConfig:
        """Load the YAML file, optionally validating it against the schema.

        Args:
            validate: If True, validate the loaded config against the
                Pydantic schema and raise ``pydantic.ValidationError``
                on invalid values.
        """
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config not found: {self._config_path}")

        base = OmegaConf.load(self._config_path)
        assert isinstance(base, DictConfig)

        if validate or OmegaConf.select(
            base, "deltaline.system.validate_config", default=False
        ):
            from deltaline.core.config_schema import validate_config

            validate_config(OmegaConf.to_container(base, resolve=True))

        logger.debug("Loaded config from %s", self._config_path)
        self._config = base
        return self._config

    def override(self, dotpath: str, value: Any) -> None:
        """Override a config value using dot notation.

        Example: config.override("deltaline.system.log_level", "DEBUG")
        """
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        OmegaConf.update(self._config, dotpath, value)

    @property
    def cfg(self) -> DictConfig:
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        return self._config

    @property
    def machine(self) -> MachineConfig:
        """The ``deltaline.machine`` section as a :class:`MachineConfig`."""
        return MachineConfig.from_omegaconf(
            OmegaConf.select(self.cfg, "deltaline.machine", default=None)
        )


def load_config(
    config_path: str | Path = "config/default.yaml", validate: bool = False
) -> DictConfig:
    """Shortcut for ``DeltalineConfig(config_path).load(validate)``."""
    return DeltalineConfig(config_path).load(validate=validate)
