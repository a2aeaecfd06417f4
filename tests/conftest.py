"""Shared pytest fixtures for DELTALINE tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from omegaconf import OmegaConf

from deltaline.core.config import MachineConfig
from deltaline.core.machine import TimeMachine
from deltaline.states.arithmetic import ArithmeticState


class Journal:
    """Test state that records the order forward deltas were applied in.

    Applying ``"boom"`` fails; undoing ``"stuck"`` fails.
    """

    def __init__(self) -> None:
        self.items: list = []

    def apply_forward(self, delta):
        if delta == "boom":
            raise RuntimeError("boom")
        self.items.append(delta)
        return len(self.items) - 1

    def apply_reverse(self, delta) -> None:
        assert delta == len(self.items) - 1
        if self.items[delta] == "stuck":
            raise RuntimeError("stuck")
        self.items.pop()


@pytest.fixture(autouse=True)
def _reset_deltaline_logger():
    """Undo any ``setup_logging`` call so caplog sees library records."""
    yield
    root = logging.getLogger("deltaline")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def config_path(project_root: Path) -> Path:
    return project_root / "config" / "default.yaml"


@pytest.fixture
def default_config(config_path: Path):
    return OmegaConf.load(config_path)


@pytest.fixture
def machine() -> TimeMachine:
    """Arithmetic machine starting at 5, checking invariants on every call."""
    return TimeMachine(ArithmeticState(5), MachineConfig(validate_invariants=True))


@pytest.fixture
def journal_machine() -> TimeMachine:
    return TimeMachine(Journal(), MachineConfig(validate_invariants=True))
