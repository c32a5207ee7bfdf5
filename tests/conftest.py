from __future__ import annotations

import os

import pytest

from timeledger.config import AlgorithmSelection, ConsolidationConfig, ResolutionConfig
from timeledger.domain.model import RegistryEntry, RegistryKind


@pytest.fixture(autouse=True)
def _clear_timeledger_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("TIMELEDGER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def resolution_config() -> ResolutionConfig:
    return ResolutionConfig()


@pytest.fixture
def edit_only_config() -> ResolutionConfig:
    return ResolutionConfig(algorithms=AlgorithmSelection(edit=True, jaccard=False, word=False))


@pytest.fixture
def consolidation_config() -> ConsolidationConfig:
    return ConsolidationConfig()


@pytest.fixture
def registry() -> tuple[RegistryEntry, ...]:
    return (
        RegistryEntry("Jack Allan"),
        RegistryEntry("Maria Lopez"),
        RegistryEntry("North", RegistryKind.REGION),
        RegistryEntry("South", RegistryKind.REGION),
    )
