from typing import Any, Optional


import pytest


from substitute import Substitute, make_configs, make_substitute
from ._calculator import ICalculator


@pytest.fixture
def make_sub():
    """Factory fixture to create a Substitute with optional config overrides."""
    def _make_sub(surface: Any = ICalculator, mock_configs: Optional[dict[str, Any]] = None) -> Substitute:
        configs = make_configs(mock_configs) if mock_configs is not None else None
        return make_substitute(surface, mock_configs=configs)
    return _make_sub


@pytest.fixture
def calculator(make_sub) -> Substitute:
    """Substitute controller for ICalculator with default configs."""
    return make_sub()
