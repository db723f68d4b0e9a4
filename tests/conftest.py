"""Shared pytest fixtures for the calculator tests."""

from decimal import localcontext

import pytest

from infixcalc import MathEngine
from infixcalc import config_manager


@pytest.fixture
def settings():
    """Default settings, independent of the config.json on disk."""
    return dict(config_manager.DEFAULT_SETTINGS)


@pytest.fixture
def calc(settings):
    """Evaluate an expression with the default settings plus overrides."""
    def _calc(problem, **overrides):
        return MathEngine.evaluate(problem, {**settings, **overrides})
    return _calc


@pytest.fixture
def calculation(settings):
    """A Calculation to hand to a Tokenizer directly."""
    return MathEngine.Calculation("", settings)


@pytest.fixture
def decimal50():
    """Run the test body in the context evaluations use by default."""
    with localcontext(MathEngine.decimal_context(50)) as ctx:
        yield ctx
