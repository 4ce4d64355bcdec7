"""Pytest configuration and shared fixtures for mdattention test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import logging
from typing import Generator

import pytest
from utils import SUB, SUP, make_renderer

from mdattention import AttentionExtensions, AttentionOptions, create_attention_extensions
from mdattention.renderers import MarkdownRenderer

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def sub_options() -> AttentionOptions:
    """Provide the subscript syntax: node `sub`, tag `sub`, delimiter `~`."""
    return SUB


@pytest.fixture
def sup_options() -> AttentionOptions:
    """Provide the superscript syntax: node `sup`, tag `sup`, delimiter `^`."""
    return SUP


@pytest.fixture
def sub_extensions(sub_options) -> AttentionExtensions:
    """Provide the three extensions generated for the subscript syntax."""
    return create_attention_extensions(sub_options)


@pytest.fixture
def sub_renderer(sub_options) -> MarkdownRenderer:
    """Provide a markdown renderer that knows the subscript syntax."""
    return make_renderer(sub_options)


@pytest.fixture
def package_logger() -> Generator[logging.Logger, None, None]:
    """Undo configure_logging on the package logger after a test.

    Yields
    ------
    logging.Logger
        The ``mdattention`` logger.

    """
    logger = logging.getLogger("mdattention")
    level = logger.level
    propagate = logger.propagate
    try:
        yield logger
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(level)
        logger.propagate = propagate
