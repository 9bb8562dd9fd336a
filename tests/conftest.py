"""Shared test fixtures for textpipe."""

import itertools

import pytest

from textpipe_core.config.models import TextpipeConfig
from textpipe_core.operations.registry import OperationRegistry, builtin_registry
from textpipe_core.pipeline.pipeline import Pipeline
from textpipe_core.preview.controller import PreviewController
from textpipe_core.preview.scheduler import ManualScheduler


@pytest.fixture
def registry() -> OperationRegistry:
    return builtin_registry()


@pytest.fixture
def id_factory():
    """Deterministic ids: s1, s2, s3, ..."""
    counter = itertools.count(1)
    return lambda: f"s{next(counter)}"


@pytest.fixture
def empty_pipeline(registry, id_factory) -> Pipeline:
    return Pipeline(registry, id_factory=id_factory)


@pytest.fixture
def trim_upper_pipeline(empty_pipeline) -> Pipeline:
    """[Trim(lines=false), ChangeCase(mode=upper)] with ids s1, s2."""
    return (
        empty_pipeline
        .add_step("trim", {"lines": False})
        .add_step("change-case", {"mode": "upper"})
    )


@pytest.fixture
def sample_config() -> TextpipeConfig:
    return TextpipeConfig()


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(manual_scheduler) -> PreviewController:
    """Controller with a 150ms window on a virtual clock."""
    return PreviewController(0.15, scheduler=manual_scheduler)
