"""Shared test fixtures for the canvas3d test suite."""

import pytest
from unittest.mock import Mock

# Add parent directory to path so we can import canvas3d modules
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from canvas3d import config, gfx
from canvas3d.core import (
    Canvas,
    CapabilitySet,
    EventBus,
    ModuleLoader,
    ModuleRegistry,
)


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against built-in defaults, not a local config.yaml."""
    config.use_defaults()
    yield
    config.use_defaults()


@pytest.fixture
def events():
    """Fresh event bus."""
    return EventBus()


@pytest.fixture
def registry():
    """Empty module registry."""
    return ModuleRegistry()


@pytest.fixture
def scene():
    """Empty scene root."""
    return gfx.Scene()


@pytest.fixture
def capabilities(scene, events, registry):
    """Capability set wired to the fixtures above."""
    return CapabilitySet(scene=scene, events=events, gfx=gfx, modules=registry)


@pytest.fixture
def loader(capabilities):
    """Module loader bound to the shared capabilities."""
    return ModuleLoader(capabilities)


@pytest.fixture
def generator():
    """Code generator stub; set generator.generate.return_value per test."""
    stub = Mock()
    stub.generate.return_value = "scene.add(gfx.Mesh(gfx.BoxGeometry(), gfx.MeshStandardMaterial()))"
    return stub


@pytest.fixture
def canvas(generator):
    """Canvas with a stubbed generator and no frame pacing."""
    return Canvas(generator=generator, fps=0)
