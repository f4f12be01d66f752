"""Core module runtime: capabilities, loader, registry, events and render loop."""

from .errors import Canvas3DError, GenerationError, ModuleLoadError
from .events import ANIMATE, Event, EventBus, Subscription
from .registry import ModuleRecord, ModuleRegistry, RegistrySnapshot
from .capabilities import CapabilitySet, generate_name
from .handles import ModuleHandle, NoHandle
from .sanitizer import sanitize_code
from .loader import LoadResult, LoadStatus, ModuleLoader
from .engine import Engine
from .canvas import Canvas, CommandResult

__all__ = [
    "Canvas3DError",
    "GenerationError",
    "ModuleLoadError",
    "ANIMATE",
    "Event",
    "EventBus",
    "Subscription",
    "ModuleRecord",
    "ModuleRegistry",
    "RegistrySnapshot",
    "CapabilitySet",
    "generate_name",
    "ModuleHandle",
    "NoHandle",
    "sanitize_code",
    "LoadResult",
    "LoadStatus",
    "ModuleLoader",
    "Engine",
    "Canvas",
    "CommandResult",
]
