"""The fixed set of shared objects every module is allowed to touch."""

import random
import time
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Dict

from .events import EventBus
from .registry import ModuleRegistry

CAPABILITY_NAMES = ("scene", "events", "gfx", "modules")


def generate_name(prefix: str = "object") -> str:
    """Collision-resistant name: prefix, creation time in ms, random suffix."""
    return f"{prefix}_{int(time.time() * 1000)}_{random.randrange(16 ** 6):06x}"


@dataclass(frozen=True)
class CapabilitySet:
    """
    Context object passed to every module.

    One instance per host; every module gets the same four objects, so scene
    or registry changes made by one module are visible to the next.
    """
    scene: Any
    events: EventBus
    gfx: ModuleType
    modules: ModuleRegistry

    def namespace(self) -> Dict[str, Any]:
        """Names bound in a module's execution scope."""
        return {
            "scene": self.scene,
            "events": self.events,
            "gfx": self.gfx,
            "modules": self.modules,
            "ctx": self,
            "generate_name": generate_name,
        }
