"""Renderers. Only a headless one ships; GPU output is a drop-in replacement."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, scene, camera) -> None: ...  # noqa: D401


class HeadlessRenderer:
    """Walks the visible scene graph each frame and records what it would draw."""

    def __init__(self):
        self.frames = 0
        self.last_draw_count = 0

    def render(self, scene, camera) -> None:
        count = 0
        stack = list(scene.children)
        while stack:
            obj = stack.pop()
            if not obj.visible:
                continue
            count += 1
            stack.extend(obj.children)
        self.frames += 1
        self.last_draw_count = count
        logger.debug(f"Frame {self.frames}: {count} visible objects")
