"""Render/update loop.

Each frame:
- runs host work queued with call_soon() (module loads etc.), in order
- advances camera controls
- dispatches the "animate" event once
- renders the scene

Everything that touches modules happens on the loop's thread, one piece at
a time. Modules that want per-frame behaviour subscribe to "animate"; the
loop never waits on them, so a slow handler simply makes a slow frame.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional

import pygame

from .errors import is_contained
from .events import ANIMATE, EventBus

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self, scene, events: EventBus, camera=None, controls=None, renderer=None, fps: float = 60):
        self.scene = scene
        self.events = events
        self.camera = camera
        self.controls = controls
        self.renderer = renderer
        self.fps = fps
        self.frame = 0
        self.clock = pygame.time.Clock()

        self._tasks: "queue.Queue[tuple]" = queue.Queue()
        self._running = threading.Event()
        # Guards the running/loop-thread pair against run_on_loop callers
        self._state_lock = threading.Lock()
        self._stop_requested = False
        self._loop_thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    # ------------------------------------------------------------------
    def call_soon(self, fn: Callable, *args: Any) -> Future:
        """Queue fn(*args) to run on the loop thread before the next frame."""
        future: Future = Future()
        self._tasks.put((fn, args, future))
        return future

    def run_pending(self) -> int:
        """Run every queued task, in submission order. Returns how many ran."""
        ran = 0
        while True:
            try:
                fn, args, future = self._tasks.get_nowait()
            except queue.Empty:
                return ran
            ran += 1
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(fn(*args))
            except BaseException as e:
                future.set_exception(e)
                if not is_contained(e):
                    raise
                logger.error(f"Error running queued task {fn!r}: {e}", exc_info=True)

    def run_on_loop(self, fn: Callable, *args: Any, timeout: Optional[float] = None) -> Any:
        """
        Run fn on the loop thread and wait for its result.

        Runs inline when called from the loop thread itself or when the loop
        is not running. Work queued here while the loop is shutting down is
        still drained by run() before it returns.
        """
        with self._state_lock:
            inline = not self.is_running or threading.current_thread() is self._loop_thread
            if not inline:
                future = self.call_soon(fn, *args)
        if inline:
            return fn(*args)
        return future.result(timeout=timeout)

    # ------------------------------------------------------------------
    def step(self):
        """Advance one frame."""
        self.run_pending()

        if self.controls is not None:
            self.controls.update()

        self.events.dispatch(ANIMATE)

        if self.renderer is not None:
            self.renderer.render(self.scene, self.camera)

        self.frame += 1

    def run(self, max_frames: Optional[int] = None):
        """Step frames until stop() is called or max_frames have run."""
        self._stop_requested = False
        with self._state_lock:
            self._loop_thread = threading.current_thread()
            self._running.set()
        logger.info(f"Render loop started (fps={self.fps or 'unlimited'})")
        frames = 0
        try:
            while not self._stop_requested:
                self.step()
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
                # tick() with 0 returns elapsed ms without sleeping
                self.clock.tick(self.fps or 0)
        finally:
            with self._state_lock:
                self._running.clear()
                self._loop_thread = None
            # Don't strand callers waiting on work that will never run
            self.run_pending()
            logger.info(f"Render loop stopped after {frames} frames")

    def stop(self):
        self._stop_requested = True

    def start_in_thread(self) -> threading.Thread:
        """Run the loop on a daemon thread (used by the API server)."""
        thread = threading.Thread(target=self.run, name="canvas3d-render-loop", daemon=True)
        thread.start()
        self._running.wait(timeout=5)
        return thread
