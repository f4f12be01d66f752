"""Canvas: the host that owns the scene, the modules and the render loop."""

import logging
from dataclasses import dataclass
from typing import Optional

from canvas3d import gfx
from canvas3d.config import get
from .capabilities import CapabilitySet
from .engine import Engine
from .errors import GenerationError, is_contained
from .events import EventBus
from .loader import LoadResult, ModuleLoader
from .registry import ModuleRegistry

logger = logging.getLogger(__name__)

HOST_TAG = "host"


@dataclass
class CommandResult:
    """Outcome of executing one user command."""
    success: bool
    request: str
    code: Optional[str] = None
    module_id: Optional[str] = None
    error: Optional[str] = None
    load: Optional[LoadResult] = None

    @property
    def status(self) -> str:
        if self.load is not None:
            return self.load.status.value
        return "success" if self.success else "generation_error"


class Canvas:
    """
    Host for generated modules.

    Owns one scene, event bus and registry, and hands the same capability
    set to every module it loads.
    """

    def __init__(self, generator=None, renderer=None, fps: Optional[float] = None):
        """
        Args:
            generator: CodeGenerator (or anything with generate(text, context) -> str)
            renderer: Object with render(scene, camera); defaults to HeadlessRenderer
            fps: Frame rate cap for the render loop (default from config)
        """
        self.generator = generator

        self.scene = gfx.Scene()
        self.camera = gfx.PerspectiveCamera(75, 16 / 9, 0.1, 1000)
        self.camera.position.z = 5
        self.controls = gfx.OrbitControls(self.camera, enable_damping=True, damping_factor=0.05)
        self._add_default_lights()

        self.events = EventBus()
        self.modules = ModuleRegistry()
        self.capabilities = CapabilitySet(scene=self.scene, events=self.events, gfx=gfx, modules=self.modules)
        self.loader = ModuleLoader(self.capabilities)
        self.engine = Engine(
            self.scene,
            self.events,
            camera=self.camera,
            controls=self.controls,
            renderer=renderer or gfx.HeadlessRenderer(),
            fps=fps if fps is not None else get("engine.fps", 60),
        )

    def _add_default_lights(self):
        ambient = gfx.AmbientLight(0xFFFFFF, 0.5)
        directional = gfx.DirectionalLight(0xFFFFFF, 1)
        directional.position.set(1, 1, 1)
        for light in (ambient, directional):
            light.user_data[HOST_TAG] = True
            self.scene.add(light)

    # ------------------------------------------------------------------
    def generation_context(self):
        from canvas3d.services import GenerationContext
        return GenerationContext(
            existing_modules=self.modules.keys(),
            scene_objects=len(self.scene.children),
        )

    def execute_module(self, code: str, description: str) -> LoadResult:
        """Load code as a module; registers it only if it ran cleanly."""
        logger.info(f"Executing module for: {description!r}")
        result = self.loader.load(code, description)
        if result.ok:
            logger.info(f"Loaded {result.module_id}")
        else:
            logger.error(f"Module error ({result.status.value}): {result.error}")
        return result

    def generate(self, text: str, context=None) -> str:
        """Ask the generator for module code. Raises GenerationError."""
        if self.generator is None:
            raise GenerationError("Failed to generate code: no code generator configured")
        return self.generator.generate(text, context or self.generation_context())

    def execute_user_command(self, text: str) -> CommandResult:
        """Generate code for text and load it, on the current thread."""
        request = (text or "").strip()
        if not request:
            return CommandResult(False, request, error="Empty command")

        try:
            code = self.generate(request)
        except GenerationError as e:
            logger.error(f"Error executing command {request!r}: {e}")
            return CommandResult(False, request, error=str(e))

        return self._to_command_result(request, self.execute_module(code, request))

    def submit_command(self, text: str, timeout: Optional[float] = None) -> CommandResult:
        """
        Like execute_user_command, but safe to call from any thread.

        Generation runs on the calling thread; the load runs on the render
        loop's thread between frames.
        """
        request = (text or "").strip()
        if not request:
            return CommandResult(False, request, error="Empty command")

        try:
            context = self.engine.run_on_loop(self.generation_context, timeout=timeout)
            code = self.generate(request, context)
        except GenerationError as e:
            logger.error(f"Error executing command {request!r}: {e}")
            return CommandResult(False, request, error=str(e))

        result = self.engine.run_on_loop(self.execute_module, code, request, timeout=timeout)
        return self._to_command_result(request, result)

    @staticmethod
    def _to_command_result(request: str, load: LoadResult) -> CommandResult:
        return CommandResult(
            success=load.ok,
            request=request,
            code=load.code,
            module_id=load.module_id,
            error=load.error,
            load=load,
        )

    # ------------------------------------------------------------------
    def unload_module(self, module_id: str) -> bool:
        """Remove one module: destroy hook, event handlers, registry record."""
        record = self.modules.unregister(module_id)
        if record is None:
            return False
        self._destroy(record)
        self.events.unsubscribe_owner(module_id)
        return True

    def reset(self):
        """
        Drop every module.

        Destroy hooks run and module-owned handlers are unsubscribed before
        the registry is cleared; objects modules added to the scene are
        removed while the default lights stay. Ids keep counting up.
        """
        records = self.modules.list()
        for record in records:
            self._destroy(record)
        for owner in self.events.owners():
            self.events.unsubscribe_owner(owner)
        self.modules.clear()
        for obj in list(self.scene.children):
            if not obj.user_data.get(HOST_TAG):
                self.scene.remove(obj)
        logger.info(f"Canvas reset ({len(records)} modules removed)")

    def _destroy(self, record):
        destroy = getattr(record.handle, "destroy", None)
        if destroy is None:
            return
        try:
            destroy()
        except BaseException as e:
            if not is_contained(e):
                raise
            logger.error(f"Error in destroy hook of {record.id}: {e}", exc_info=True)
