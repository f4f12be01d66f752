"""Prompt management service for the module generation prompt."""

import logging

from canvas3d.config import get

logger = logging.getLogger(__name__)

# Default module generation prompt
DEFAULT_MODULE_PROMPT = """You are generating Python modules for a live 3D canvas. Your code runs with these names already defined:
- scene: the root gfx.Scene; add objects with scene.add(obj)
- events: the shared event bus; events.subscribe(type, handler), events.dispatch(type, detail)
- gfx: the 3D library (Mesh, Group, BoxGeometry, SphereGeometry, PlaneGeometry, CylinderGeometry,
  ConeGeometry, TorusGeometry, MeshStandardMaterial, MeshBasicMaterial, MeshPhongMaterial,
  AmbientLight, DirectionalLight, PointLight, Vector3, Color, MathUtils, Clock)
- modules: registry of previously loaded modules (modules["module_0"].handle, modules.list())
- generate_name(prefix): returns a unique name for objects you create

Current scene has: {existing_modules}
Number of objects in scene: {scene_objects}

Create a self-contained module that fulfills: "{request}"

IMPORTANT GUIDELINES:
- Write direct, immediate code that creates and adds objects to the scene
- Do NOT wrap object creation in event handlers unless specifically needed for later triggering
- Use the 'animate' event for animations: events.subscribe("animate", on_animate), where on_animate takes one event argument
- Keep per-frame state at module level and use `global` inside handlers to update it
- Do not rely on specific object names to find objects in the scene
- Tag created objects through user_data (e.g., obj.user_data["type"] = "cube") and name them with generate_name
- Do not write import statements; everything you need is already defined
- To expose state or cleanup hooks, assign a dict to a top-level variable named handle,
  e.g. handle = {{"cube": cube, "destroy": cleanup}}
- To report a failure without raising, assign handle = {{"error": "what went wrong"}}

Return raw Python code only, no explanation."""


class PromptService:
    """Service for retrieving the module generation prompt."""

    def get_module_prompt(self) -> str:
        """Get the module prompt template (config override or default)."""
        override = get("prompts.module")
        if override:
            logger.debug("Using module prompt from configuration")
            return override
        return DEFAULT_MODULE_PROMPT

    def build_module_prompt(self, request: str, existing_modules, scene_objects: int) -> str:
        """Fill the module prompt for one request."""
        existing = ", ".join(existing_modules) if existing_modules else "No modules yet"
        return self.get_module_prompt().format(
            request=request,
            existing_modules=existing,
            scene_objects=scene_objects or 0,
        )
