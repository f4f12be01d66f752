"""Pydantic models for API requests and responses."""

from typing import Optional
from pydantic import BaseModel, Field


# Request models
class CommandRequest(BaseModel):
    """Natural-language request to turn into a module."""
    text: str = Field(..., description="What the new module should do")


class ModuleCodeRequest(BaseModel):
    """Load module code directly, skipping generation."""
    code: str = Field(..., description="Python module source")
    description: str = Field("", description="Label stored with the module")


# Response models
class CommandResponse(BaseModel):
    """Result of executing a command or loading code."""
    success: bool
    status: str
    module_id: Optional[str] = None
    error: Optional[str] = None
    code: Optional[str] = None


class ModuleResponse(BaseModel):
    """Module record information."""
    id: str
    description: str
    code: str
    timestamp: str
    has_handle: bool


class SceneResponse(BaseModel):
    """Scene and render loop information."""
    scene_objects: int
    modules: int
    event_handlers: int
    frame: int
    running: bool
