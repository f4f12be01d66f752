"""Main FastAPI application for driving a canvas over HTTP."""

import logging
import secrets
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from canvas3d.config import get
from canvas3d.core import Canvas
from .schemas import (
    CommandRequest, CommandResponse,
    ModuleCodeRequest, ModuleResponse,
    SceneResponse,
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Canvas3D API",
    description="Generate, load and inspect live 3D canvas modules",
    version="1.0.0",
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc",  # ReDoc
)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

# Canvas instance (will be set by run_api.py)
_canvas_instance: Optional[Canvas] = None


def set_canvas(canvas: Optional[Canvas]):
    """Set the canvas served by the API."""
    global _canvas_instance
    _canvas_instance = canvas


def get_canvas() -> Canvas:
    """Get the canvas instance."""
    if _canvas_instance is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Canvas is not running."
        )
    return _canvas_instance


def verify_api_key(api_key: Optional[str] = Security(api_key_header)):
    """Require X-API-Key when api.api_key is configured."""
    expected = get("api.api_key")
    if not expected:
        return
    if not api_key or not secrets.compare_digest(api_key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )


def _timeout() -> float:
    return float(get("api.timeout", 30))


@app.get("/", tags=["general"])
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Canvas3D API",
        "version": "1.0.0",
        "status": "online",
        "docs": "/docs",
        "endpoints": {
            "commands": "POST /commands - Generate and load a module from text",
            "load": "POST /modules - Load module code directly",
            "modules": "GET /modules - List modules in creation order",
            "module": "GET /modules/{id} - Get one module",
            "unload": "DELETE /modules/{id} - Unload one module",
            "reset": "POST /reset - Remove every module",
            "scene": "GET /scene - Scene and loop status",
        }
    }


@app.get("/health", tags=["general"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/commands", response_model=CommandResponse, tags=["modules"],
          dependencies=[Depends(verify_api_key)])
def execute_command(request: CommandRequest, canvas: Canvas = Depends(get_canvas)):
    """Generate module code from natural language and load it."""
    result = canvas.submit_command(request.text, timeout=_timeout())
    if not result.success:
        logger.warning(f"Command failed ({result.status}): {result.error}")
    return CommandResponse(
        success=result.success,
        status=result.status,
        module_id=result.module_id,
        error=result.error,
        code=result.code,
    )


@app.post("/modules", response_model=CommandResponse, tags=["modules"],
          dependencies=[Depends(verify_api_key)])
def load_module(request: ModuleCodeRequest, canvas: Canvas = Depends(get_canvas)):
    """Load module code as-is."""
    result = canvas.engine.run_on_loop(canvas.execute_module, request.code, request.description,
                                       timeout=_timeout())
    return CommandResponse(
        success=result.ok,
        status=result.status.value,
        module_id=result.module_id,
        error=result.error,
        code=result.code,
    )


@app.get("/modules", response_model=List[ModuleResponse], tags=["modules"])
def list_modules(canvas: Canvas = Depends(get_canvas)):
    """List modules in creation order."""
    return [ModuleResponse(**info) for info in canvas.engine.run_on_loop(canvas.modules.info)]


@app.get("/modules/{module_id}", response_model=ModuleResponse, tags=["modules"])
def get_module(module_id: str, canvas: Canvas = Depends(get_canvas)):
    """Get one module record."""
    record = canvas.engine.run_on_loop(canvas.modules.get, module_id, timeout=_timeout())
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Module {module_id} not found")
    return ModuleResponse(**record.to_dict())


@app.delete("/modules/{module_id}", tags=["modules"], dependencies=[Depends(verify_api_key)])
def unload_module(module_id: str, canvas: Canvas = Depends(get_canvas)):
    """Unload a module and its event handlers."""
    if not canvas.engine.run_on_loop(canvas.unload_module, module_id, timeout=_timeout()):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Module {module_id} not found")
    return {"success": True, "module_id": module_id}


@app.post("/reset", tags=["modules"], dependencies=[Depends(verify_api_key)])
def reset_canvas(canvas: Canvas = Depends(get_canvas)):
    """Remove every module."""
    canvas.engine.run_on_loop(canvas.reset, timeout=_timeout())
    return {"success": True}


@app.get("/scene", response_model=SceneResponse, tags=["general"])
def scene_status(canvas: Canvas = Depends(get_canvas)):
    """Scene and render loop status."""
    return SceneResponse(
        scene_objects=len(canvas.scene.children),
        modules=len(canvas.modules),
        event_handlers=canvas.events.listener_count(),
        frame=canvas.engine.frame,
        running=canvas.engine.is_running,
    )
