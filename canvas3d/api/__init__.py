"""HTTP API for the canvas."""

from .main import app, get_canvas, set_canvas

__all__ = ["app", "get_canvas", "set_canvas"]
