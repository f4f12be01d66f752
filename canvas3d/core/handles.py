"""What a module leaves behind: nothing, or a handle with optional hooks."""

from dataclasses import dataclass
from typing import Any, Callable, Optional


class _NoHandle:
    """The module exposed nothing."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NoHandle"


NoHandle = _NoHandle()


@dataclass(frozen=True)
class ModuleHandle:
    """
    Handle exposed by a module.

    update/destroy are picked up when present; the raw value stays in
    payload and is never inspected by the host beyond that.
    """
    payload: Any
    update: Optional[Callable] = None
    destroy: Optional[Callable] = None


def _hook(value: Any, name: str) -> Optional[Callable]:
    if isinstance(value, dict):
        hook = value.get(name)
    else:
        hook = getattr(value, name, None)
    return hook if callable(hook) else None


def wrap_handle(value: Any):
    """Turn whatever a module bound to `handle` into NoHandle or a ModuleHandle."""
    if value is None or value is NoHandle:
        return NoHandle
    if isinstance(value, ModuleHandle):
        return value
    return ModuleHandle(payload=value, update=_hook(value, "update"), destroy=_hook(value, "destroy"))


def failure_message(value: Any) -> Optional[str]:
    """Error text if value is failure-shaped (error dict or exception), else None."""
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if isinstance(value, dict) and "error" in value:
        return str(value["error"])
    return None
