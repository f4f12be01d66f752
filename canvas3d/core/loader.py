"""Module loader: runs generated code against the capability set.

Each load compiles the code and executes it in a brand-new globals dict that
holds only the capability names and a reduced builtins table. Nothing is
shared between loads except the capability objects themselves.

Outcomes:
- COMPILE_ERROR: the code never ran
- RUNTIME_ERROR: the code raised
- DECLARED_ERROR: the code bound an error-shaped value to `handle`
- SUCCESS: anything else; only this outcome is registered
"""

import builtins
import itertools
import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .capabilities import CapabilitySet
from .errors import MODULE_FILENAME, ModuleLoadError, is_contained
from .handles import NoHandle, failure_message, wrap_handle

logger = logging.getLogger(__name__)

HANDLE_NAME = "handle"

SAFE_BUILTIN_NAMES = (
    # types and constructors
    "bool", "int", "float", "complex", "str", "bytes", "list", "tuple", "dict",
    "set", "frozenset", "object", "range", "slice", "type", "property",
    "staticmethod", "classmethod", "super",
    # functions
    "abs", "all", "any", "callable", "chr", "divmod", "enumerate", "filter",
    "format", "getattr", "hasattr", "hash", "id", "isinstance", "issubclass",
    "iter", "len", "map", "max", "min", "next", "ord", "pow", "print", "repr",
    "reversed", "round", "setattr", "sorted", "sum", "zip",
    # exceptions
    "Exception", "ArithmeticError", "AssertionError", "AttributeError",
    "IndexError", "KeyError", "LookupError", "NameError",
    "NotImplementedError", "RuntimeError", "StopIteration", "TypeError",
    "ValueError", "ZeroDivisionError",
    # constants
    "None", "True", "False", "NotImplemented",
    # needed by class statements
    "__build_class__",
)


def _blocked_import(name, *args, **kwargs):
    raise ImportError(
        f"import of '{name}' is not available inside modules; "
        "use the injected scene, events, gfx and modules instead"
    )


def build_safe_builtins() -> Dict[str, Any]:
    """Reduced builtins table for module scopes."""
    safe = {name: getattr(builtins, name) for name in SAFE_BUILTIN_NAMES if hasattr(builtins, name)}
    safe["__import__"] = _blocked_import
    return safe


class LoadStatus(Enum):
    SUCCESS = "success"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"
    DECLARED_ERROR = "declared_error"


@dataclass
class LoadResult:
    """Outcome of one load attempt."""
    status: LoadStatus
    code: str
    description: str = ""
    handle: Any = NoHandle
    error: Optional[str] = None
    module_id: Optional[str] = None
    owner: Any = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.SUCCESS

    def raise_for_status(self):
        if not self.ok:
            raise ModuleLoadError(self)


class LoadToken:
    """Owner tag for event subscriptions made while a load is running."""

    def __init__(self, number: int):
        self.number = number

    def __repr__(self):
        return f"<load {self.number}>"


class ModuleLoader:
    """Compiles, runs, classifies and (on success) registers module code."""

    def __init__(self, capabilities: CapabilitySet):
        self.capabilities = capabilities
        self._builtins = build_safe_builtins()
        self._loads = itertools.count()

    def _build_scope(self) -> Dict[str, Any]:
        scope = {"__builtins__": dict(self._builtins), "__name__": "canvas3d_module"}
        scope.update(self.capabilities.namespace())
        return scope

    def execute(self, code: str, description: str = "") -> LoadResult:
        """
        Run code in a fresh scope and classify the outcome.

        Never registers the code itself. A failed run leaves the registry as
        it found it (even if the module wrote to `modules` before failing)
        and its event subscriptions are removed; those of a successful run
        stay tagged with result.owner.
        """
        events = self.capabilities.events
        modules = self.capabilities.modules
        token = LoadToken(next(self._loads))
        logger.debug(f"Executing code ({token}):\n{code}")

        try:
            compiled = compile(code, MODULE_FILENAME, "exec")
        except (SyntaxError, ValueError) as e:
            message = _describe_compile_error(e)
            logger.error(f"Module failed to compile: {message}\nCode:\n{code}")
            return LoadResult(LoadStatus.COMPILE_ERROR, code, description, error=message)

        scope = self._build_scope()
        snapshot = modules.snapshot()

        def rollback():
            events.unsubscribe_owner(token)
            modules.restore(snapshot)

        with events.owned_by(token):
            try:
                exec(compiled, scope)  # noqa: S102 - capability-scoped module execution
                value = scope.get(HANDLE_NAME)
                declared = failure_message(value)
                handle = wrap_handle(value) if declared is None else NoHandle
            except BaseException as e:
                rollback()
                if not is_contained(e):
                    raise
                message = _describe_runtime_error(e)
                logger.error(f"Module execution error: {message}\nCode:\n{code}", exc_info=True)
                return LoadResult(LoadStatus.RUNTIME_ERROR, code, description, error=message)

        if declared is not None:
            logger.error(f"Module reported an error: {declared}\nCode:\n{code}")
            rollback()
            return LoadResult(LoadStatus.DECLARED_ERROR, code, description, error=declared)

        return LoadResult(LoadStatus.SUCCESS, code, description, handle=handle, owner=token)

    def load(self, code: str, description: str) -> LoadResult:
        """Execute code and register it iff execution succeeded."""
        result = self.execute(code, description)
        if not result.ok:
            return result

        module_id = self.capabilities.modules.register(description, code, result.handle)
        self.capabilities.events.reassign_owner(result.owner, module_id)
        result.module_id = module_id
        result.owner = module_id
        return result


def _describe_compile_error(error: Exception) -> str:
    if isinstance(error, SyntaxError):
        line = f" (line {error.lineno})" if error.lineno else ""
        return f"SyntaxError: {error.msg}{line}"
    return f"{type(error).__name__}: {error}"


def _describe_runtime_error(error: BaseException) -> str:
    line = None
    for frame in traceback.extract_tb(error.__traceback__):
        if frame.filename == MODULE_FILENAME:
            line = frame.lineno
    suffix = f" (line {line})" if line else ""
    return f"{type(error).__name__}: {error}{suffix}"
