"""Exceptions shared by the module runtime and its services."""


class Canvas3DError(Exception):
    """Base exception for canvas3d errors"""
    pass


class GenerationError(Canvas3DError):
    """Raised when the code generation collaborator produces no usable code"""
    pass


class ModuleLoadError(Canvas3DError):
    """Raised by LoadResult.raise_for_status() for a failed load"""

    def __init__(self, result):
        super().__init__(f"{result.status.value}: {result.error}")
        self.result = result


MODULE_FILENAME = "<canvas3d-module>"


def raised_in_module(error: BaseException) -> bool:
    """True when the innermost frame of error's traceback is module code."""
    tb = error.__traceback__
    if tb is None:
        return False
    while tb.tb_next is not None:
        tb = tb.tb_next
    return tb.tb_frame.f_code.co_filename == MODULE_FILENAME


def is_contained(error: BaseException) -> bool:
    """
    Whether a module boundary should absorb error instead of propagating it.

    Ordinary exceptions always are. BaseException subclasses outside
    Exception (SystemExit, KeyboardInterrupt, BaseException itself) only
    when module code raised them; the host's own interrupts and exits
    still propagate.
    """
    return isinstance(error, Exception) or raised_in_module(error)
