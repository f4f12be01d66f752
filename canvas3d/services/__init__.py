"""Services for the canvas (code generation collaborators)."""

from .prompt import PromptService
from .code_generator import CodeGenerator, GenerationContext

__all__ = ["PromptService", "CodeGenerator", "GenerationContext"]
