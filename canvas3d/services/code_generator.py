"""Code generation: natural-language request -> sanitized module source."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from canvas3d.config import get
from canvas3d.core.errors import GenerationError
from canvas3d.core.sanitizer import sanitize_code
from .prompt import PromptService

logger = logging.getLogger(__name__)


@dataclass
class GenerationContext:
    """What the model is told about the current canvas."""
    existing_modules: List[str] = field(default_factory=list)
    scene_objects: int = 0


class CodeGenerator:
    """Builds the prompt, calls the LLM and cleans up its reply."""

    def __init__(self, llm=None, prompts: Optional[PromptService] = None):
        """
        Args:
            llm: Object with generate(prompt) -> str (LLMService); None if unconfigured
            prompts: Prompt template source
        """
        self.llm = llm
        self.prompts = prompts or PromptService()

    @classmethod
    def from_config(cls) -> "CodeGenerator":
        """Build a generator from configuration; without an API key it fails on use."""
        api_key = get("llm.api_key")
        if not api_key:
            logger.warning("No LLM API key configured (llm.api_key / GEMINI_API_KEY); code generation disabled")
            return cls(llm=None)

        from .llm import LLMService
        return cls(LLMService(api_key=api_key, model_name=get("llm.model", "gemini-2.5-flash")))

    def generate(self, request: str, context: Optional[GenerationContext] = None) -> str:
        """
        Generate module code for a request.

        Raises:
            GenerationError: with a "Failed to generate code: " message
        """
        context = context or GenerationContext()
        if self.llm is None:
            raise GenerationError("Failed to generate code: no LLM API key configured")

        prompt = self.prompts.build_module_prompt(request, context.existing_modules, context.scene_objects)
        try:
            raw = self.llm.generate(prompt)
        except GenerationError as e:
            raise GenerationError(f"Failed to generate code: {e}") from e
        except Exception as e:
            logger.error(f"Error calling LLM: {e}")
            raise GenerationError(f"Failed to generate code: {e}") from e

        code = sanitize_code(raw)
        if not code:
            raise GenerationError("Failed to generate code: model returned no code")
        return code
