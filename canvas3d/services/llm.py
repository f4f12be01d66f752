"""
LLM Service using Google Gemini for module code generation.
"""
import google.generativeai as genai
import logging

from canvas3d.core.errors import GenerationError

logger = logging.getLogger(__name__)


class LLMService:
    """Service for interacting with Gemini LLM."""

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        """
        Initialize the LLM service.

        Args:
            api_key: Gemini API key
            model_name: Model to use (default: gemini-2.5-flash)
        """
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)
        self.model_name = model_name
        logger.info(f"LLM service initialized with model: {model_name}")

    def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the raw reply text.

        Raises:
            GenerationError: transport/upstream failure or a reply without text
        """
        try:
            response = self.model.generate_content(prompt)
        except Exception as e:
            logger.error(f"Error calling LLM API: {e}")
            raise GenerationError(f"API Error: {e}") from e

        try:
            text = response.text
        except (AttributeError, IndexError, ValueError) as e:
            # Blocked or empty candidates make .text raise
            logger.error(f"Malformed LLM response: {e}")
            raise GenerationError(f"Malformed response from model: {e}") from e

        if not isinstance(text, str) or not text.strip():
            raise GenerationError("Malformed response from model: no text content")
        return text
