"""Tests for the LLM transport, prompt building and code generation."""

import pytest
from unittest.mock import Mock, PropertyMock, patch

from canvas3d import config
from canvas3d.core import GenerationError
from canvas3d.services import CodeGenerator, GenerationContext, PromptService
from canvas3d.services.llm import LLMService
from canvas3d.services.prompt import DEFAULT_MODULE_PROMPT


@pytest.fixture
def mock_genai():
    """Mock Google Generative AI module."""
    with patch('canvas3d.services.llm.genai') as mock:
        mock.configure = Mock()

        mock_model = Mock()
        mock.GenerativeModel.return_value = mock_model

        mock_response = Mock()
        mock_response.text = "```python\nscene.add(gfx.Mesh())\n```"
        mock_model.generate_content.return_value = mock_response

        yield mock


@pytest.fixture
def llm_service(mock_genai):
    """Create LLM service with mocked Gemini API."""
    return LLMService(api_key="test_key", model_name="gemini-2.5-flash")


class TestLLMService:
    """Test the Gemini wrapper."""

    def test_init_configures_api(self, mock_genai):
        service = LLMService(api_key="test_key")

        mock_genai.configure.assert_called_once_with(api_key="test_key")
        mock_genai.GenerativeModel.assert_called_once_with("gemini-2.5-flash")
        assert service.model_name == "gemini-2.5-flash"

    def test_generate_returns_raw_text(self, llm_service):
        assert llm_service.generate("prompt") == "```python\nscene.add(gfx.Mesh())\n```"
        llm_service.model.generate_content.assert_called_once_with("prompt")

    def test_transport_error_wrapped(self, llm_service):
        llm_service.model.generate_content.side_effect = ConnectionError("network down")

        with pytest.raises(GenerationError) as exc_info:
            llm_service.generate("prompt")
        assert "network down" in str(exc_info.value)

    def test_blocked_response_is_malformed(self, llm_service):
        response = Mock()
        type(response).text = PropertyMock(side_effect=ValueError("blocked"))
        llm_service.model.generate_content.return_value = response

        with pytest.raises(GenerationError, match="Malformed"):
            llm_service.generate("prompt")

    def test_empty_text_is_malformed(self, llm_service):
        llm_service.model.generate_content.return_value = Mock(text="   ")
        with pytest.raises(GenerationError, match="no text"):
            llm_service.generate("prompt")


class TestPromptService:
    """Test the module prompt."""

    def test_default_prompt_filled(self):
        prompt = PromptService().build_module_prompt("add a cube", ["module_0", "module_1"], 4)

        assert 'fulfills: "add a cube"' in prompt
        assert "Current scene has: module_0, module_1" in prompt
        assert "Number of objects in scene: 4" in prompt
        assert 'handle = {"error": "what went wrong"}' in prompt

    def test_no_modules_yet(self):
        prompt = PromptService().build_module_prompt("x", [], 0)
        assert "Current scene has: No modules yet" in prompt

    def test_config_override(self):
        config.get_config()["prompts"]["module"] = "Do {request} ({scene_objects})"
        assert PromptService().build_module_prompt("spin", [], 2) == "Do spin (2)"

    def test_default_mentions_capabilities(self):
        for name in ("scene", "events", "gfx", "modules", "generate_name", "animate"):
            assert name in DEFAULT_MODULE_PROMPT


class TestCodeGenerator:
    """Test request -> sanitized code."""

    def test_generate_sanitizes(self):
        llm = Mock()
        llm.generate.return_value = "Here is the code:\n```python\ncube = gfx.Mesh()\nscene.add(cube)\n```"

        code = CodeGenerator(llm).generate("add a cube", GenerationContext(["module_0"], 3))

        assert code == "cube = gfx.Mesh()\nscene.add(cube)"
        prompt = llm.generate.call_args.args[0]
        assert "module_0" in prompt
        assert "Number of objects in scene: 3" in prompt

    def test_llm_failure_wrapped(self):
        llm = Mock()
        llm.generate.side_effect = GenerationError("API Error: quota")

        with pytest.raises(GenerationError) as exc_info:
            CodeGenerator(llm).generate("add a cube")
        assert str(exc_info.value) == "Failed to generate code: API Error: quota"

    def test_unexpected_exception_wrapped(self):
        llm = Mock()
        llm.generate.side_effect = KeyError("content")

        with pytest.raises(GenerationError, match="Failed to generate code"):
            CodeGenerator(llm).generate("add a cube")

    def test_empty_code_rejected(self):
        llm = Mock()
        llm.generate.return_value = "```python\n```"

        with pytest.raises(GenerationError, match="no code"):
            CodeGenerator(llm).generate("add a cube")

    def test_from_config_without_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        config.use_defaults()

        generator = CodeGenerator.from_config()

        assert generator.llm is None
        with pytest.raises(GenerationError, match="no LLM API key"):
            generator.generate("add a cube")

    def test_from_config_with_env_key(self, monkeypatch, mock_genai):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        config.use_defaults()

        generator = CodeGenerator.from_config()

        assert isinstance(generator.llm, LLMService)
        mock_genai.configure.assert_called_once_with(api_key="env-key")
