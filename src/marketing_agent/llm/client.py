"""LLM client wrapper.

Sends one prompt as a single user turn and returns the raw reply text. The
provider SDK client is built per call from the caller's API key, so no
credential is held between calls. SDK retries are disabled.
"""

from typing import Any, Dict, Optional

import anthropic
import openai

from ..config import get_settings
from ..errors import GenerationFailed
from ..log import get_logger

settings = get_settings()
logger = get_logger("llm")

PROVIDERS = ("anthropic", "openai")

AUTH_FAILED_MESSAGE = "The AI provider rejected the API key. Please check it and try again."


def _client_options(api_key: str, timeout: Optional[float]) -> Dict[str, Any]:
    # None would mean "no timeout" to both SDKs, so only pass an explicit budget
    options: Dict[str, Any] = {"api_key": api_key, "max_retries": 0}
    if timeout is not None:
        options["timeout"] = timeout
    return options


class LLMClient:
    def generate(
        self,
        prompt: str,
        api_key: str,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Runs one non-streaming completion and returns the reply text.
        Raises GenerationFailed on transport, authentication or provider errors.
        """
        provider = (provider or settings.LLM_PROVIDER).lower()
        if provider not in PROVIDERS:
            raise GenerationFailed(detail=f"unsupported provider {provider!r}")
        model = model or settings.model_for(provider)
        max_tokens = max_tokens or settings.MAX_OUTPUT_TOKENS

        logger.info(f"Requesting analysis from {provider}:{model} (max_tokens={max_tokens})")
        if provider == "openai":
            text = self._generate_openai(prompt, api_key, model, max_tokens, timeout)
        else:
            text = self._generate_anthropic(prompt, api_key, model, max_tokens, timeout)
        logger.info(f"Received {len(text)} chars from {provider}:{model}")
        return text

    def _generate_anthropic(self, prompt: str, api_key: str, model: str, max_tokens: int, timeout: Optional[float]) -> str:
        try:
            client = anthropic.Anthropic(**_client_options(api_key, timeout))
            message = client.messages.create(
                model=model,
                max_tokens=max_tokens,
                messages=[
                    {"role": "user", "content": prompt}
                ],
            )
        except anthropic.AuthenticationError as e:
            logger.warning("Anthropic rejected the API key")
            raise GenerationFailed(AUTH_FAILED_MESSAGE, detail=str(e)) from e
        except anthropic.AnthropicError as e:
            logger.warning(f"Anthropic request failed: {e.__class__.__name__}: {e}")
            raise GenerationFailed(detail=f"{e.__class__.__name__}: {e}") from e

        if message.stop_reason == "max_tokens":
            logger.warning("Reply hit the max_tokens budget and is likely truncated")
        return "".join(block.text for block in message.content if block.type == "text")

    def _generate_openai(self, prompt: str, api_key: str, model: str, max_tokens: int, timeout: Optional[float]) -> str:
        try:
            client = openai.OpenAI(**_client_options(api_key, timeout))
            completion = client.chat.completions.create(
                model=model,
                max_completion_tokens=max_tokens,
                messages=[
                    {"role": "user", "content": prompt}
                ],
            )
        except openai.AuthenticationError as e:
            logger.warning("OpenAI rejected the API key")
            raise GenerationFailed(AUTH_FAILED_MESSAGE, detail=str(e)) from e
        except openai.OpenAIError as e:
            logger.warning(f"OpenAI request failed: {e.__class__.__name__}: {e}")
            raise GenerationFailed(detail=f"{e.__class__.__name__}: {e}") from e

        choice = completion.choices[0]
        if choice.finish_reason == "length":
            logger.warning("Reply hit the max_tokens budget and is likely truncated")
        return choice.message.content or ""


llm_client = LLMClient()
