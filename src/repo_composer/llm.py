import logging
from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import TypeVar

import openai
from openai import AsyncOpenAI

from repo_composer import config, prompts

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_TEMPERATURE = 0.3
CREATIVE_TEMPERATURE = 0.8


class LLMError(Exception):
    pass


class GenerationServiceError(LLMError):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GenerationUnavailableError(GenerationServiceError):
    """The service could not be reached or never answered."""


class MalformedOutputError(LLMError):
    pass


@lru_cache
def _get_client(api_key: str, base_url: str, timeout: float, max_retries: int) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=max_retries)


class TextGenerator:
    """Chat-completion client with a single prompt-in, text-out operation."""

    def __init__(self, llm_config: config.LLMConfig):
        if not llm_config.deepseek_api_key:
            raise LLMError("DEEPSEEK_API_KEY is not configured")
        self.model = llm_config.model_name
        self.client = _get_client(
            llm_config.deepseek_api_key,
            llm_config.deepseek_base_url,
            llm_config.timeout,
            llm_config.max_retries,
        )

    async def complete(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float | None = None,
        json_mode: bool = False,
    ) -> str:
        if temperature is None:
            temperature = JSON_TEMPERATURE if json_mode else CREATIVE_TEMPERATURE
        system_prompt = prompts.JSON_SYSTEM_PROMPT if json_mode else prompts.CREATIVE_SYSTEM_PROMPT
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.APIStatusError as exc:
            raise GenerationServiceError(
                f"Text generation API error: {exc.status_code} - {exc.message}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIConnectionError as exc:
            raise GenerationUnavailableError("No response from text generation API") from exc
        except openai.OpenAIError as exc:
            raise GenerationServiceError(f"Text generation request failed: {exc}") from exc

        if not response.choices:
            raise MalformedOutputError("Text generation API returned no choices")
        text = response.choices[0].message.content
        if not text:
            raise MalformedOutputError("Text generation API returned an empty response")
        return text


async def with_fallback(
    primary: Callable[[], Awaitable[T]],
    fallback: Callable[[], T],
    step: str,
) -> T:
    """Run an AI-assisted step, substituting the deterministic result on any LLM failure."""
    try:
        return await primary()
    except LLMError as exc:
        logger.warning(f"{step} failed, using fallback: {exc}")
        return fallback()
