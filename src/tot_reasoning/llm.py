"""
Text-generation collaborators.

The solvers only need one capability from a language model: send a prompt,
get text back. ``LLMProvider`` is that contract; ``GeminiLLM`` implements it
on Google's Generative AI API and ``TimeoutLLM`` bounds any provider's calls.
"""

from __future__ import annotations

import asyncio
import os
from abc import ABC, abstractmethod

import google.generativeai as genai
from dotenv import load_dotenv

from tot_reasoning.config import LLMConfig

load_dotenv()


class LLMProvider(ABC):
    """Abstract base class for text-generation collaborators."""

    @abstractmethod
    async def chat(self, prompt: str) -> str:
        """Send ``prompt`` and return the model's reply text."""


class GeminiLLM(LLMProvider):
    """
    Gemini-backed collaborator.

    Args:
        model: Gemini model to use
        api_key: API key (defaults to the GEMINI_API_KEY env var)
        temperature: Sampling temperature
    """

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        api_key: str | None = None,
        temperature: float = 0.7,
        api_key_env: str = "GEMINI_API_KEY",
    ):
        api_key = api_key or os.getenv(api_key_env)
        if not api_key:
            raise ValueError(f"{api_key_env} not found")

        genai.configure(api_key=api_key)
        self.model_name = model
        self.model = genai.GenerativeModel(
            model,
            generation_config={"temperature": temperature},
        )

    async def chat(self, prompt: str) -> str:
        response = await self.model.generate_content_async(prompt)
        return response.text


class TimeoutLLM(LLMProvider):
    """
    Bounds every call of the wrapped provider.

    A call that outlives ``timeout`` seconds raises ``TimeoutError``, which
    the solvers treat like any other collaborator failure.
    """

    def __init__(self, inner: LLMProvider, timeout: float):
        self.inner = inner
        self.timeout = timeout

    async def chat(self, prompt: str) -> str:
        try:
            return await asyncio.wait_for(self.inner.chat(prompt), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise TimeoutError(f"LLM call exceeded {self.timeout}s") from e


def create_llm(config: LLMConfig | None = None) -> LLMProvider:
    """Build a collaborator from configuration."""
    config = config or LLMConfig()

    providers = {
        "gemini": GeminiLLM,
    }
    if config.provider not in providers:
        raise ValueError(f"Unknown LLM provider: {config.provider}")

    llm: LLMProvider = providers[config.provider](
        model=config.model,
        temperature=config.temperature,
        api_key_env=config.api_key_env,
    )
    if config.timeout is not None:
        llm = TimeoutLLM(llm, config.timeout)
    return llm
