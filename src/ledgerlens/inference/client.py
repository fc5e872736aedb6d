"""Text-in/text-out inference clients."""

import logging
from abc import ABC, abstractmethod

import openai
from openai import AsyncOpenAI

from ..errors import DependencyTimeoutError, DependencyUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI accountant for a small business. "
    "Answer in plain text, briefly and concretely."
)


class TextInferenceClient(ABC):
    """Opaque inference oracle: a prompt goes in, free-form text comes out."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """
        Complete a prompt.

        Raises:
            DependencyUnavailableError: If the service is unreachable or answers non-2xx
        """
        pass


class OpenAIInferenceClient(TextInferenceClient):
    """Inference through OpenAI chat completions."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.system_prompt = system_prompt
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=1)
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def complete(self, prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.3,
            )
        except openai.APITimeoutError as e:
            logger.error(f"Inference call timed out after {self.timeout}s")
            raise DependencyTimeoutError("Inference service timed out") from e
        except openai.APIStatusError as e:
            logger.error(f"Inference service returned HTTP {e.status_code}")
            raise DependencyUnavailableError(
                f"Inference service returned HTTP {e.status_code}"
            ) from e
        except openai.APIConnectionError as e:
            logger.error(f"Inference service unreachable: {e}")
            raise DependencyUnavailableError("Inference service unreachable") from e

        return response.choices[0].message.content or ""


class StaticInferenceClient(TextInferenceClient):
    """Returns a fixed reply and records prompts. Used offline and in tests."""

    def __init__(self, reply: str = ""):
        self.reply = reply
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply
