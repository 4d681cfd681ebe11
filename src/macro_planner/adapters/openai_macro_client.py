"""OpenAI Chat Completions client for macro extraction."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI, OpenAIError

from macro_planner.domain.errors import MacroClientError
from macro_planner.services.macro_parser import MacroClient


@dataclass
class OpenAIMacroClient(MacroClient):
    """Macro client backed by the OpenAI Chat Completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMacroClient":
        """Create a client for the given API key."""
        return cls(client=AsyncOpenAI(api_key=api_key, max_retries=0))

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        """Send the prompt and return the first choice's content."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except (OpenAIError, httpx.HTTPError) as exc:
            raise MacroClientError(str(exc)) from exc
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        try:
            await self.client.close()
        except (OpenAIError, httpx.HTTPError) as exc:
            raise MacroClientError(str(exc)) from exc
