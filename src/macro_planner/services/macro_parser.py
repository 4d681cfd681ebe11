"""Natural-language macro extraction."""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from macro_planner.domain.errors import MacroClientError
from macro_planner.domain.parsing import (
    MacroEstimate,
    MacroParseFailure,
    MacroParseSuccess,
    ParsedMacros,
    ParseResult,
)
from macro_planner.services.calculations import derive_calories, round_half_up

_logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a nutrition analysis assistant. Respond only with valid JSON."

NETWORK_MESSAGE = "Couldn't reach AI. Try again or enter macros manually."
EMPTY_MESSAGE = "AI couldn't confidently extract macros. Please enter manually."
FORMAT_MESSAGE = "AI returned an unexpected format. Try again."

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


class MacroClient(Protocol):
    """Interface for a chat model that answers macro prompts."""

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        """Return the model's text reply.

        Raises ``MacroClientError`` when the service cannot be reached.
        """

    async def close(self) -> None:
        """Release any underlying connections.

        Raises ``MacroClientError`` when the connections cannot be closed.
        """


@dataclass
class MacroParseService:
    """Turns a free-text meal description into macro estimates.

    Each call makes a single attempt. Failures come back as typed results.
    """

    client_factory: Callable[[str], MacroClient]
    model: str = "gpt-4o-mini"
    max_tokens: int = 200
    temperature: float = 0.3

    async def parse(self, text: str, api_key: str) -> ParseResult:
        """Estimate macros for ``text`` using the given API key."""
        client = self.client_factory(api_key)
        try:
            content = await client.complete(
                model=self.model,
                system_prompt=SYSTEM_PROMPT,
                prompt=build_prompt(text),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except MacroClientError:
            _logger.exception("Macro extraction request failed")
            return MacroParseFailure(error="network", message=NETWORK_MESSAGE)
        finally:
            await _close_quietly(client)

        if not content:
            return MacroParseFailure(error="empty", message=EMPTY_MESSAGE)

        try:
            estimate = MacroEstimate.model_validate(
                json.loads(_extract_json(content))
            )
        except ValueError:
            _logger.warning("Unexpected macro extraction output: %r", content)
            return MacroParseFailure(error="format", message=FORMAT_MESSAGE)

        return MacroParseSuccess(data=sanitize_estimate(estimate))


async def _close_quietly(client: MacroClient) -> None:
    try:
        await client.close()
    except MacroClientError:
        _logger.warning("Failed to close macro client", exc_info=True)


def build_prompt(text: str) -> str:
    """Build the user prompt for a meal description."""
    return (
        "Analyze this food description and estimate the macronutrients. "
        "Return ONLY valid JSON with this exact structure:\n"
        "{\n"
        '  "protein_g": <number>,\n'
        '  "carbs_g": <number>,\n'
        '  "fat_g": <number>,\n'
        '  "calories": <number>,\n'
        '  "notes": "<brief explanation>"\n'
        "}\n\n"
        f'Food description: "{text}"\n\n'
        "Rules:\n"
        "- All numbers should be non-negative integers\n"
        "- If you cannot determine a value, use 0\n"
        "- Be conservative in estimates\n"
        "- Calculate calories as: protein*4 + carbs*4 + fat*9"
    )


def sanitize_estimate(estimate: MacroEstimate) -> ParsedMacros:
    """Round and clamp macro grams, then recompute calories from them."""
    protein_g = _whole_grams(estimate.protein_g)
    carbs_g = _whole_grams(estimate.carbs_g)
    fat_g = _whole_grams(estimate.fat_g)
    return ParsedMacros(
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        calories=derive_calories(protein_g, carbs_g, fat_g),
        notes=estimate.notes or "",
    )


def _whole_grams(value: float | None) -> int:
    return max(0, round_half_up(value or 0))


def _extract_json(content: str) -> str:
    match = _FENCED_JSON.search(content)
    if match:
        return match.group(1).strip()
    return content.strip()
