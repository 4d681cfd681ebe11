"""Models for natural-language macro extraction."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

ParseErrorKind = Literal["network", "format", "empty"]


class MacroEstimate(BaseModel):
    """Raw macro estimate returned by the language model."""

    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    calories: float | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ParsedMacros:
    """Sanitized macro estimate with calories recomputed from grams."""

    protein_g: int
    carbs_g: int
    fat_g: int
    calories: int
    notes: str


@dataclass(frozen=True)
class MacroParseSuccess:
    """Successful macro extraction."""

    data: ParsedMacros
    success: Literal[True] = True


@dataclass(frozen=True)
class MacroParseFailure:
    """Typed extraction failure carrying a user-facing message."""

    error: ParseErrorKind
    message: str
    success: Literal[False] = False


ParseResult = MacroParseSuccess | MacroParseFailure
