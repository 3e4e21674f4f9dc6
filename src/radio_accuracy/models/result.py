"""Scoring models for radio-accuracy.

Options going into the scorer and the result coming back out.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SpeechCategory(str, Enum):
    """Kind of phrase being practised; selects tokenizer and matcher."""

    CODES = "codes"  # 10-codes
    PHONETIC = "phonetic"  # NATO phonetic alphabet
    RADIO_PROTOCOL = "radio-protocol"  # General radio phrases

    @classmethod
    def coerce(cls, value: Any) -> "SpeechCategory":
        """Map any category spelling onto a member.

        Accepts "codes", "CODES", "radio_protocol", "RADIO_PROTOCOL" and so on.
        Unknown or empty values fall back to RADIO_PROTOCOL, which compares
        token by token with no domain vocabulary.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.RADIO_PROTOCOL
        try:
            return cls(value.strip().lower().replace("_", "-"))
        except ValueError:
            return cls.RADIO_PROTOCOL


class AccuracyCategory(str, Enum):
    """Label derived from the overall score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs-improvement"
    POOR = "poor"


class ScoringOptions(BaseModel):
    """Options for a single scoring call.

    Field names are snake_case; the camelCase spellings used by the web
    client ("allowPartialCredit", "strictMode", ...) are accepted too.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Accepted for compatibility; both inputs are always lowercased during
    # normalization, so this does not change the score
    case_sensitive: bool = Field(default=False, alias="caseSensitive")
    allow_partial_credit: bool = Field(default=True, alias="allowPartialCredit")
    strict_mode: bool = Field(default=False, alias="strictMode")
    category: SpeechCategory = SpeechCategory.RADIO_PROTOCOL

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> SpeechCategory:
        return SpeechCategory.coerce(value)


class MatchRecord(BaseModel):
    """Comparison of one expected token with its spoken counterpart."""

    expected: str
    actual: str  # Empty when the speaker stopped short
    match: bool
    similarity: float = Field(ge=0, le=100)


class AccuracyResult(BaseModel):
    """Outcome of scoring a transcript against an expected phrase."""

    score: int = Field(ge=0, le=100)
    matches: list[MatchRecord] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list, max_length=3)
    category: AccuracyCategory

    @property
    def expected_token_count(self) -> int:
        """Number of expected tokens that were scored."""
        return len(self.matches)

    @property
    def perfect_matches(self) -> int:
        """Number of tokens that met their match threshold."""
        return sum(1 for m in self.matches if m.match)

    @property
    def mismatches(self) -> list[MatchRecord]:
        """Tokens that missed their match threshold, in expected order."""
        return [m for m in self.matches if not m.match]
