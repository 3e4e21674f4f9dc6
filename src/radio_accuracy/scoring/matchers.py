"""Per-token matchers.

Every matcher reduces to the edit-distance similarity in
``radio_accuracy.vocabulary.similarity``; they differ only in which
spoken forms count and how similar is similar enough.
"""

from __future__ import annotations

from dataclasses import dataclass

from radio_accuracy.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from radio_accuracy.models import ScoringOptions, SpeechCategory
from radio_accuracy.vocabulary import PHONETIC_ALPHABET, POLICE_CODES, AliasTable
from radio_accuracy.vocabulary.similarity import normalize_text, similarity


@dataclass(frozen=True)
class MatchOutcome:
    """Result of matching one spoken token."""

    match: bool
    similarity: float  # 0-100
    best_variant: str | None = None


def match_alias(
    spoken: str,
    canonical: str,
    table: AliasTable,
    threshold: float,
) -> MatchOutcome:
    """Match a spoken token against every accepted variant of a canonical token.

    The best-scoring variant wins; an exact normalized match returns
    immediately with similarity 100.

    Args:
        spoken: Spoken token
        canonical: Canonical token to look up in the table
        table: Alias table to consult
        threshold: Minimum similarity for a match

    Returns:
        MatchOutcome for the best variant
    """
    normalized_spoken = normalize_text(spoken)
    best = MatchOutcome(match=False, similarity=0.0)

    for variant in table.get_variants(canonical):
        normalized_variant = normalize_text(variant)
        if normalized_spoken == normalized_variant:
            return MatchOutcome(match=True, similarity=100.0, best_variant=variant)

        score = similarity(normalized_spoken, normalized_variant)
        if score > best.similarity:
            best = MatchOutcome(match=score >= threshold, similarity=score, best_variant=variant)

    return best


def match_code(
    spoken: str,
    code: str,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> MatchOutcome:
    """Match a spoken token against a 10-code."""
    return match_alias(spoken, code, POLICE_CODES, config.code_match_threshold)


def match_phonetic(
    spoken: str,
    letter: str,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> MatchOutcome:
    """Match a spoken token against a phonetic-alphabet letter."""
    return match_alias(spoken, letter, PHONETIC_ALPHABET, config.phonetic_match_threshold)


def match_token(
    expected: str,
    actual: str,
    strict_mode: bool = False,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> MatchOutcome:
    """Compare two plain tokens directly."""
    threshold = config.strict_token_match_threshold if strict_mode else config.token_match_threshold
    score = similarity(expected, actual)
    return MatchOutcome(match=score >= threshold, similarity=score)


def is_code_token(token: str) -> bool:
    """Check whether an expected token looks like a 10-code."""
    return token.startswith("10")


def is_letter_token(token: str) -> bool:
    """Check whether an expected token is a single letter name."""
    return len(token) == 1


def match_expected_token(
    expected: str,
    actual: str,
    options: ScoringOptions,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> MatchOutcome:
    """Pick the matcher for an expected token and run it.

    Code matcher for code-shaped tokens in the codes category, phonetic
    matcher for single letters in the phonetic category, plain token
    comparison for everything else.
    """
    if options.category is SpeechCategory.CODES and is_code_token(expected):
        return match_code(actual, expected, config)
    if options.category is SpeechCategory.PHONETIC and is_letter_token(expected):
        return match_phonetic(actual, expected, config)
    return match_token(expected, actual, options.strict_mode, config)
