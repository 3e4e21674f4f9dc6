"""Improvement hints built from per-token match results."""

from __future__ import annotations

from collections.abc import Sequence

from radio_accuracy.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from radio_accuracy.models import MatchRecord, SpeechCategory

PERFECT_MESSAGE = "Excellent! Perfect pronunciation."

CATEGORY_TIPS: dict[SpeechCategory, tuple[str, ...]] = {
    SpeechCategory.CODES: (
        "For 10-codes, speak clearly and pronounce numbers distinctly.",
        'You can say "ten-four" or "10-4" - both are acceptable.',
    ),
    SpeechCategory.PHONETIC: (
        "Use NATO phonetic alphabet: Alpha, Bravo, Charlie, etc.",
        "Speak each letter clearly with proper phonetic pronunciation.",
    ),
}


def token_tip(record: MatchRecord, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> str | None:
    """Get the hint for one mismatched token, or None if it was close."""
    if record.similarity < config.unrecognized_below:
        return f'"{record.expected}" was not recognized. Try speaking more clearly.'
    if record.similarity < config.partially_recognized_below:
        return f'"{record.expected}" was partially recognized. Check your pronunciation.'
    return None


def generate_suggestions(
    matches: Sequence[MatchRecord],
    category: SpeechCategory,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[str]:
    """Build the suggestion list for a scored attempt.

    A clean attempt gets the single positive message. Otherwise the
    category tips come first, then one hint per mismatched token in
    expected order, and the combined list is cut to ``max_suggestions``.

    Args:
        matches: Per-token results in expected order
        category: Speech category of the attempt
        config: Scoring configuration

    Returns:
        Ordered suggestions
    """
    mismatches = [m for m in matches if not m.match]
    if not mismatches:
        return [PERFECT_MESSAGE]

    suggestions = list(CATEGORY_TIPS.get(category, ()))
    for record in mismatches:
        tip = token_tip(record, config)
        if tip:
            suggestions.append(tip)

    return suggestions[: config.max_suggestions]
