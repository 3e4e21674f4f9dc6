"""Speech accuracy scoring engine.

Scores a recognized transcript against an expected radio phrase. The
engine is a set of pure functions: no I/O, no state kept between calls,
and no exceptions for any pair of strings.

Expected token ``i`` is compared with spoken token ``i``. A skipped or
inserted word therefore shifts every later comparison; tokens beyond the
end of the transcript are compared with the empty string and fail.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from radio_accuracy.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from radio_accuracy.logging import get_logger
from radio_accuracy.models import (
    AccuracyCategory,
    AccuracyResult,
    MatchRecord,
    ScoringOptions,
    SpeechCategory,
)
from radio_accuracy.scoring.matchers import match_expected_token
from radio_accuracy.scoring.parser import parse_expected_answer, tokenize_spoken
from radio_accuracy.scoring.suggestions import generate_suggestions

logger = get_logger(__name__)

# camelCase alias -> field name
_OPTION_ALIASES = {
    field.alias: name for name, field in ScoringOptions.model_fields.items() if field.alias
}


def _by_field_name(values: Mapping[str, Any]) -> dict[str, Any]:
    return {_OPTION_ALIASES.get(key, key): value for key, value in values.items()}


def resolve_options(
    options: ScoringOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> ScoringOptions:
    """Build ScoringOptions from a model, a mapping, or keyword overrides.

    Keyword overrides win over values in ``options``, whichever spelling
    (snake_case or camelCase) either side uses.
    """
    if isinstance(options, ScoringOptions):
        data: dict[str, Any] = options.model_dump()
    else:
        data = _by_field_name(options or {})
    data.update(_by_field_name(overrides))
    return ScoringOptions.model_validate(data)


def aggregate_score(total: float, token_count: int) -> int:
    """Average per-token contributions into a 0-100 integer score.

    Halves round up. No tokens means a score of 0.
    """
    if token_count == 0:
        return 0
    average = min(100.0, max(0.0, total / token_count))
    return int(math.floor(average + 0.5))


def categorize_score(score: int, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> AccuracyCategory:
    """Map a score onto its accuracy category."""
    if score >= config.excellent_threshold:
        return AccuracyCategory.EXCELLENT
    if score >= config.good_threshold:
        return AccuracyCategory.GOOD
    if score >= config.needs_improvement_threshold:
        return AccuracyCategory.NEEDS_IMPROVEMENT
    return AccuracyCategory.POOR


def compute_accuracy(
    spoken_text: str,
    expected_answer: str,
    options: ScoringOptions | Mapping[str, Any] | None = None,
    *,
    config: ScoringConfig | None = None,
    **overrides: Any,
) -> AccuracyResult:
    """Score a spoken transcript against the expected answer.

    Args:
        spoken_text: Recognized transcript
        expected_answer: Phrase the speaker was asked to say
        options: ScoringOptions, or a mapping of option values
        config: Thresholds to apply (defaults to DEFAULT_SCORING_CONFIG)
        **overrides: Individual option values, e.g. ``category="codes"``

    Returns:
        AccuracyResult with score, per-token matches, suggestions and category

    Example:
        result = compute_accuracy("ten four", "10-4", category="codes")
        result.score  # 100
    """
    opts = resolve_options(options, **overrides)
    config = config or DEFAULT_SCORING_CONFIG

    expected_tokens = parse_expected_answer(expected_answer, opts.category)
    spoken_tokens = tokenize_spoken(spoken_text, opts.category)

    matches: list[MatchRecord] = []
    total = 0.0

    for index, expected in enumerate(expected_tokens):
        actual = spoken_tokens[index] if index < len(spoken_tokens) else ""
        outcome = match_expected_token(expected, actual, opts, config)

        matches.append(
            MatchRecord(
                expected=expected,
                actual=actual,
                match=outcome.match,
                similarity=outcome.similarity,
            )
        )

        if outcome.match:
            total += 100
        elif opts.allow_partial_credit:
            total += max(0.0, outcome.similarity)

    score = aggregate_score(total, len(expected_tokens))
    category = categorize_score(score, config)
    suggestions = generate_suggestions(matches, opts.category, config)

    logger.debug(
        f"Scored attempt: {score} ({category.value})",
        extra={
            "speech_category": opts.category.value,
            "expected_tokens": len(expected_tokens),
            "spoken_tokens": len(spoken_tokens),
            "matched_tokens": sum(1 for m in matches if m.match),
        },
    )

    return AccuracyResult(
        score=score,
        matches=matches,
        suggestions=suggestions,
        category=category,
    )


def quick_score(
    spoken_text: str,
    expected_answer: str,
    category: SpeechCategory | str | None = None,
    *,
    config: ScoringConfig | None = None,
) -> int:
    """Score with default options and return only the number."""
    return compute_accuracy(spoken_text, expected_answer, category=category, config=config).score


def is_likely_correct(
    result: AccuracyResult,
    threshold: int = DEFAULT_SCORING_CONFIG.likely_correct_threshold,
) -> bool:
    """Check whether a result clears the given score threshold."""
    return result.score >= threshold
