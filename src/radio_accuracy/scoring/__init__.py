"""Speech accuracy scoring.

Public entry points for scoring a transcript against an expected
10-code, phonetic-alphabet or radio-protocol phrase.
"""

from radio_accuracy.scoring.engine import (
    aggregate_score,
    categorize_score,
    compute_accuracy,
    is_likely_correct,
    quick_score,
    resolve_options,
)
from radio_accuracy.scoring.matchers import (
    MatchOutcome,
    match_code,
    match_expected_token,
    match_phonetic,
    match_token,
)
from radio_accuracy.scoring.parser import parse_expected_answer, tokenize_spoken
from radio_accuracy.scoring.suggestions import PERFECT_MESSAGE, generate_suggestions

__all__ = [
    "compute_accuracy",
    "quick_score",
    "is_likely_correct",
    "categorize_score",
    "aggregate_score",
    "resolve_options",
    "MatchOutcome",
    "match_code",
    "match_phonetic",
    "match_token",
    "match_expected_token",
    "parse_expected_answer",
    "tokenize_spoken",
    "generate_suggestions",
    "PERFECT_MESSAGE",
]
