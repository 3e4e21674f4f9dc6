"""Tokenizers for expected answers and spoken transcripts.

Both sides are normalized and split on whitespace. For codes and phonetic
practice, words that together spell one multi-word alias ("ten four",
"fox trot") stay together as a single token so that one spoken code lines
up with one expected code.
"""

from __future__ import annotations

from typing import Any

from radio_accuracy.models import SpeechCategory
from radio_accuracy.vocabulary import PHONETIC_ALPHABET, POLICE_CODES, AliasTable
from radio_accuracy.vocabulary.similarity import normalize_text

_CODE_PREFIXES = ("10", "10-")


def group_aliases(words: list[str], table: AliasTable) -> list[str]:
    """Join consecutive words that form a multi-word alias.

    Longest alias wins at each position.

    Args:
        words: Normalized words
        table: Alias table whose multi-word variants are kept together

    Returns:
        Tokens, with multi-word aliases space-joined
    """
    tokens: list[str] = []
    i = 0
    while i < len(words):
        for size in range(min(table.max_variant_words, len(words) - i), 1, -1):
            candidate = " ".join(words[i : i + size])
            if candidate in table.multiword_variants:
                tokens.append(candidate)
                i += size
                break
        else:
            tokens.append(words[i])
            i += 1
    return tokens


def _join_code_numerals(tokens: list[str], separator: str) -> list[str]:
    """Keep "10" and the numeral after it together ("10 33")."""
    joined: list[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in _CODE_PREFIXES and i + 1 < len(tokens) and tokens[i + 1].isdigit():
            joined.append(f"10{separator}{tokens[i + 1]}")
            i += 2
        else:
            joined.append(token)
            i += 1
    return joined


def _canonical_codes(tokens: list[str]) -> list[str]:
    """Replace known spoken code forms with their canonical code."""
    return [POLICE_CODES.get_canonical(token) or token for token in tokens]


def parse_expected_answer(expected_answer: str, category: Any = None) -> list[str]:
    """Split an expected phrase into the ordered tokens to be scored.

    - codes: whitespace split, but a code is never split; "ten four",
      "10 4" and "10-4" all become the single token "10-4"
    - phonetic: one letter name per token ("fox trot" stays whole)
    - radio-protocol and anything else: plain whitespace split

    Args:
        expected_answer: Raw expected phrase
        category: Speech category (any spelling; unknown means radio-protocol)

    Returns:
        Ordered list of non-empty tokens
    """
    words = normalize_text(expected_answer).split()
    category = SpeechCategory.coerce(category)

    if category is SpeechCategory.CODES:
        tokens = _canonical_codes(group_aliases(words, POLICE_CODES))
        return _join_code_numerals(tokens, "-")
    if category is SpeechCategory.PHONETIC:
        return group_aliases(words, PHONETIC_ALPHABET)
    return words


def tokenize_spoken(spoken_text: str, category: Any = None) -> list[str]:
    """Split a spoken transcript into tokens, keeping the spoken wording.

    Args:
        spoken_text: Raw transcript
        category: Speech category (any spelling; unknown means radio-protocol)

    Returns:
        Ordered list of non-empty tokens
    """
    words = normalize_text(spoken_text).split()
    category = SpeechCategory.coerce(category)

    if category is SpeechCategory.CODES:
        return _join_code_numerals(group_aliases(words, POLICE_CODES), " ")
    if category is SpeechCategory.PHONETIC:
        return group_aliases(words, PHONETIC_ALPHABET)
    return words
