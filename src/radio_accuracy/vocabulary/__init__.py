"""Vocabulary module for speech accuracy scoring.

Provides text normalization, edit-distance similarity and the read-only
alias tables for 10-codes and the NATO phonetic alphabet.
"""

from radio_accuracy.vocabulary.aliases import (
    PHONETIC_ALPHABET,
    POLICE_CODES,
    AliasTable,
    get_code_variants,
    get_phonetic_variants,
)
from radio_accuracy.vocabulary.similarity import levenshtein_distance, normalize_text, similarity

__all__ = [
    "AliasTable",
    "POLICE_CODES",
    "PHONETIC_ALPHABET",
    "get_code_variants",
    "get_phonetic_variants",
    "normalize_text",
    "levenshtein_distance",
    "similarity",
]
