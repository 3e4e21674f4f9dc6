"""Alias tables for radio vocabulary.

Each table maps a canonical token (a 10-code such as "10-4", or an
uppercase letter) to the spoken forms accepted for it. Tables are built
once at import time and are read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from types import MappingProxyType

from radio_accuracy.vocabulary.similarity import normalize_text


class AliasTable(Mapping[str, tuple[str, ...]]):
    """Read-only mapping of canonical tokens to accepted spoken variants.

    Lookups go through ``key_transform`` first, so the phonetic table
    answers for "w" as well as "W". A canonical token that is not in the
    table is accepted as its own sole variant.

    Example:
        codes = AliasTable({"10-4": ["10-4", "ten four"]})
        codes.get_variants("10-4")   # ["10-4", "ten four"]
        codes.get_variants("10-33")  # ["10-33"]
    """

    def __init__(
        self,
        entries: Mapping[str, Sequence[str]],
        key_transform: Callable[[str], str] | None = None,
    ):
        self._key_transform = key_transform or (lambda key: key)
        self._entries = MappingProxyType(
            {self._key_transform(k): tuple(v) for k, v in entries.items()}
        )
        # Normalized multi-word variants, used to keep "ten four" together
        # when tokenizing spoken text
        self._multiword = frozenset(
            normalized
            for variants in self._entries.values()
            for normalized in (normalize_text(v) for v in variants)
            if " " in normalized
        )
        self._max_words = max((len(v.split()) for v in self._multiword), default=1)

        # Reverse lookup: normalized variant -> canonical (first entry wins)
        self._variant_lookup: dict[str, str] = {}
        for canonical, variants in self._entries.items():
            for variant in (canonical, *variants):
                self._variant_lookup.setdefault(normalize_text(variant), canonical)

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return self._entries[self._key_transform(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._key_transform(key) in self._entries

    def get_variants(self, canonical: str) -> list[str]:
        """Get the accepted spoken variants for a canonical token.

        Args:
            canonical: Canonical token to look up

        Returns:
            Ordered list of variants, or ``[canonical]`` when unknown
        """
        return list(self._entries.get(self._key_transform(canonical), (canonical,)))

    def get_canonical(self, spoken: str) -> str | None:
        """Get the canonical token a spoken form is a variant of.

        Args:
            spoken: Spoken form, e.g. "ten four" or "10 4"

        Returns:
            Canonical token, or None if the form is not in the table
        """
        return self._variant_lookup.get(normalize_text(spoken))

    def get_all_terms(self) -> list[str]:
        """Get all canonical tokens in table order."""
        return list(self._entries)

    def is_canonical(self, token: str) -> bool:
        """Check whether a token is a canonical key of this table."""
        return token in self

    @property
    def multiword_variants(self) -> frozenset[str]:
        """Normalized variants that span more than one spoken word."""
        return self._multiword

    @property
    def max_variant_words(self) -> int:
        """Word count of the longest multi-word variant."""
        return self._max_words

    def to_dict(self) -> dict[str, list[str]]:
        """Export the table as a plain dictionary."""
        return {k: list(v) for k, v in self._entries.items()}


POLICE_CODES = AliasTable(
    {
        "10-4": ["10-4", "10 4", "ten four", "ten-four", "10 four", "ten 4"],
        "10-8": ["10-8", "10 8", "ten eight", "ten-eight", "10 eight", "ten 8"],
        "10-20": ["10-20", "10 20", "ten twenty", "ten-twenty", "10 twenty", "ten 20"],
        "10-23": [
            "10-23",
            "10 23",
            "ten twenty three",
            "ten-twenty-three",
            "10 twenty three",
            "ten 23",
        ],
        "10-97": [
            "10-97",
            "10 97",
            "ten ninety seven",
            "ten-ninety-seven",
            "10 ninety seven",
            "ten 97",
        ],
        "10-99": [
            "10-99",
            "10 99",
            "ten ninety nine",
            "ten-ninety-nine",
            "10 ninety nine",
            "ten 99",
        ],
    }
)

PHONETIC_ALPHABET = AliasTable(
    {
        "A": ["alpha", "alfa"],
        "B": ["bravo", "beta"],
        "C": ["charlie", "charley"],
        "D": ["delta"],
        "E": ["echo"],
        "F": ["foxtrot", "fox trot"],
        "G": ["golf"],
        "H": ["hotel"],
        "I": ["india"],
        "J": ["juliet", "juliett"],
        "K": ["kilo"],
        "L": ["lima"],
        "M": ["mike"],
        "N": ["november"],
        "O": ["oscar"],
        "P": ["papa"],
        "Q": ["quebec"],
        "R": ["romeo"],
        "S": ["sierra"],
        "T": ["tango"],
        "U": ["uniform"],
        "V": ["victor"],
        "W": ["whiskey", "whisky"],
        "X": ["x-ray", "xray"],
        "Y": ["yankee"],
        "Z": ["zulu"],
    },
    key_transform=str.upper,
)


def get_code_variants(code: str) -> list[str]:
    """Get accepted spoken forms of a 10-code (``[code]`` if unknown)."""
    return POLICE_CODES.get_variants(code)


def get_phonetic_variants(letter: str) -> list[str]:
    """Get accepted spoken forms of a letter (``[letter]`` if unknown)."""
    return PHONETIC_ALPHABET.get_variants(letter)
