"""Tests for text normalization, similarity and alias tables."""

import pytest

from radio_accuracy.vocabulary import (
    PHONETIC_ALPHABET,
    POLICE_CODES,
    AliasTable,
    get_code_variants,
    get_phonetic_variants,
    levenshtein_distance,
    normalize_text,
    similarity,
)


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_lowercases_and_strips_punctuation(self):
        """Punctuation goes, hyphens stay."""
        assert normalize_text("Ten-Four, Dispatch!") == "ten-four dispatch"

    def test_collapses_whitespace(self):
        """Runs of whitespace become one space and ends are trimmed."""
        assert normalize_text("  unit \t 12 \n en route  ") == "unit 12 en route"

    def test_empty(self):
        """Empty and punctuation-only input normalize to empty."""
        assert normalize_text("") == ""
        assert normalize_text("?!.") == ""

    def test_idempotent(self):
        """Normalizing twice changes nothing."""
        once = normalize_text("  X-Ray,  Yankee... ZULU ")
        assert normalize_text(once) == once


class TestLevenshteinDistance:
    """Tests for levenshtein_distance."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("", "", 0),
            ("abc", "", 3),
            ("", "abc", 3),
            ("kitten", "sitting", 3),
            ("bravo", "brave", 1),
            ("10-4", "10-4", 0),
        ],
    )
    def test_distance(self, a, b, expected):
        """Known edit distances."""
        assert levenshtein_distance(a, b) == expected

    def test_symmetric(self):
        """Distance does not depend on argument order."""
        assert levenshtein_distance("whiskey", "whisky") == levenshtein_distance("whisky", "whiskey")


class TestSimilarity:
    """Tests for similarity."""

    def test_identical(self):
        """Identical strings are 100% similar."""
        assert similarity("charlie", "charlie") == 100.0

    def test_case_insensitive(self):
        """Case differences are ignored."""
        assert similarity("ALPHA", "alpha") == 100.0

    def test_both_empty(self):
        """Two empty strings are identical."""
        assert similarity("", "") == 100.0

    def test_one_empty(self):
        """Empty against non-empty shares nothing."""
        assert similarity("", "tango") == 0.0

    def test_partial(self):
        """One edit in five characters is 80%."""
        assert similarity("bravo", "brave") == pytest.approx(80.0)

    def test_range(self):
        """Similarity stays within 0-100."""
        for a, b in [("xyz", "10-4"), ("a", "zzzzzz"), ("delta", "echo")]:
            assert 0.0 <= similarity(a, b) <= 100.0


class TestAliasTable:
    """Tests for AliasTable."""

    def test_get_variants_known(self):
        """Known canonical tokens return their variants in order."""
        table = AliasTable({"10-4": ["10-4", "ten four"]})
        assert table.get_variants("10-4") == ["10-4", "ten four"]

    def test_get_variants_unknown_falls_back(self):
        """Unknown canonical tokens are their own sole variant."""
        table = AliasTable({"10-4": ["10-4"]})
        assert table.get_variants("10-33") == ["10-33"]

    def test_key_transform(self):
        """Lookups pass through the key transform."""
        table = AliasTable({"a": ["alpha"]}, key_transform=str.upper)

        assert "a" in table
        assert "A" in table
        assert table["a"] == ("alpha",)

    def test_read_only(self):
        """Tables cannot be modified."""
        with pytest.raises(TypeError):
            POLICE_CODES["10-4"] = ("nope",)  # type: ignore[index]

    def test_get_canonical(self):
        """Spoken forms resolve to their canonical token."""
        assert POLICE_CODES.get_canonical("Ten-Four") == "10-4"
        assert POLICE_CODES.get_canonical("10 20") == "10-20"
        assert POLICE_CODES.get_canonical("10-4") == "10-4"
        assert POLICE_CODES.get_canonical("roger") is None

    def test_multiword_variants(self):
        """Multi-word variants are collected normalized."""
        assert "ten four" in POLICE_CODES.multiword_variants
        assert "ten ninety nine" in POLICE_CODES.multiword_variants
        assert "fox trot" in PHONETIC_ALPHABET.multiword_variants
        assert POLICE_CODES.max_variant_words == 3

    def test_to_dict(self):
        """Export yields plain lists."""
        data = PHONETIC_ALPHABET.to_dict()
        assert data["W"] == ["whiskey", "whisky"]


class TestBuiltinTables:
    """Tests for the shipped alias tables."""

    def test_police_codes(self):
        """Six codes, six spoken forms each, canonical form first."""
        assert POLICE_CODES.get_all_terms() == ["10-4", "10-8", "10-20", "10-23", "10-97", "10-99"]
        for code in POLICE_CODES:
            variants = POLICE_CODES.get_variants(code)
            assert len(variants) == 6
            assert variants[0] == code

    def test_phonetic_alphabet_complete(self):
        """Every letter A-Z has at least one word."""
        assert len(PHONETIC_ALPHABET) == 26
        assert PHONETIC_ALPHABET.get_all_terms()[0] == "A"
        assert PHONETIC_ALPHABET.get_all_terms()[-1] == "Z"

    def test_phonetic_synonyms(self):
        """Accepted alternates are present."""
        assert get_phonetic_variants("B") == ["bravo", "beta"]
        assert get_phonetic_variants("F") == ["foxtrot", "fox trot"]
        assert get_phonetic_variants("X") == ["x-ray", "xray"]

    def test_phonetic_lowercase_lookup(self):
        """Lowercase letters resolve too."""
        assert get_phonetic_variants("w") == ["whiskey", "whisky"]

    def test_code_variants(self):
        """Code variants include digit and word forms."""
        variants = get_code_variants("10-4")
        assert "ten four" in variants
        assert "ten-four" in variants
        assert "10 4" in variants

    def test_unknown_fallbacks(self):
        """Unknown keys fall back to themselves."""
        assert get_code_variants("10-33") == ["10-33"]
        assert get_phonetic_variants("7") == ["7"]
