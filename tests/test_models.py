"""Tests for scoring, scenario and session models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from radio_accuracy.models import (
    AccuracyCategory,
    AccuracyResult,
    Difficulty,
    MatchRecord,
    ScenarioCategory,
    ScoringOptions,
    SpeechCategory,
    VoiceScenario,
    VoiceSessionRecord,
)


def _scenario(**overrides):
    data = {
        "id": "basic-abc",
        "title": "Basic Alpha-Bravo-Charlie",
        "instruction": "Pronounce the first three letters clearly",
        "targetText": "Alpha Bravo Charlie",
        "expectedAnswer": "Alpha Bravo Charlie",
        "category": "PHONETIC",
    }
    data.update(overrides)
    return VoiceScenario.model_validate(data)


class TestSpeechCategory:
    """Tests for SpeechCategory."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("codes", SpeechCategory.CODES),
            ("CODES", SpeechCategory.CODES),
            ("phonetic", SpeechCategory.PHONETIC),
            ("radio-protocol", SpeechCategory.RADIO_PROTOCOL),
            ("RADIO_PROTOCOL", SpeechCategory.RADIO_PROTOCOL),
            (" Phonetic ", SpeechCategory.PHONETIC),
            ("semaphore", SpeechCategory.RADIO_PROTOCOL),
            ("", SpeechCategory.RADIO_PROTOCOL),
            (None, SpeechCategory.RADIO_PROTOCOL),
            (42, SpeechCategory.RADIO_PROTOCOL),
        ],
    )
    def test_coerce(self, value, expected):
        """Any spelling maps onto a member, unknowns to radio protocol."""
        assert SpeechCategory.coerce(value) == expected


class TestScoringOptions:
    """Tests for ScoringOptions."""

    def test_defaults(self):
        """Test default options."""
        options = ScoringOptions()

        assert options.case_sensitive is False
        assert options.allow_partial_credit is True
        assert options.strict_mode is False
        assert options.category == SpeechCategory.RADIO_PROTOCOL

    def test_camel_case_aliases(self):
        """camelCase keys populate the snake_case fields."""
        options = ScoringOptions.model_validate(
            {"strictMode": True, "allowPartialCredit": False, "caseSensitive": True}
        )

        assert options.strict_mode is True
        assert options.allow_partial_credit is False
        assert options.case_sensitive is True

    def test_unknown_category_coerced(self):
        """Unknown categories are coerced, not rejected."""
        assert ScoringOptions(category="morse").category == SpeechCategory.RADIO_PROTOCOL

    def test_frozen(self):
        """Options are immutable."""
        options = ScoringOptions()
        with pytest.raises(ValidationError):
            options.strict_mode = True


class TestAccuracyResult:
    """Tests for AccuracyResult."""

    def test_counts(self):
        """Convenience properties count matches."""
        result = AccuracyResult(
            score=50,
            matches=[
                MatchRecord(expected="a", actual="alpha", match=True, similarity=100),
                MatchRecord(expected="b", actual="", match=False, similarity=0),
            ],
            suggestions=[],
            category=AccuracyCategory.NEEDS_IMPROVEMENT,
        )

        assert result.expected_token_count == 2
        assert result.perfect_matches == 1
        assert [m.expected for m in result.mismatches] == ["b"]

    def test_score_range(self):
        """Scores outside 0-100 are rejected."""
        with pytest.raises(ValidationError):
            AccuracyResult(score=101, category=AccuracyCategory.EXCELLENT)

    def test_at_most_three_suggestions(self):
        """A result holds no more than three suggestions."""
        with pytest.raises(ValidationError):
            AccuracyResult(
                score=0,
                suggestions=["one", "two", "three", "four"],
                category=AccuracyCategory.POOR,
            )

    def test_similarity_range(self):
        """Similarity outside 0-100 is rejected."""
        with pytest.raises(ValidationError):
            MatchRecord(expected="a", actual="b", match=False, similarity=-1)


class TestVoiceScenario:
    """Tests for VoiceScenario."""

    def test_camel_case_keys(self):
        """Exported scenario keys are accepted."""
        scenario = _scenario(estimatedDuration=15)

        assert scenario.target_text == "Alpha Bravo Charlie"
        assert scenario.expected_answer == "Alpha Bravo Charlie"
        assert scenario.estimated_duration == 15
        assert scenario.difficulty == Difficulty.EASY

    def test_speech_category(self):
        """Scenario categories map onto scoring categories."""
        assert _scenario(category="PHONETIC").speech_category == SpeechCategory.PHONETIC
        assert _scenario(category="CODES").speech_category == SpeechCategory.CODES
        assert (
            _scenario(category="RADIO_PROTOCOL").speech_category
            == SpeechCategory.RADIO_PROTOCOL
        )
        assert ScenarioCategory.CODES.speech_category == SpeechCategory.CODES

    def test_title_too_short(self):
        """Titles need at least five characters."""
        with pytest.raises(ValidationError):
            _scenario(title="ABC")

    def test_instruction_too_short(self):
        """Instructions need at least ten characters."""
        with pytest.raises(ValidationError):
            _scenario(instruction="Say it")

    def test_expected_answer_too_long(self):
        """Expected answers are capped at 500 characters."""
        with pytest.raises(ValidationError):
            _scenario(expectedAnswer="a" * 501)

    @pytest.mark.parametrize("duration", [4, 301])
    def test_duration_range(self, duration):
        """Durations must be 5-300 seconds."""
        with pytest.raises(ValidationError):
            _scenario(estimatedDuration=duration)

    def test_unknown_category(self):
        """Scenario categories are strict."""
        with pytest.raises(ValidationError):
            _scenario(category="MORSE")


class TestVoiceSessionRecord:
    """Tests for VoiceSessionRecord."""

    def _result(self):
        return AccuracyResult(
            score=63,
            matches=[
                MatchRecord(expected="unit", actual="unit", match=True, similarity=100),
                MatchRecord(expected="twelve", actual="twelf", match=False, similarity=66.6667),
            ],
            suggestions=['"twelve" was partially recognized. Check your pronunciation.'],
            category=AccuracyCategory.NEEDS_IMPROVEMENT,
        )

    def test_empty_speech_rejected(self):
        """A session needs a transcript."""
        with pytest.raises(ValidationError):
            VoiceSessionRecord(scenario_id="s1", user_speech="", accuracy=self._result())

    def test_negative_duration_rejected(self):
        """Durations cannot be negative."""
        with pytest.raises(ValidationError):
            VoiceSessionRecord(
                scenario_id="s1", user_speech="unit twelf", accuracy=self._result(), duration=-1
            )

    def test_default_timestamp_is_utc(self):
        """Timestamps default to now in UTC."""
        record = VoiceSessionRecord(scenario_id="s1", user_speech="x", accuracy=self._result())
        assert record.timestamp.tzinfo is not None

    def test_to_payload(self):
        """Payload uses the session endpoint's shape."""
        record = VoiceSessionRecord(
            scenario_id="traffic-stop-backup",
            user_speech="unit twelf",
            accuracy=self._result(),
            duration=4.5,
            timestamp=datetime(2024, 3, 1, 12, 30, 5, 123456, tzinfo=timezone.utc),
        )

        payload = record.to_payload()

        assert payload["scenarioId"] == "traffic-stop-backup"
        assert payload["userSpeech"] == "unit twelf"
        assert payload["duration"] == 4.5
        assert payload["timestamp"] == "2024-03-01T12:30:05.123Z"
        assert payload["accuracy"]["score"] == 63
        assert payload["accuracy"]["category"] == "NEEDS_IMPROVEMENT"
        assert payload["accuracy"]["matches"][0]["similarity"] == 1.0
        assert payload["accuracy"]["matches"][1]["similarity"] == 0.6667
        assert len(payload["accuracy"]["suggestions"]) == 1

    def test_payload_naive_timestamp_treated_as_utc(self):
        """Naive timestamps are taken to be UTC."""
        record = VoiceSessionRecord(
            scenario_id="s1",
            user_speech="x",
            accuracy=self._result(),
            timestamp=datetime(2024, 1, 2, 3, 4, 5),
        )
        assert record.to_payload()["timestamp"] == "2024-01-02T03:04:05.000Z"
