"""Data models for radio-accuracy.

This module provides Pydantic models for scoring options and results,
voice practice scenarios and session records.
"""

from __future__ import annotations

from radio_accuracy.models.result import (
    AccuracyCategory,
    AccuracyResult,
    MatchRecord,
    ScoringOptions,
    SpeechCategory,
)
from radio_accuracy.models.scenario import Difficulty, ScenarioCategory, VoiceScenario
from radio_accuracy.models.session import VoiceSessionRecord

__all__ = [
    # Scoring models
    "AccuracyCategory",
    "AccuracyResult",
    "MatchRecord",
    "ScoringOptions",
    "SpeechCategory",
    # Scenario models
    "Difficulty",
    "ScenarioCategory",
    "VoiceScenario",
    # Session models
    "VoiceSessionRecord",
]
