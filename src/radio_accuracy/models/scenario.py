"""Voice practice scenario model.

A scenario is one prompt a trainee answers out loud: what to say, the
phrase it is scored against, and which vocabulary applies.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from radio_accuracy.models.result import SpeechCategory


class ScenarioCategory(str, Enum):
    """Scenario category as stored by the training application."""

    PHONETIC = "PHONETIC"
    RADIO_PROTOCOL = "RADIO_PROTOCOL"
    CODES = "CODES"

    @property
    def speech_category(self) -> SpeechCategory:
        """Scoring category used for this kind of scenario."""
        return SpeechCategory.coerce(self.value)


class Difficulty(str, Enum):
    """Scenario difficulty."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class VoiceScenario(BaseModel):
    """A voice practice scenario.

    Accepts both snake_case and the camelCase keys of exported scenario
    files ("targetText", "expectedAnswer", "estimatedDuration").
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    title: str = Field(min_length=5)
    instruction: str = Field(min_length=10)
    target_text: str = Field(max_length=500, alias="targetText")
    expected_answer: str = Field(max_length=500, alias="expectedAnswer")
    category: ScenarioCategory
    difficulty: Difficulty = Difficulty.EASY
    tags: list[str] = Field(default_factory=list)
    estimated_duration: int | None = Field(
        default=None, ge=5, le=300, alias="estimatedDuration"
    )  # Seconds

    @property
    def speech_category(self) -> SpeechCategory:
        """Scoring category for this scenario."""
        return self.category.speech_category
