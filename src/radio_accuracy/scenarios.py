"""Voice practice scenarios.

Built-in practice prompts, a catalog for looking them up, and helpers
that score a transcript against a scenario and wrap the outcome in a
session record.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from radio_accuracy.config import ScoringConfig
from radio_accuracy.errors import ResourceError, ValidationError
from radio_accuracy.logging import get_logger
from radio_accuracy.models import (
    AccuracyResult,
    Difficulty,
    ScenarioCategory,
    VoiceScenario,
    VoiceSessionRecord,
)
from radio_accuracy.scoring import compute_accuracy
from radio_accuracy.storage import NotFoundError, StorageError, read_json

logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 100

_BUILTIN_SCENARIOS: tuple[dict, ...] = (
    {
        "id": "basic-abc",
        "title": "Basic Alpha-Bravo-Charlie",
        "instruction": "Pronounce the first three letters of the phonetic alphabet clearly",
        "targetText": "Alpha Bravo Charlie",
        "expectedAnswer": "Alpha Bravo Charlie",
        "category": "PHONETIC",
        "difficulty": "EASY",
        "tags": ["basic", "alphabet"],
        "estimatedDuration": 15,
    },
    {
        "id": "license-plate",
        "title": "License Plate Spelling",
        "instruction": "Spell out this license plate using phonetic alphabet: ABC123",
        "targetText": "ABC123",
        "expectedAnswer": "Alpha Bravo Charlie One Two Three",
        "category": "PHONETIC",
        "difficulty": "MEDIUM",
        "tags": ["license", "mixed"],
        "estimatedDuration": 25,
    },
    {
        "id": "emergency-10-33",
        "title": "Emergency Response Code",
        "instruction": 'Clearly state "10-33" for emergency response',
        "targetText": "10-33",
        "expectedAnswer": "Ten Thirty-Three",
        "category": "CODES",
        "difficulty": "EASY",
        "tags": ["emergency", "priority"],
        "estimatedDuration": 10,
    },
    {
        "id": "traffic-stop-backup",
        "title": "Traffic Stop Protocol",
        "instruction": "Request backup using proper radio protocol",
        "targetText": "Unit 123 requesting backup at 10-20",
        "expectedAnswer": "Unit One Two Three requesting backup at Ten Twenty",
        "category": "RADIO_PROTOCOL",
        "difficulty": "MEDIUM",
        "tags": ["backup", "location"],
        "estimatedDuration": 20,
    },
    {
        "id": "phonetic-a-z",
        "title": "Complete Phonetic Sequence",
        "instruction": "Recite the full phonetic alphabet from A to Z",
        "targetText": "A through Z phonetic alphabet",
        "expectedAnswer": (
            "Alpha Bravo Charlie Delta Echo Foxtrot Golf Hotel India Juliet Kilo "
            "Lima Mike November Oscar Papa Quebec Romeo Sierra Tango Uniform Victor "
            "Whiskey X-ray Yankee Zulu"
        ),
        "category": "PHONETIC",
        "difficulty": "HARD",
        "tags": ["complete", "advanced"],
        "estimatedDuration": 60,
    },
)


def builtin_scenarios() -> list[VoiceScenario]:
    """Get the scenarios shipped with the package."""
    return [VoiceScenario.model_validate(data) for data in _BUILTIN_SCENARIOS]


class ScenarioCatalog:
    """Collection of voice scenarios indexed by id.

    Scenarios keep the order they were added in; adding a scenario whose
    id is already present replaces the earlier one.
    """

    def __init__(self, scenarios: Iterable[VoiceScenario] | None = None):
        self._scenarios: dict[str, VoiceScenario] = {}
        for scenario in scenarios or ():
            self.add(scenario)

    @classmethod
    def builtin(cls) -> "ScenarioCatalog":
        """Create a catalog holding the built-in scenarios."""
        return cls(builtin_scenarios())

    @classmethod
    def load_file(cls, path: Path | str) -> "ScenarioCatalog":
        """Load a catalog from a JSON file.

        The file holds either a list of scenarios or an object with a
        ``scenarios`` list. Keys may be snake_case or camelCase.

        Args:
            path: Path to the scenario file

        Returns:
            Catalog holding the file's scenarios

        Raises:
            ResourceError: If the file doesn't exist or isn't valid JSON
            ValidationError: If a scenario entry is invalid
        """
        path = Path(path)
        try:
            data = read_json(path)
        except NotFoundError as e:
            raise ResourceError(str(e), context={"path": str(path)}) from e
        except StorageError as e:
            raise ResourceError(str(e), context={"path": str(path)}) from e

        if isinstance(data, dict):
            data = data.get("scenarios")
        if not isinstance(data, list):
            raise ValidationError(
                "Scenario file must hold a list of scenarios",
                context={"path": str(path)},
            )

        scenarios = []
        for index, entry in enumerate(data):
            try:
                scenarios.append(VoiceScenario.model_validate(entry))
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid scenario at index {index}",
                    context={"path": str(path), "errors": "; ".join(err["msg"] for err in e.errors())},
                ) from e

        logger.info(f"Loaded {len(scenarios)} scenarios from {path}")
        return cls(scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def __iter__(self):
        return iter(self._scenarios.values())

    def __contains__(self, scenario_id: object) -> bool:
        return scenario_id in self._scenarios

    def add(self, scenario: VoiceScenario) -> None:
        """Add or replace a scenario."""
        self._scenarios[scenario.id] = scenario

    def get(self, scenario_id: str) -> VoiceScenario:
        """Get a scenario by id.

        Raises:
            ValidationError: If no scenario has this id
        """
        try:
            return self._scenarios[scenario_id]
        except KeyError:
            raise ValidationError(
                f"Unknown scenario: {scenario_id}",
                context={"available": ", ".join(self._scenarios) or "none"},
            ) from None

    def filter(
        self,
        category: ScenarioCategory | str | None = None,
        difficulty: Difficulty | str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[VoiceScenario]:
        """List scenarios matching a category and difficulty.

        Args:
            category: Only scenarios in this category
            difficulty: Only scenarios at this difficulty
            limit: Maximum number returned (capped at 100)

        Returns:
            Matching scenarios in catalog order

        Raises:
            ValidationError: If category or difficulty is not a known value
        """
        try:
            category = ScenarioCategory(category.upper()) if isinstance(category, str) else category
            difficulty = (
                Difficulty(difficulty.upper()) if isinstance(difficulty, str) else difficulty
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        limit = max(0, min(limit, MAX_LIST_LIMIT))
        matching = [
            s
            for s in self._scenarios.values()
            if (category is None or s.category == category)
            and (difficulty is None or s.difficulty == difficulty)
        ]
        return matching[:limit]


def score_scenario(
    transcript: str,
    scenario: VoiceScenario,
    strict_mode: bool = False,
    config: ScoringConfig | None = None,
) -> AccuracyResult:
    """Score a transcript against a scenario's expected answer."""
    return compute_accuracy(
        transcript,
        scenario.expected_answer,
        category=scenario.speech_category,
        strict_mode=strict_mode,
        config=config,
    )


def build_session_record(
    transcript: str,
    scenario: VoiceScenario,
    duration: float = 0.0,
    strict_mode: bool = False,
    config: ScoringConfig | None = None,
) -> VoiceSessionRecord:
    """Score a transcript and wrap the result in a session record.

    Args:
        transcript: Recognized speech
        scenario: Scenario that was practised
        duration: Length of the recording in seconds
        strict_mode: Use the strict generic-token threshold
        config: Scoring configuration

    Returns:
        VoiceSessionRecord ready to be stored

    Raises:
        ValidationError: If the transcript is empty or duration is negative
    """
    accuracy = score_scenario(transcript, scenario, strict_mode=strict_mode, config=config)
    try:
        return VoiceSessionRecord(
            scenario_id=scenario.id,
            user_speech=transcript,
            accuracy=accuracy,
            duration=duration,
        )
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid session record",
            context={"scenario_id": scenario.id, "errors": "; ".join(err["msg"] for err in e.errors())},
        ) from e
