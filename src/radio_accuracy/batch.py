"""Batch scoring of recorded attempts.

Scores a list of transcripts in one run with:
- Attempts given directly (expected answer + category) or by scenario id
- Failure handling that doesn't stop the batch
- Summary report generation
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from radio_accuracy.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from radio_accuracy.errors import ErrorContext, RadioAccuracyError, ResourceError, ValidationError
from radio_accuracy.logging import get_logger, log_operation_complete, log_operation_start
from radio_accuracy.models import AccuracyCategory, SpeechCategory
from radio_accuracy.scenarios import ScenarioCatalog
from radio_accuracy.scoring import compute_accuracy, is_likely_correct
from radio_accuracy.storage import NotFoundError, StorageError, atomic_write_json, read_json

logger = get_logger(__name__)


class AttemptStatus(str, Enum):
    """Status of an attempt in the batch."""

    COMPLETED = "completed"
    FAILED = "failed"


class AttemptInput(BaseModel):
    """One attempt as read from a batch file.

    Either ``expected_answer`` or ``scenario_id`` must be present. When both
    are given the explicit expected answer wins and the scenario only
    supplies the category.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | int | None = None
    transcript: str
    expected_answer: str | None = Field(default=None, alias="expectedAnswer")
    category: str | None = None
    scenario_id: str | None = Field(default=None, alias="scenarioId")
    strict_mode: bool = Field(default=False, alias="strictMode")
    allow_partial_credit: bool = Field(default=True, alias="allowPartialCredit")

    @model_validator(mode="after")
    def _check_target(self) -> "AttemptInput":
        if self.expected_answer is None and self.scenario_id is None:
            raise ValueError("attempt needs expected_answer or scenario_id")
        return self


@dataclass
class AttemptResult:
    """Result of scoring a single attempt.

    Attributes:
        attempt_id: Attempt id from the file, or its position
        transcript: Spoken transcript
        expected_answer: Phrase it was scored against
        category: Speech category used for scoring
        scenario_id: Scenario the attempt belongs to, if any
        status: Processing status
        score: Score 0-100 (None if failed)
        accuracy_category: Accuracy label for the score
        likely_correct: Whether the score clears the likely-correct cutoff
        suggestions: Improvement hints
        error_message: Error message if failed
    """

    attempt_id: str
    transcript: str = ""
    expected_answer: str = ""
    category: str = ""
    scenario_id: str | None = None
    status: AttemptStatus = AttemptStatus.COMPLETED
    score: int | None = None
    accuracy_category: str = ""
    likely_correct: bool = False
    suggestions: list[str] = field(default_factory=list)
    error_message: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "attempt_id": self.attempt_id,
            "transcript": self.transcript,
            "expected_answer": self.expected_answer,
            "category": self.category,
            "scenario_id": self.scenario_id,
            "status": self.status.value,
            "score": self.score,
            "accuracy_category": self.accuracy_category,
            "likely_correct": self.likely_correct,
            "suggestions": self.suggestions,
            "error_message": self.error_message,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttemptResult":
        """Create from dictionary."""
        return cls(
            attempt_id=data["attempt_id"],
            transcript=data.get("transcript", ""),
            expected_answer=data.get("expected_answer", ""),
            category=data.get("category", ""),
            scenario_id=data.get("scenario_id"),
            status=AttemptStatus(data.get("status", "completed")),
            score=data.get("score"),
            accuracy_category=data.get("accuracy_category", ""),
            likely_correct=data.get("likely_correct", False),
            suggestions=data.get("suggestions", []),
            error_message=data.get("error_message", ""),
        )


@dataclass
class BatchReport:
    """Results of a batch run and their summary statistics."""

    results: list[AttemptResult] = field(default_factory=list)
    created_at: str = ""

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now().isoformat()

    @property
    def total_attempts(self) -> int:
        """Total number of attempts in the batch."""
        return len(self.results)

    @property
    def completed(self) -> list[AttemptResult]:
        """Attempts that were scored."""
        return [r for r in self.results if r.status == AttemptStatus.COMPLETED]

    @property
    def failed(self) -> list[AttemptResult]:
        """Attempts that could not be scored."""
        return [r for r in self.results if r.status == AttemptStatus.FAILED]

    @property
    def mean_score(self) -> float | None:
        """Mean score over completed attempts (None if there are none)."""
        scores = [r.score for r in self.completed if r.score is not None]
        if not scores:
            return None
        return sum(scores) / len(scores)

    @property
    def likely_correct_count(self) -> int:
        """Number of completed attempts that are likely correct."""
        return sum(1 for r in self.completed if r.likely_correct)

    @property
    def category_distribution(self) -> dict[str, int]:
        """Count of completed attempts per accuracy category."""
        counts = Counter(r.accuracy_category for r in self.completed)
        return {c.value: counts.get(c.value, 0) for c in AccuracyCategory}

    def get_summary(self) -> dict:
        """Get batch summary statistics."""
        mean = self.mean_score
        return {
            "total_attempts": self.total_attempts,
            "completed": len(self.completed),
            "failed": len(self.failed),
            "mean_score": round(mean, 1) if mean is not None else None,
            "likely_correct": self.likely_correct_count,
            "categories": self.category_distribution,
            "created_at": self.created_at,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "summary": self.get_summary(),
            "results": [r.to_dict() for r in self.results],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BatchReport":
        """Create from dictionary."""
        return cls(
            results=[AttemptResult.from_dict(r) for r in data.get("results", [])],
            created_at=data.get("summary", {}).get("created_at", ""),
        )

    def save(self, path: Path) -> Path:
        """Write the report as JSON with atomic write."""
        atomic_write_json(path, self.to_dict())
        return path


def load_attempts(path: Path | str) -> list[dict]:
    """Load attempts from a JSON batch file.

    The file holds a list of attempts or an object with an ``attempts``
    list. Entries are validated one at a time during scoring, so a bad
    entry fails on its own.

    Raises:
        ResourceError: If the file doesn't exist or isn't valid JSON
        ValidationError: If the file does not hold a list of attempts
    """
    path = Path(path)
    try:
        data = read_json(path)
    except NotFoundError as e:
        raise ResourceError(str(e), context={"path": str(path)}) from e
    except StorageError as e:
        raise ResourceError(str(e), context={"path": str(path)}) from e

    if isinstance(data, dict):
        data = data.get("attempts")
    if not isinstance(data, list):
        raise ValidationError(
            "Batch file must hold a list of attempts",
            context={"path": str(path)},
        )
    return data


def score_attempt(
    data: Any,
    attempt_id: str,
    catalog: ScenarioCatalog | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> AttemptResult:
    """Score one attempt.

    Args:
        data: Raw attempt mapping
        attempt_id: Id to report when the attempt carries none
        catalog: Catalog used to resolve ``scenario_id``
        config: Scoring configuration

    Returns:
        Completed AttemptResult

    Raises:
        ValidationError: If the attempt is malformed or names an unknown scenario
    """
    if not isinstance(data, dict):
        raise ValidationError("Attempt must be a JSON object", context={"attempt": attempt_id})

    attempt = AttemptInput.model_validate(data)
    if attempt.id is not None:
        attempt_id = str(attempt.id)

    expected_answer = attempt.expected_answer
    category = SpeechCategory.coerce(attempt.category)
    if attempt.scenario_id is not None:
        if catalog is None:
            raise ValidationError(
                "Attempt names a scenario but no catalog is loaded",
                context={"attempt": attempt_id, "scenario_id": attempt.scenario_id},
            )
        scenario = catalog.get(attempt.scenario_id)
        if expected_answer is None:
            expected_answer = scenario.expected_answer
        if attempt.category is None:
            category = scenario.speech_category

    result = compute_accuracy(
        attempt.transcript,
        expected_answer,
        category=category,
        strict_mode=attempt.strict_mode,
        allow_partial_credit=attempt.allow_partial_credit,
        config=config,
    )

    return AttemptResult(
        attempt_id=attempt_id,
        transcript=attempt.transcript,
        expected_answer=expected_answer,
        category=category.value,
        scenario_id=attempt.scenario_id,
        status=AttemptStatus.COMPLETED,
        score=result.score,
        accuracy_category=result.category.value,
        likely_correct=is_likely_correct(result, config.likely_correct_threshold),
        suggestions=result.suggestions,
    )


def score_attempts(
    attempts: list[Any],
    catalog: ScenarioCatalog | None = None,
    config: ScoringConfig | None = None,
    progress_callback: Callable[[int, int, str], None] | None = None,
) -> BatchReport:
    """Score every attempt in a batch.

    A malformed attempt is recorded as failed and the batch continues.

    Args:
        attempts: Raw attempt mappings
        catalog: Catalog used to resolve scenario ids
        config: Scoring configuration
        progress_callback: Optional callback (current, total, attempt_id)

    Returns:
        BatchReport with one result per attempt, in input order
    """
    config = config or DEFAULT_SCORING_CONFIG
    report = BatchReport()
    total = len(attempts)

    log_operation_start(logger, "batch scoring", attempts=total)

    for index, data in enumerate(attempts):
        fallback_id = str(index + 1)
        if isinstance(data, dict) and data.get("id") is not None:
            fallback_id = str(data["id"])

        try:
            with ErrorContext("score attempt", context={"attempt": fallback_id}):
                result = score_attempt(data, fallback_id, catalog, config)
        except (RadioAccuracyError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            message = e.message if isinstance(e, RadioAccuracyError) else str(e)
            result = AttemptResult(
                attempt_id=fallback_id,
                transcript=str(data.get("transcript", "")) if isinstance(data, dict) else "",
                status=AttemptStatus.FAILED,
                error_message=message,
            )

        report.results.append(result)
        if progress_callback:
            progress_callback(index + 1, total, result.attempt_id)

    log_operation_complete(
        logger,
        "batch scoring",
        completed=len(report.completed),
        failed=len(report.failed),
    )
    return report
