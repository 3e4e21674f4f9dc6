"""Voice practice session record.

Wraps one scored attempt so the caller can hand it to whatever stores
practice sessions. Storage itself happens elsewhere.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from radio_accuracy.models.result import AccuracyResult


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VoiceSessionRecord(BaseModel):
    """One scored voice practice attempt."""

    scenario_id: str
    user_speech: str = Field(min_length=1)
    accuracy: AccuracyResult
    duration: float = Field(default=0.0, ge=0)  # Seconds
    timestamp: datetime = Field(default_factory=_utc_now)

    def to_payload(self) -> dict[str, Any]:
        """Convert to the session endpoint's request body.

        The endpoint expects camelCase keys, an upper-case accuracy
        category ("NEEDS_IMPROVEMENT") and per-token similarity on a
        0-1 scale rather than the scorer's 0-100.

        Returns:
            JSON-serializable payload
        """
        timestamp = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        timestamp = timestamp.astimezone(timezone.utc)

        return {
            "scenarioId": self.scenario_id,
            "userSpeech": self.user_speech,
            "accuracy": {
                "score": self.accuracy.score,
                "category": self.accuracy.category.value.upper().replace("-", "_"),
                "matches": [
                    {
                        "expected": m.expected,
                        "actual": m.actual,
                        "match": m.match,
                        "similarity": round(m.similarity / 100, 4),
                    }
                    for m in self.accuracy.matches
                ],
                "suggestions": list(self.accuracy.suggestions),
            },
            "duration": self.duration,
            "timestamp": timestamp.strftime("%Y-%m-%dT%H:%M:%S.")
            + f"{timestamp.microsecond // 1000:03d}Z",
        }
