"""Batch delivery domain entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class DeliveryStatus(str, Enum):
    """Per-item batch delivery outcome status."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class BatchEntry:
    """One serialized record waiting in a producer buffer."""

    entry_id: str
    key: str | None
    body: str


@dataclass(frozen=True)
class DeliveryOutcome:
    """Outcome of transmitting one batch entry."""

    entry_id: str
    status: DeliveryStatus
    error_message: str | None

    @staticmethod
    def sent(entry_id: str) -> DeliveryOutcome:
        return DeliveryOutcome(entry_id=entry_id, status=DeliveryStatus.SENT, error_message=None)

    @staticmethod
    def failed(entry_id: str, error: Exception | str) -> DeliveryOutcome:
        return DeliveryOutcome(
            entry_id=entry_id,
            status=DeliveryStatus.FAILED,
            error_message=str(error),
        )

    @staticmethod
    def skipped(entry_id: str) -> DeliveryOutcome:
        return DeliveryOutcome(
            entry_id=entry_id, status=DeliveryStatus.SKIPPED, error_message=None
        )


@dataclass(frozen=True)
class BatchReport:
    """Outcomes of one flush, in batch order."""

    outcomes: tuple[DeliveryOutcome, ...] = ()

    @classmethod
    def of(cls, outcomes: Sequence[DeliveryOutcome]) -> BatchReport:
        return cls(outcomes=tuple(outcomes))

    @property
    def sent(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == DeliveryStatus.SENT)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == DeliveryStatus.FAILED)

    def __len__(self) -> int:
        return len(self.outcomes)
