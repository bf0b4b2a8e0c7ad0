"""Transport contract used by the batch producer, plus a no-op dry run transport."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from .delivery_outcomes import BatchEntry, DeliveryOutcome

logger = logging.getLogger(__name__)


class BatchTransport(Protocol):  # pylint: disable=too-few-public-methods
    """Sends one batch per call and reports one outcome per entry, in order."""

    def send_batch(self, entries: Sequence[BatchEntry]) -> Sequence[DeliveryOutcome]: ...


class DryRunTransport:  # pylint: disable=too-few-public-methods
    """Transport that performs no I/O and reports every entry as skipped."""

    def send_batch(self, entries: Sequence[BatchEntry]) -> list[DeliveryOutcome]:
        logger.debug("Dry run: skipping batch of %d entries", len(entries))
        return [DeliveryOutcome.skipped(entry.entry_id) for entry in entries]
