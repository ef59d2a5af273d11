"""Post-checkout status polling.

After the processor redirects the browser back, the webhook may not have
landed yet. The poller re-reads the event status a bounded number of times
and then gives up, leaving a manual re-check available. It never writes.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import requests

from events.domain import EventStatus

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 10
DEFAULT_INTERVAL_SECONDS = 2.0


class StatusUnavailableError(Exception):
    """Raised by a status fetcher when the status cannot be read."""


class PollOutcome(str, Enum):
    PUBLISHED = "published"
    PROCESSING = "processing"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class PollResult:
    outcome: PollOutcome
    status: EventStatus | None
    attempts: int


StatusFetcher = Callable[[str], EventStatus | None]


class StatusReconciliationPoller:
    """Bounded re-read loop over an event's publish status.

    `fetch_status` returns the current status, None when the event does not
    exist, or raises StatusUnavailableError.
    """

    def __init__(
        self,
        fetch_status: StatusFetcher,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        self._fetch_status = fetch_status
        self._max_retries = max_retries
        self._interval = interval
        self._sleep = sleep

    def poll(self, event_id: str) -> PollResult:
        """Read once, then re-read every `interval` while the event is a draft."""
        result = self.check_once(event_id)
        retries = 0
        while result.outcome is PollOutcome.PROCESSING and retries < self._max_retries:
            self._sleep(self._interval)
            retries += 1
            result = self._read(event_id, attempts=retries + 1)

        if result.outcome is PollOutcome.PROCESSING:
            logger.info("Event %s still draft after %d reads", event_id, result.attempts)
        return result

    def check_once(self, event_id: str) -> PollResult:
        """Single read, used for the manual re-check."""
        return self._read(event_id, attempts=1)

    def _read(self, event_id: str, *, attempts: int) -> PollResult:
        try:
            status = self._fetch_status(event_id)
        except StatusUnavailableError:
            logger.warning("Status read for event %s failed", event_id)
            return PollResult(outcome=PollOutcome.UNAVAILABLE, status=None, attempts=attempts)

        if status is None:
            return PollResult(outcome=PollOutcome.NOT_FOUND, status=None, attempts=attempts)
        if status is EventStatus.PUBLISHED:
            return PollResult(outcome=PollOutcome.PUBLISHED, status=status, attempts=attempts)
        return PollResult(outcome=PollOutcome.PROCESSING, status=status, attempts=attempts)


class EventStatusClient:
    """Reads event status from the HTTP API with a bearer token."""

    def __init__(
        self,
        base_url: str,
        access_token: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_status(self, event_id: str) -> EventStatus | None:
        url = f"{self._base_url}/api/events/{event_id}/status"
        try:
            response = self._session.get(
                url,
                headers={"Authorization": f"Bearer {self._access_token}"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise StatusUnavailableError(str(e)) from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise StatusUnavailableError(f"Unexpected status code {response.status_code}")

        try:
            return EventStatus(response.json()["status"])
        except (ValueError, KeyError, TypeError) as e:
            raise StatusUnavailableError("Malformed status response") from e
