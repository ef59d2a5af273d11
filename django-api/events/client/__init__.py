from events.client.status_poller import (
    EventStatusClient,
    PollOutcome,
    PollResult,
    StatusReconciliationPoller,
    StatusUnavailableError,
)

__all__ = [
    "EventStatusClient",
    "PollOutcome",
    "PollResult",
    "StatusReconciliationPoller",
    "StatusUnavailableError",
]
