# file: src/module7_consensus/events.py

"""
Decode progress events.

The orchestrator reports progress only through observers; it never
prints. LoggingObserver is the default sink.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from module1_common.results import Channel, FailureKind
from .reconciliation import Verdict

logger = logging.getLogger(__name__)


class DecodeState(str, Enum):
    IDLE = "idle"
    EXTRACTING_VISUAL = "extracting_visual"
    EXTRACTING_AUDIO = "extracting_audio"
    EXTRACTING_METADATA = "extracting_metadata"
    RECONCILED = "reconciled"
    DONE = "done"


class EventKind(str, Enum):
    STATE_CHANGED = "state_changed"
    CHANNEL_STARTED = "channel_started"
    CHANNEL_SUCCEEDED = "channel_succeeded"
    CHANNEL_FAILED = "channel_failed"
    VERDICT_COMPUTED = "verdict_computed"


@dataclass(frozen=True)
class DecodeEvent:
    """One progress notification."""

    kind: EventKind
    channel: Optional[Channel] = None
    failure: Optional[FailureKind] = None
    verdict: Optional[Verdict] = None
    state: Optional[DecodeState] = None
    detail: Optional[str] = None


class DecodeObserver:
    """Base observer; subclasses override notify()."""

    def notify(self, event: DecodeEvent) -> None:
        pass


class LoggingObserver(DecodeObserver):
    """Turns decode events into log records."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def notify(self, event: DecodeEvent) -> None:
        if event.kind == EventKind.STATE_CHANGED:
            self.log.debug(f"State -> {event.state.value}")
        elif event.kind == EventKind.CHANNEL_STARTED:
            self.log.info(f"Decoding {event.channel.value} layer...")
        elif event.kind == EventKind.CHANNEL_SUCCEEDED:
            self.log.info(f"[+] {event.channel.value.capitalize()} layer: \"{event.detail}\"")
        elif event.kind == EventKind.CHANNEL_FAILED:
            self.log.info(f"[-] {event.channel.value.capitalize()} layer: no data found ({event.failure.value})")
        elif event.kind == EventKind.VERDICT_COMPUTED:
            self.log.info(f"Verdict: {event.verdict.value}")
