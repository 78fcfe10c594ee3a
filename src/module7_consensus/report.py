# file: src/module7_consensus/report.py

"""
Decode report returned by the orchestrator.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from module1_common.results import Channel, ChannelResult
from module6_metadata_channel import MetadataRecord
from .reconciliation import Verdict


@dataclass(frozen=True)
class DecodeReport:
    """
    Outcome of one decode run.

    Attributes:
        results: ChannelResult per channel
        verdict: Cross-channel verdict
        frames_found: Frames produced by extraction
        frames_sampled: Frames the visual decoder read
        metadata_record: Informational container tags
    """

    results: Dict[Channel, ChannelResult]
    verdict: Verdict
    frames_found: int = 0
    frames_sampled: int = 0
    metadata_record: MetadataRecord = field(default_factory=MetadataRecord)

    def message(self, channel: Channel) -> Optional[str]:
        result = self.results.get(channel)
        return result.message if result is not None else None

    @property
    def visual(self) -> Optional[str]:
        return self.message(Channel.VISUAL)

    @property
    def audio(self) -> Optional[str]:
        return self.message(Channel.AUDIO)

    @property
    def metadata(self) -> Optional[str]:
        return self.message(Channel.METADATA)

    def channels_with_data(self) -> List[Channel]:
        """Channels that produced a message, in visual/audio/metadata order."""
        return [channel for channel in Channel if self.message(channel) is not None]

    @property
    def found_message(self) -> bool:
        return bool(self.channels_with_data())
