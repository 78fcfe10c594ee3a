# file: src/module7_consensus/orchestrator.py

"""
Decode Orchestrator

Runs the three channel decoders once each and reconciles their results.

Pipeline:
    Video file
    → Frame extraction (ffmpeg)      → VisualChannelDecoder
    → Audio extraction (ffmpeg)      → AudioChannelDecoder   (skipped if no audio track)
    → Metadata probe (ffprobe)       → MetadataChannelDecoder
    → Reconciliation                 → DecodeReport

State sequence (identical in sequential and parallel mode):
    IDLE → EXTRACTING_VISUAL → EXTRACTING_AUDIO → EXTRACTING_METADATA
         → RECONCILED → DONE

A failure in one channel never affects the others. Only a missing or
unreadable input file aborts the run.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from module1_common.config import DecoderConfig
from module1_common.errors import ExtractionUnavailableError
from module1_common.results import Channel, ChannelResult, FailureKind
from module2_media_io import MediaWorkspace, FrameExtractor, AudioExtractor, MetadataProbe
from module4_visual_channel import VisualChannelDecoder
from module5_audio_channel import AudioChannelDecoder
from module6_metadata_channel import MetadataChannelDecoder, MetadataRecord
from .events import DecodeEvent, DecodeObserver, DecodeState, EventKind, LoggingObserver
from .reconciliation import reconcile
from .report import DecodeReport

logger = logging.getLogger(__name__)

# A channel task returns its result plus report extras
ChannelTask = Callable[[], Tuple[ChannelResult, Dict[str, Any]]]


_CHANNEL_STATES = {
    Channel.VISUAL: DecodeState.EXTRACTING_VISUAL,
    Channel.AUDIO: DecodeState.EXTRACTING_AUDIO,
    Channel.METADATA: DecodeState.EXTRACTING_METADATA,
}


class DecodeOrchestrator:
    """
    Main decoder entry point.

    Media collaborators can be replaced (e.g. in tests) by any object with
    the same extract()/probe() methods.
    """

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        frame_extractor: Optional[FrameExtractor] = None,
        audio_extractor: Optional[AudioExtractor] = None,
        metadata_probe: Optional[MetadataProbe] = None,
        observers: Optional[Iterable[DecodeObserver]] = None
    ):
        """
        Initialize orchestrator.

        Args:
            config: Configuration snapshot used for every run (defaults if None)
            frame_extractor: Frame extraction service
            audio_extractor: Audio extraction service
            metadata_probe: Metadata probe service
            observers: Event sinks (LoggingObserver if None)
        """
        self.config = config or DecoderConfig()

        self.frame_extractor = frame_extractor or FrameExtractor(self.config.media)
        self.audio_extractor = audio_extractor or AudioExtractor(
            self.config.media, sample_rate=self.config.audio.sample_rate
        )
        self.metadata_probe = metadata_probe or MetadataProbe(self.config.media)

        self.visual_decoder = VisualChannelDecoder(self.config.visual)
        self.audio_decoder = AudioChannelDecoder(self.config.audio)
        self.metadata_decoder = MetadataChannelDecoder(self.config.metadata)

        self.observers: List[DecodeObserver] = (
            list(observers) if observers is not None else [LoggingObserver()]
        )
        self.state = DecodeState.IDLE

    def add_observer(self, observer: DecodeObserver) -> None:
        self.observers.append(observer)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def decode(self, video_path: str) -> DecodeReport:
        """
        Decode all three channels of a video file.

        Args:
            video_path: Input video

        Returns:
            DecodeReport

        Raises:
            FileNotFoundError: Input file does not exist
            PermissionError: Input file is not readable
        """
        video_path = str(video_path)
        if not os.path.isfile(video_path):
            raise FileNotFoundError(f"Video file not found: {video_path}")
        if not os.access(video_path, os.R_OK):
            raise PermissionError(f"Video file is not readable: {video_path}")

        media = self.config.media
        with MediaWorkspace(base_dir=media.work_dir, keep=media.keep_workspace) as workspace:
            tasks = {
                Channel.VISUAL: lambda: self._visual_from_video(video_path, workspace.frames_dir),
                Channel.AUDIO: lambda: self._audio_from_video(video_path),
                Channel.METADATA: lambda: self._metadata_from_video(video_path),
            }
            return self._run(tasks)

    def decode_inputs(
        self,
        frames: Sequence[bytes],
        pcm: Optional[bytes] = None,
        tags: Optional[Dict[str, str]] = None
    ) -> DecodeReport:
        """
        Decode already-extracted channel inputs.

        Args:
            frames: Ordered frame buffers
            pcm: Mono s16le PCM (None = no audio track)
            tags: Container tags (None = no tags)

        Returns:
            DecodeReport
        """
        tasks = {
            Channel.VISUAL: lambda: self._visual_from_frames(frames),
            Channel.AUDIO: lambda: self._audio_from_pcm(pcm),
            Channel.METADATA: lambda: self._metadata_from_tags(tags),
        }
        return self._run(tasks)

    # ------------------------------------------------------------------
    # Channel tasks
    # ------------------------------------------------------------------
    def _visual_from_video(self, video_path: str, frames_dir: str):
        try:
            frames = self.frame_extractor.extract(video_path, frames_dir)
        except ExtractionUnavailableError as e:
            return _unavailable(Channel.VISUAL, e), {}
        return self._visual_from_frames(frames)

    def _visual_from_frames(self, frames: Sequence[bytes]):
        extras = {
            'frames_found': len(frames),
            'frames_sampled': len(self.visual_decoder.sample_frames(frames)),
        }
        return self.visual_decoder.decode(frames), extras

    def _audio_from_video(self, video_path: str):
        try:
            pcm = self.audio_extractor.extract(video_path)
        except ExtractionUnavailableError as e:
            return _unavailable(Channel.AUDIO, e), {}
        return self._audio_from_pcm(pcm)

    def _audio_from_pcm(self, pcm: Optional[bytes]):
        if pcm is None:
            return ChannelResult.failed(
                Channel.AUDIO, FailureKind.EXTRACTION_UNAVAILABLE, detail="No audio track"
            ), {}
        return self.audio_decoder.decode(pcm), {}

    def _metadata_from_video(self, video_path: str):
        try:
            tags = self.metadata_probe.probe(video_path)
        except ExtractionUnavailableError as e:
            return _unavailable(Channel.METADATA, e), {}
        return self._metadata_from_tags(tags)

    def _metadata_from_tags(self, tags: Optional[Dict[str, str]]):
        extras = {'metadata_record': MetadataRecord.from_tags(tags)}
        return self.metadata_decoder.decode(tags), extras

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def _run(self, tasks: Dict[Channel, ChannelTask]) -> DecodeReport:
        self._set_state(DecodeState.IDLE)

        if self.config.orchestration.parallel:
            outcomes = self._run_parallel(tasks)
        else:
            outcomes = self._run_sequential(tasks)

        results = {channel: result for channel, (result, _) in outcomes.items()}
        extras: Dict[str, Any] = {}
        for _, channel_extras in outcomes.values():
            extras.update(channel_extras)

        verdict = reconcile(
            results[Channel.VISUAL].message,
            results[Channel.AUDIO].message,
            results[Channel.METADATA].message,
        )
        self._set_state(DecodeState.RECONCILED)
        self._emit(DecodeEvent(EventKind.VERDICT_COMPUTED, verdict=verdict))

        report = DecodeReport(results=results, verdict=verdict, **extras)
        self._set_state(DecodeState.DONE)
        return report

    def _run_sequential(self, tasks: Dict[Channel, ChannelTask]):
        outcomes = {}
        for channel in Channel:
            self._start_channel(channel)
            outcomes[channel] = tasks[channel]()
            self._finish_channel(outcomes[channel][0])
        return outcomes

    def _run_parallel(self, tasks: Dict[Channel, ChannelTask]):
        outcomes = {}
        executor = ThreadPoolExecutor(
            max_workers=self.config.orchestration.max_workers,
            thread_name_prefix="stegvid",
        )
        try:
            futures = {channel: executor.submit(tasks[channel]) for channel in Channel}

            # Collect in fixed order so the state sequence matches sequential mode
            for channel in Channel:
                self._start_channel(channel)
                outcomes[channel] = futures[channel].result()
                self._finish_channel(outcomes[channel][0])
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise

        executor.shutdown(wait=True)
        return outcomes

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _set_state(self, state: DecodeState) -> None:
        self.state = state
        self._emit(DecodeEvent(EventKind.STATE_CHANGED, state=state))

    def _start_channel(self, channel: Channel) -> None:
        self._set_state(_CHANNEL_STATES[channel])
        self._emit(DecodeEvent(EventKind.CHANNEL_STARTED, channel=channel))

    def _finish_channel(self, result: ChannelResult) -> None:
        if result.ok:
            self._emit(DecodeEvent(EventKind.CHANNEL_SUCCEEDED, channel=result.channel, detail=result.message))
        else:
            self._emit(DecodeEvent(
                EventKind.CHANNEL_FAILED,
                channel=result.channel,
                failure=result.failure,
                detail=result.detail,
            ))

    def _emit(self, event: DecodeEvent) -> None:
        for observer in self.observers:
            observer.notify(event)


def _unavailable(channel: Channel, error: ExtractionUnavailableError) -> ChannelResult:
    logger.debug(f"{channel.value.capitalize()} layer: extraction unavailable: {error}")
    return ChannelResult.failed(channel, error.kind, detail=str(error))
