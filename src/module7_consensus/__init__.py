# file: src/module7_consensus/__init__.py

"""
Module 7: Consensus

Runs the visual, audio and metadata decoders once each and decides
whether their messages agree.

Public API:
    - DecodeOrchestrator(config).decode(video_path) -> DecodeReport
    - DecodeOrchestrator(config).decode_inputs(frames, pcm, tags) -> DecodeReport
    - reconcile(visual, audio, metadata) -> Verdict
"""

from .reconciliation import Verdict, reconcile
from .events import DecodeEvent, DecodeObserver, DecodeState, EventKind, LoggingObserver
from .report import DecodeReport
from .orchestrator import DecodeOrchestrator

__all__ = [
    'Verdict',
    'reconcile',
    'DecodeEvent',
    'DecodeObserver',
    'EventKind',
    'LoggingObserver',
    'DecodeReport',
    'DecodeOrchestrator',
    'DecodeState',
]

__version__ = '1.0.0'
