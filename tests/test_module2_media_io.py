# file: tests/test_module2_media_io.py

"""
Unit tests for Module 2: Media I/O.

External tools are replaced by fakes; ffmpeg is never invoked.
"""

import json
import os
import subprocess
import sys

import pytest

from module1_common import ExtractionUnavailableError, FailureKind, MediaConfig
from module2_media_io import (
    MediaWorkspace,
    FrameExtractor,
    FrameSequence,
    AudioExtractor,
    MetadataProbe,
    parse_format_tags,
    resolve_binary,
    run_tool,
)
from module3_bit_framing.testing_utils import frame_message
from module4_visual_channel import VisualChannelDecoder
from module4_visual_channel.testing_utils import build_frame_set
import module2_media_io.frame_extractor as frame_extractor_module
import module2_media_io.audio_extractor as audio_extractor_module
import module2_media_io.metadata_probe as metadata_probe_module


def write_fake_tool(directory, name, stdout_bytes):
    """Create an executable that prints fixed bytes and exits 0."""
    script = directory / name
    script.write_text(
        f"#!{sys.executable}\n"
        "import sys\n"
        f"sys.stdout.buffer.write({stdout_bytes!r})\n"
    )
    script.chmod(0o755)
    return str(script)


@pytest.fixture
def no_binary_lookup(monkeypatch):
    """Resolve tool names to themselves."""
    for module in (frame_extractor_module, audio_extractor_module, metadata_probe_module):
        monkeypatch.setattr(module, "resolve_binary", lambda name: name)


class TestWorkspace:
    """Temporary staging directories."""

    def test_created_and_removed(self, tmp_path):
        with MediaWorkspace(base_dir=str(tmp_path)) as workspace:
            root = workspace.root
            assert os.path.isdir(workspace.frames_dir)
            assert os.listdir(root) == ["frames"]
            assert root.startswith(str(tmp_path))
        assert not os.path.exists(root)

    def test_removed_on_error(self, tmp_path):
        with pytest.raises(KeyboardInterrupt):
            with MediaWorkspace(base_dir=str(tmp_path)) as workspace:
                root = workspace.root
                raise KeyboardInterrupt
        assert not os.path.exists(root)

    def test_keep(self, tmp_path):
        with MediaWorkspace(base_dir=str(tmp_path), keep=True) as workspace:
            root = workspace.root
        assert os.path.isdir(root)


class TestTools:
    """Subprocess helpers."""

    def test_missing_binary(self):
        with pytest.raises(ExtractionUnavailableError, match="not found in PATH"):
            resolve_binary("stegvid-no-such-tool-xyz")

    def test_run_tool_success(self):
        result = run_tool([sys.executable, "-c", "print('ok')"])
        assert result.stdout.strip() == "ok"

    def test_run_tool_failure(self):
        with pytest.raises(ExtractionUnavailableError, match="status 3") as exc_info:
            run_tool([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert exc_info.value.kind == FailureKind.EXTRACTION_UNAVAILABLE

    def test_run_tool_timeout(self):
        with pytest.raises(ExtractionUnavailableError, match="timed out"):
            run_tool([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)

    def test_run_tool_non_utf8_output(self):
        """Undecodable bytes become replacement characters."""
        result = run_tool([sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'caf\\xe9')"])
        assert result.stdout == "caf\ufffd"

    def test_run_tool_binary_output(self):
        result = run_tool([sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'\\xff\\x00')"], text=False)
        assert result.stdout == b"\xff\x00"

    def test_run_tool_launch_failure(self, tmp_path):
        with pytest.raises(ExtractionUnavailableError, match="Failed to launch"):
            run_tool([str(tmp_path / "missing-tool")])


class TestFrameExtractor:
    """Frame extraction service."""

    def test_frames_read_in_order(self, tmp_path, monkeypatch, no_binary_lookup):
        calls = []

        def fake_run_tool(command, timeout=None, text=True):
            calls.append(command)
            frames_dir = os.path.dirname(command[-1])
            # Written out of order on purpose
            for index in (3, 1, 2):
                with open(os.path.join(frames_dir, f"frame_{index:05d}.png"), "wb") as f:
                    f.write(bytes([index]))
            return subprocess.CompletedProcess(command, 0, "", "")

        monkeypatch.setattr(frame_extractor_module, "run_tool", fake_run_tool)

        frames = FrameExtractor().extract("clip.mp4", str(tmp_path))

        assert len(frames) == 3
        assert list(frames) == [b"\x01", b"\x02", b"\x03"]
        assert "fps=30" in calls[0]
        assert calls[0][-1].endswith("frame_%05d.png")

    def test_no_frames(self, tmp_path, monkeypatch, no_binary_lookup):
        monkeypatch.setattr(
            frame_extractor_module, "run_tool",
            lambda command, timeout=None, text=True: subprocess.CompletedProcess(command, 0, "", ""),
        )
        with pytest.raises(ExtractionUnavailableError, match="No frames"):
            FrameExtractor().extract("clip.mp4", str(tmp_path))

    def test_slicing_does_not_read(self, tmp_path):
        paths = [str(tmp_path / f"frame_{index:05d}.png") for index in range(1, 6)]
        frames = FrameSequence(paths)

        # Nothing exists on disk, so any read would fail
        sampled = frames[::2]
        assert isinstance(sampled, FrameSequence)
        assert len(frames) == 5
        assert sampled.paths == [paths[0], paths[2], paths[4]]

    def test_only_sampled_frames_opened(self, tmp_path, monkeypatch):
        """The visual decoder reads frames 0 and 10 of 11, nothing else."""
        buffers = build_frame_set(frame_message("Hi"), num_carriers=2)
        paths = []
        for index, buffer in enumerate(buffers, start=1):
            path = tmp_path / f"frame_{index:05d}.png"
            path.write_bytes(buffer)
            paths.append(str(path))

        opened = []
        real_open = open

        def recording_open(path, *args, **kwargs):
            opened.append(path)
            return real_open(path, *args, **kwargs)

        monkeypatch.setattr(frame_extractor_module, "open", recording_open, raising=False)

        result = VisualChannelDecoder().decode(FrameSequence(paths))

        assert result.message == "Hi"
        assert opened == [paths[0], paths[10]]

    def test_custom_fps(self):
        command = FrameExtractor(MediaConfig(extraction_fps=25)).build_command("ffmpeg", "a.mp4", "/tmp/f")
        assert "fps=25" in command


class TestAudioExtractor:
    """Audio extraction service."""

    def test_command(self):
        command = AudioExtractor(sample_rate=44100).build_command("ffmpeg", "a.mp4")
        assert command[command.index("-ar") + 1] == "44100"
        assert command[command.index("-ac") + 1] == "1"
        assert command[command.index("-acodec") + 1] == "pcm_s16le"
        assert "-vn" in command

    def test_returns_pcm(self, monkeypatch, no_binary_lookup):
        monkeypatch.setattr(
            audio_extractor_module, "run_tool",
            lambda command, timeout=None, text=True: subprocess.CompletedProcess(command, 0, b"\x01\x00", b""),
        )
        assert AudioExtractor().extract("a.mp4") == b"\x01\x00"

    def test_no_audio_stream(self, monkeypatch, no_binary_lookup):
        monkeypatch.setattr(
            audio_extractor_module, "run_tool",
            lambda command, timeout=None, text=True: subprocess.CompletedProcess(command, 0, b"", b""),
        )
        with pytest.raises(ExtractionUnavailableError, match="No audio stream"):
            AudioExtractor().extract("a.mp4")


class TestMetadataProbe:
    """Metadata probe service."""

    def test_parse_tags(self):
        output = json.dumps({'format': {'tags': {'comment': '4869', 'encoder': 'Lavf'}}})
        assert parse_format_tags(output) == {'comment': '4869', 'encoder': 'Lavf'}

    def test_parse_no_tags(self):
        assert parse_format_tags(json.dumps({'format': {}})) == {}
        assert parse_format_tags("{}") == {}
        assert parse_format_tags("") == {}

    def test_parse_invalid_json(self):
        with pytest.raises(ExtractionUnavailableError):
            parse_format_tags("not json")

    def test_probe(self, monkeypatch, no_binary_lookup):
        output = json.dumps({'format': {'tags': {'Comment': '4869'}}})
        monkeypatch.setattr(
            metadata_probe_module, "run_tool",
            lambda command, timeout=None, text=True: subprocess.CompletedProcess(command, 0, output, ""),
        )
        assert MetadataProbe().probe("a.mp4") == {'Comment': '4869'}

    def test_parse_non_utf8_bytes(self):
        with pytest.raises(ExtractionUnavailableError):
            parse_format_tags(b'{"format": {"tags": {"title": "caf\xe9"}}}')

    def test_parse_unexpected_shape(self):
        with pytest.raises(ExtractionUnavailableError):
            parse_format_tags("[]")
        with pytest.raises(ExtractionUnavailableError):
            parse_format_tags(json.dumps({'format': []}))
        with pytest.raises(ExtractionUnavailableError):
            parse_format_tags(json.dumps({'format': {'tags': 'comment=4869'}}))

    def test_probe_non_utf8_tag(self, tmp_path):
        """A Latin-1 title from another muxer does not hide the comment tag."""
        ffprobe = write_fake_tool(
            tmp_path, "ffprobe",
            b'{"format": {"tags": {"title": "caf\xe9", "comment": "4869"}}}',
        )
        tags = MetadataProbe(MediaConfig(ffprobe_path=ffprobe)).probe("a.mp4")
        assert tags == {'title': 'caf\ufffd', 'comment': '4869'}
