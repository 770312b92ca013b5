"""Audio decoding and playback utilities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import threading
from typing import Optional, Union

import numpy as np
import sounddevice as sd
import soundfile as sf

from loudbars.errors import AudioDecodeError, PlaybackError
from loudbars.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DecodedAudio:
    """Decoded PCM: interleaved int16 samples plus their format."""

    samples: np.ndarray
    sample_rate: int
    channels: int

    @property
    def frames(self) -> int:
        return len(self.samples) // self.channels

    @property
    def duration(self) -> float:
        """Length of the stream in seconds."""
        return self.frames / self.sample_rate


def decode_file(path: Union[str, Path]) -> DecodedAudio:
    """Decode ``path`` into a read-only interleaved int16 sample array."""
    path = Path(path)
    if not path.is_file():
        raise AudioDecodeError(f"Audio file not found: {path}")
    try:
        data, sample_rate = sf.read(str(path), dtype="int16", always_2d=True)
    except (RuntimeError, OSError) as exc:
        raise AudioDecodeError(f"Unable to decode {path}: {exc}") from exc

    channels = data.shape[1]
    if sample_rate <= 0 or channels <= 0:
        raise AudioDecodeError(f"Invalid stream format in {path}: rate={sample_rate} channels={channels}")

    samples = np.ascontiguousarray(data).reshape(-1)
    samples.setflags(write=False)
    audio = DecodedAudio(samples=samples, sample_rate=int(sample_rate), channels=int(channels))
    logger.info(
        "Decoded {} sample_rate={} channels={} duration={:.2f}s",
        path,
        audio.sample_rate,
        audio.channels,
        audio.duration,
    )
    return audio


class AudioPlayer:
    """Play a decoded buffer to the default output device using sounddevice."""

    def __init__(self, audio: DecodedAudio, device: Optional[Union[int, str]] = None) -> None:
        self._frames = audio.samples.reshape(-1, audio.channels)
        self._position = 0
        self._lock = threading.Lock()
        self._finished = threading.Event()
        try:
            self._stream = sd.OutputStream(
                device=device,
                samplerate=audio.sample_rate,
                channels=audio.channels,
                dtype="int16",
                callback=self._callback,
                finished_callback=self._finished.set,
            )
        except Exception as exc:
            logger.bind(error=str(exc)).exception("Failed to open audio output stream")
            raise PlaybackError(f"Audio output unavailable: {exc}") from exc

    def play(self) -> None:
        """Start asynchronous playback of the whole buffer."""
        logger.info("Starting playback of {} frames", len(self._frames))
        try:
            self._stream.start()
        except sd.PortAudioError as exc:
            raise PlaybackError(f"Unable to start playback: {exc}") from exc

    def empty(self) -> bool:
        """Return True once every frame has been played or the stream stopped."""
        return self._finished.is_set()

    def close(self) -> None:
        """Stop playback and release the device."""
        try:
            self._stream.abort()
        finally:
            self._stream.close()
        logger.info("Audio stream closed at frame {}", self._position)

    def __enter__(self) -> "AudioPlayer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _callback(self, outdata, frames, time_info, status) -> None:
        if status:
            logger.warning("Audio stream status: {}", status)
        with self._lock:
            start = self._position
            chunk = self._frames[start : start + frames]
            self._position = start + len(chunk)
        outdata[: len(chunk)] = chunk
        if len(chunk) < frames:
            outdata[len(chunk) :] = 0
            raise sd.CallbackStop()
