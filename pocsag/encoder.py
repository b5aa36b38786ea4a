"""
POCSAG Encoder - Generates PCM audio for a stream of pager messages.
"""

import logging
import random
from pathlib import Path
from typing import Iterable, Iterator, Optional

import numpy as np
import soundfile as sf

from . import SAMPLE_RATE, BAUD_RATE, MIN_DELAY, MAX_DELAY
from .page import Page
from .waveform import pcm_encode_transmission, pcm_transmission_length

# Module-level logger
_logger = logging.getLogger(__name__)


class POCSAGEncoder:
    """
    Renders pages to 16-bit mono PCM, separated by random gaps of silence.

    The gaps keep consecutive transmissions apart so a pager sees each
    preamble on its own.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        baud_rate: int = BAUD_RATE,
        rng: Optional[random.Random] = None,
        min_delay: float = MIN_DELAY,
        max_delay: float = MAX_DELAY,
    ):
        """
        Initialize encoder.

        Args:
            sample_rate: Output audio sample rate (Hz)
            baud_rate: POCSAG bit rate (bits per second)
            rng: Random source for silence gaps (default: unseeded)
            min_delay: Shortest silence between pages (seconds)
            max_delay: Longest silence between pages (seconds)
        """
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError("Delays must satisfy 0 <= min_delay <= max_delay")

        self.sample_rate = sample_rate
        self.baud_rate = baud_rate
        self.rng = rng if rng is not None else random.Random()
        self.min_delay = min_delay
        self.max_delay = max_delay

    def encode_page(self, page: Page) -> bytes:
        """
        Encode a single page to PCM.

        Args:
            page: Page to encode

        Returns:
            Little-endian int16 samples
        """
        words = page.encode()
        pcm = pcm_encode_transmission(self.sample_rate, self.baud_rate, words)

        _logger.debug(
            f"Encoded {page!r}: {len(words)} words, "
            f"{pcm_transmission_length(self.sample_rate, self.baud_rate, len(words))} bytes"
        )
        return pcm

    def _gap_length(self) -> int:
        low = int(self.min_delay * self.sample_rate)
        high = int(self.max_delay * self.sample_rate)
        num_samples = self.rng.randint(low, high)

        _logger.debug(f"Silence: {num_samples} samples ({num_samples / self.sample_rate:.2f}s)")
        return num_samples

    def silence(self) -> bytes:
        """Generate a random-length gap of zero samples."""
        return bytes(self._gap_length() * 2)

    def generate(self, pages: Iterable[Page]) -> Iterator[bytes]:
        """
        Generate PCM for a stream of pages.

        Yields the transmission of each page followed by its silence gap.
        """
        for page in pages:
            yield self.encode_page(page)
            yield self.silence()

    def generate_samples(self, pages: Iterable[Page]) -> np.ndarray:
        """Generate all pages as a single int16 sample array."""
        data = b"".join(self.generate(pages))
        return np.frombuffer(data, dtype="<i2")

    def generate_to_file(self, output_path: str | Path, pages: Iterable[Page]):
        """
        Generate and save audio to a WAV file.

        Args:
            output_path: Output WAV file path
            pages: Pages to encode
        """
        samples = self.generate_samples(pages)

        sf.write(
            str(output_path),
            samples,
            self.sample_rate,
            subtype='PCM_16'
        )
        _logger.info(f"Wrote {len(samples)} samples to {output_path}")

    def play(self, pages: Iterable[Page], device: Optional[int] = None):
        """
        Play the audio through an output device, e.g. a transmitter's audio input.

        Args:
            pages: Pages to encode
            device: Audio output device (None = default)
        """
        import sounddevice as sd

        for page in pages:
            samples = np.frombuffer(self.encode_page(page), dtype="<i2")
            sd.play(samples, samplerate=self.sample_rate, device=device, blocking=True)
            sd.sleep(self._gap_length() * 1000 // self.sample_rate)
