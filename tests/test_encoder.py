"""
Tests for the POCSAG audio encoder.
"""

import random

import numpy as np
import pytest
import soundfile as sf

from pocsag import POCSAGEncoder, Page, pcm_transmission_length


class TestPOCSAGEncoder:
    """Test page rendering and silence gaps."""

    def test_encoder_init(self):
        encoder = POCSAGEncoder()
        assert encoder.sample_rate == 22050
        assert encoder.baud_rate == 512
        assert encoder.min_delay == 1
        assert encoder.max_delay == 10

    def test_encoder_custom_params(self):
        encoder = POCSAGEncoder(sample_rate=48000, min_delay=0, max_delay=2)
        assert encoder.sample_rate == 48000
        assert encoder.min_delay == 0
        assert encoder.max_delay == 2

    def test_invalid_delays(self):
        with pytest.raises(ValueError):
            POCSAGEncoder(min_delay=5, max_delay=1)
        with pytest.raises(ValueError):
            POCSAGEncoder(min_delay=-1)

    def test_encode_page_length(self):
        encoder = POCSAGEncoder()
        page = Page(1234567, "HI")
        pcm = encoder.encode_page(page)
        assert len(pcm) == pcm_transmission_length(22050, 512, 52)

    def test_silence_range(self):
        encoder = POCSAGEncoder(rng=random.Random(7))
        for _ in range(20):
            gap = encoder.silence()
            assert len(gap) % 2 == 0
            assert 22050 * 2 <= len(gap) <= 22050 * 10 * 2
            assert not any(gap)

    def test_silence_fixed(self):
        encoder = POCSAGEncoder(min_delay=1, max_delay=1)
        assert len(encoder.silence()) == 22050 * 2

    def test_silence_deterministic(self):
        first = POCSAGEncoder(rng=random.Random(42))
        second = POCSAGEncoder(rng=random.Random(42))
        assert [len(first.silence()) for _ in range(5)] == [len(second.silence()) for _ in range(5)]

    def test_generate(self):
        encoder = POCSAGEncoder(min_delay=0, max_delay=0)
        pages = [Page(1, "a"), Page(2, "b")]
        chunks = list(encoder.generate(pages))
        assert len(chunks) == 4
        assert chunks[0] == encoder.encode_page(pages[0])
        assert chunks[1] == b""

    def test_generate_samples(self):
        encoder = POCSAGEncoder(min_delay=0.5, max_delay=0.5)
        samples = encoder.generate_samples([Page(1234567, "HI")])
        assert samples.dtype == np.int16
        assert len(samples) == 143324 // 2 + 11025
        assert np.all(samples[-11025:] == 0)

    def test_generate_to_file(self, tmp_path):
        """Test WAV output matches the raw samples."""
        path = tmp_path / "page.wav"
        pages = [Page(1234567, "HELLO WORLD"), Page(8, "0", 0)]

        POCSAGEncoder(rng=random.Random(3)).generate_to_file(path, pages)
        expected = POCSAGEncoder(rng=random.Random(3)).generate_samples(pages)

        data, sample_rate = sf.read(str(path), dtype="int16")
        assert sample_rate == 22050
        assert np.array_equal(data, expected)
