"""
Tests for PCM rendering.
"""

import numpy as np
import pytest

from pocsag import BAUD_RATE, SAMPLE_RATE, pcm_encode_transmission, pcm_transmission_length, render_samples


def _samples(pcm: bytes) -> np.ndarray:
    return np.frombuffer(pcm, dtype="<i2")


class TestTransmissionLength:
    """Test PCM byte count."""

    def test_length_34_words(self):
        # 34 * 32 * 22050 = 23990400; // 512 = 46856; * 2
        assert pcm_transmission_length(22050, 512, 34) == 93712
        assert pcm_transmission_length(22050, 512, 34) == 34 * 32 * 22050 // 512 * 2

    def test_length_single_word(self):
        assert pcm_transmission_length(SAMPLE_RATE, BAUD_RATE, 1) == 2756

    def test_length_zero(self):
        assert pcm_transmission_length(SAMPLE_RATE, BAUD_RATE, 0) == 0

    def test_buffer_matches_length(self):
        pcm = pcm_encode_transmission(22050, 512, [0x12345678] * 34)
        assert len(pcm) == 93712


class TestPCMEncode:
    """Test bit expansion and resampling."""

    def test_zero_word_positive(self):
        samples = _samples(pcm_encode_transmission(SAMPLE_RATE, BAUD_RATE, [0]))
        assert len(samples) == 1378
        assert np.all(samples == 16383)

    def test_ones_word_negative(self):
        samples = _samples(pcm_encode_transmission(SAMPLE_RATE, BAUD_RATE, [0xFFFFFFFF]))
        assert len(samples) == 1378
        assert np.all(samples == -16383)

    def test_little_endian(self):
        pcm = pcm_encode_transmission(SAMPLE_RATE, BAUD_RATE, [0])
        assert pcm[:2] == b"\xff\x3f"

    def test_msb_first(self):
        samples = _samples(pcm_encode_transmission(SAMPLE_RATE, BAUD_RATE, [0x80000000]))
        # Output sample i reads symbol i * 38400 // 22050; bit 0 covers symbols 0-74
        assert samples[0] == -16383
        assert samples[43] == -16383
        assert samples[44] == 16383
        assert np.all(samples[44:] == 16383)

    def test_identity_rate(self):
        """At the symbol rate every bit spans 75 samples."""
        samples = render_samples(38400, BAUD_RATE, [0x0000FFFF])
        assert len(samples) == 2400
        assert np.all(samples[:1200] == 16383)
        assert np.all(samples[1200:] == -16383)

    def test_word_count_limits_input(self):
        pcm = pcm_encode_transmission(SAMPLE_RATE, BAUD_RATE, [0, 0xFFFFFFFF], word_count=1)
        assert len(pcm) == 2756
        assert np.all(_samples(pcm) == 16383)

    def test_empty(self):
        assert pcm_encode_transmission(SAMPLE_RATE, BAUD_RATE, []) == b""
        assert len(render_samples(SAMPLE_RATE, BAUD_RATE, [])) == 0

    def test_render_dtype(self):
        samples = render_samples(SAMPLE_RATE, BAUD_RATE, [0xAAAAAAAA])
        assert samples.dtype == np.int16
        assert set(np.unique(samples)) == {-16383, 16383}

    def test_baud_rate_above_symbol_rate(self):
        with pytest.raises(ValueError):
            render_samples(SAMPLE_RATE, 38401, [0])
        with pytest.raises(ValueError):
            pcm_encode_transmission(SAMPLE_RATE, 0, [0])

    def test_sample_rate_must_be_positive(self):
        with pytest.raises(ValueError):
            render_samples(0, BAUD_RATE, [0])

    def test_word_count_beyond_words(self):
        with pytest.raises(ValueError):
            pcm_encode_transmission(SAMPLE_RATE, BAUD_RATE, [0, 0], word_count=3)
        with pytest.raises(ValueError):
            render_samples(SAMPLE_RATE, BAUD_RATE, [0], word_count=-1)
