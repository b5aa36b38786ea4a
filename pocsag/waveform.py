"""
PCM rendering of POCSAG words.

Simulates 2-FSK by sample sign: each bit is held for SYMBOL_RATE / baud_rate
samples at the symbol rate (logic 0 positive, logic 1 negative), then the
result is resampled to the output rate by nearest neighbour.
"""

from typing import Optional, Sequence

import numpy as np

from . import AMPLITUDE, SYMBOL_RATE


def pcm_transmission_length(sample_rate: int, baud_rate: int, word_count: int) -> int:
    """
    Length in bytes of the PCM rendering of word_count words.

    32 bits per word, sample_rate / baud_rate samples per bit, 2 bytes per
    sample. Integer division is applied left to right.
    """
    return word_count * 32 * sample_rate // baud_rate * 2


def render_samples(
    sample_rate: int,
    baud_rate: int,
    words: Sequence[int],
    word_count: Optional[int] = None,
) -> np.ndarray:
    """
    Render words to int16 samples at sample_rate.

    Args:
        sample_rate: Output sample rate (Hz)
        baud_rate: Bit rate (bits per second)
        words: 32-bit words, transmitted MSB first
        word_count: Number of words to render (default: all)

    Returns:
        int16 array of pcm_transmission_length(...) // 2 samples

    Raises:
        ValueError: If a rate is out of range or word_count exceeds len(words)
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    if not 0 < baud_rate <= SYMBOL_RATE:
        raise ValueError(f"baud_rate must be between 1 and {SYMBOL_RATE}, got {baud_rate}")
    if word_count is None:
        word_count = len(words)
    if not 0 <= word_count <= len(words):
        raise ValueError(f"word_count must be between 0 and {len(words)}, got {word_count}")

    num_samples = pcm_transmission_length(sample_rate, baud_rate, word_count) // 2
    if num_samples == 0:
        return np.zeros(0, dtype=np.int16)

    # Big-endian words unpack to bits MSB first
    data = np.asarray(words[:word_count], dtype=np.uint64).astype(">u4")
    bits = np.unpackbits(data.view(np.uint8))

    levels = np.where(bits == 0, AMPLITUDE, -AMPLITUDE).astype(np.int16)
    symbols = np.repeat(levels, SYMBOL_RATE // baud_rate)

    indices = np.arange(num_samples, dtype=np.int64) * SYMBOL_RATE // sample_rate
    # Only reachable when baud_rate does not divide SYMBOL_RATE
    np.minimum(indices, len(symbols) - 1, out=indices)

    return symbols[indices]


def pcm_encode_transmission(
    sample_rate: int,
    baud_rate: int,
    words: Sequence[int],
    word_count: Optional[int] = None,
) -> bytes:
    """
    Render words as signed 16-bit little-endian PCM.

    Returns:
        pcm_transmission_length(sample_rate, baud_rate, word_count) bytes
    """
    samples = render_samples(sample_rate, baud_rate, words, word_count)
    return samples.astype("<i2").tobytes()
