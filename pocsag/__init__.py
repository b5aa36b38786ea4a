"""
POCSAG - Pager message encoder
Turns an address and a text message into POCSAG codewords and PCM audio.
"""

__version__ = "0.1.0"

# Codeword structure
CRC_BITS = 10
CRC_GENERATOR = 0b11101101001  # x^10 + x^9 + x^8 + x^6 + x^5 + x^3 + 1
FLAG_ADDRESS = 0x000000
FLAG_MESSAGE = 0x100000  # bit 20 of the 21-bit payload

# Reserved words
SYNC_WORD = 0x7CD215D8  # starts every batch
IDLE_WORD = 0x7A89C197  # padding and end of message
PREAMBLE_WORD = 0xAAAAAAAA  # alternating 1,0,1,0...

# Framing
FRAME_SIZE = 2  # words per frame
BATCH_SIZE = 16  # words per batch, excluding the sync word
PREAMBLE_BITS = 576
PREAMBLE_WORDS = PREAMBLE_BITS // 32  # = 18

# Alphanumeric message packing
TEXT_BITS_PER_WORD = 20
TEXT_BITS_PER_CHAR = 7

# Addressing
MAX_ADDRESS = 0x1FFFFF  # 21 bits

# Audio
SYMBOL_RATE = 38400  # Hz, intermediate rate before resampling
SAMPLE_RATE = 22050  # Hz (default output)
BAUD_RATE = 512  # bits per second
AMPLITUDE = 32767 // 2

# Silence between transmissions, seconds
MIN_DELAY = 1
MAX_DELAY = 10

from .codeword import crc, parity, encode_codeword, verify_codeword, codeword_payload
from .message import (
    FunctionCode,
    Slot,
    address_offset,
    encode_ascii,
    encode_transmission,
    frame_layout,
    message_length,
    message_word_count,
)
from .waveform import pcm_transmission_length, pcm_encode_transmission, render_samples
from .page import Page, parse_lines
from .encoder import POCSAGEncoder

__all__ = [
    "crc",
    "parity",
    "encode_codeword",
    "verify_codeword",
    "codeword_payload",
    "FunctionCode",
    "Slot",
    "address_offset",
    "encode_ascii",
    "encode_transmission",
    "frame_layout",
    "message_length",
    "message_word_count",
    "pcm_transmission_length",
    "pcm_encode_transmission",
    "render_samples",
    "Page",
    "parse_lines",
    "POCSAGEncoder",
]
