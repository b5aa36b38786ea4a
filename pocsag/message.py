"""
POCSAG transmission framing.

A transmission is laid out as:

    preamble    18 words of 0xAAAAAAAA (576 bits)
    sync        starts the first batch
    idle        (address & 7) * 2 words, so the address lands in its frame
    address     ((address >> 3) << 2) | function code
    message     7-bit characters packed 20 bits per word
    idle        end of message
    idle        padding up to the end of the batch

A sync word precedes every batch of 16 words. The layout is produced once by
frame_layout(); encode_transmission() fills it and message_length() counts
it, so the two can never disagree.
"""

import enum
import itertools
from typing import Iterable, Iterator, List, Union

from . import (
    BATCH_SIZE,
    FLAG_MESSAGE,
    FRAME_SIZE,
    IDLE_WORD,
    MAX_ADDRESS,
    PREAMBLE_WORD,
    PREAMBLE_WORDS,
    SYNC_WORD,
    TEXT_BITS_PER_CHAR,
    TEXT_BITS_PER_WORD,
)
from .codeword import encode_codeword

Text = Union[str, bytes]


class FunctionCode(enum.IntEnum):
    """
    Function code carried in the low 2 bits of the address word.

    All four codes currently use the 7-bit alphanumeric packing; numeric
    (BCD) packing for codes 0-2 is not implemented.
    """

    ALERT = 0
    NUMERIC_1 = 1
    NUMERIC_2 = 2
    ALPHA = 3


class Slot(enum.Enum):
    """Kind of word at a position in a transmission."""

    PREAMBLE = "preamble"
    SYNC = "sync"
    IDLE = "idle"
    ADDRESS = "address"
    MESSAGE = "message"


def _check_address(address: int):
    if not 0 <= address <= MAX_ADDRESS:
        raise ValueError(f"Address must be 21-bit unsigned (0-{MAX_ADDRESS}), got {address}")


def _check_function_code(function_code: int):
    if not 0 <= function_code <= 3:
        raise ValueError(f"Function code must be between 0 and 3, got {function_code}")


def address_offset(address: int) -> int:
    """
    Number of idle words that precede the address word.

    Only 18 of the 21 address bits are sent in the address word; the low 3
    bits select which frame of the batch carries it.
    """
    return (address & 0x7) * FRAME_SIZE


def message_word_count(char_count: int) -> int:
    """Message words needed for char_count characters (7 bits each, 20 per word)."""
    return (char_count * TEXT_BITS_PER_CHAR + TEXT_BITS_PER_WORD - 1) // TEXT_BITS_PER_WORD


def _char_codes(text: Text) -> Iterator[int]:
    if isinstance(text, (bytes, bytearray)):
        return iter(text)
    return (ord(ch) for ch in text)


def _pack_text(text: Text) -> Iterator[int]:
    """Yield 20-bit message payloads, characters packed LSB first."""
    current = 0
    num_bits = 0

    for code in _char_codes(text):
        for i in range(TEXT_BITS_PER_CHAR):
            current = (current << 1) | ((code >> i) & 1)
            num_bits += 1
            if num_bits == TEXT_BITS_PER_WORD:
                yield current
                current = 0
                num_bits = 0

    if num_bits > 0:
        # Zero-pad the last word on the low end
        yield current << (TEXT_BITS_PER_WORD - num_bits)


def _message_codewords(text: Text) -> Iterator[int]:
    for payload in _pack_text(text):
        yield encode_codeword(payload | FLAG_MESSAGE)


def _insert_sync(items: Iterable, position: int, sync) -> Iterator:
    """Yield items, emitting sync each time the batch position reaches BATCH_SIZE."""
    for item in items:
        yield item
        position += 1
        if position == BATCH_SIZE:
            yield sync
            position = 0


def encode_ascii(initial_word_position: int, text: Text) -> List[int]:
    """
    Encode text as message codewords, with sync words at batch boundaries.

    Args:
        initial_word_position: Position (0-15) of the first message word
            within its batch
        text: Message text; each character contributes its low 7 bits

    Returns:
        List of 32-bit words
    """
    return list(_insert_sync(_message_codewords(text), initial_word_position, SYNC_WORD))


def frame_layout(address: int, char_count: int) -> Iterator[Slot]:
    """
    Yield the kind of every word in a transmission.

    Args:
        address: 21-bit pager address
        char_count: Number of characters in the message

    Yields:
        One Slot per word, in transmission order
    """
    for _ in range(PREAMBLE_WORDS):
        yield Slot.PREAMBLE

    offset = address_offset(address)
    body = itertools.chain(
        [Slot.SYNC],
        itertools.repeat(Slot.IDLE, offset),
        [Slot.ADDRESS],
        _insert_sync(
            itertools.repeat(Slot.MESSAGE, message_word_count(char_count)),
            offset + 1,
            Slot.SYNC,
        ),
        [Slot.IDLE],
    )

    written = 0
    for slot in body:
        yield slot
        written += 1

    # Pad to a whole number of batches (+ 1 for each sync word)
    padding = (BATCH_SIZE + 1) - written % (BATCH_SIZE + 1)
    for _ in range(padding):
        yield Slot.IDLE


def encode_transmission(
    address: int,
    text: Text,
    function_code: int = FunctionCode.ALPHA,
) -> List[int]:
    """
    Encode a complete POCSAG transmission.

    Args:
        address: 21-bit pager address (0 to 2097151)
        text: Message text
        function_code: Function code (0-3, default 3 = alphanumeric)

    Returns:
        List of 32-bit words, message_length(address, len(text)) long

    Raises:
        ValueError: If address or function code is out of range
    """
    _check_address(address)
    _check_function_code(function_code)

    address_word = encode_codeword(((address >> 3) << 2) | int(function_code))
    message_words = _message_codewords(text)

    words = []
    for slot in frame_layout(address, len(text)):
        if slot is Slot.MESSAGE:
            words.append(next(message_words))
        elif slot is Slot.ADDRESS:
            words.append(address_word)
        elif slot is Slot.SYNC:
            words.append(SYNC_WORD)
        elif slot is Slot.IDLE:
            words.append(IDLE_WORD)
        else:
            words.append(PREAMBLE_WORD)

    return words


def message_length(
    address: int,
    char_count: int,
    function_code: int = FunctionCode.ALPHA,
) -> int:
    """
    Number of words encode_transmission() produces.

    The function code does not affect the length.
    """
    return sum(1 for _ in frame_layout(address, char_count))
