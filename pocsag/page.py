"""
Pager message and input line parsing.
"""

from typing import Iterable, Iterator, List

from . import MAX_ADDRESS
from .message import FunctionCode, Text, encode_transmission, message_length


class Page:
    """
    A single pager message.

    Input lines have one of two formats:
    - ADDRESS:MESSAGE            function code 3 (alphanumeric)
    - ADDRESS:FUNCTION:MESSAGE   function code 0-3

    The message may itself contain colons.
    """

    def __init__(
        self,
        address: int,
        message: Text,
        function_code: int = FunctionCode.ALPHA,
    ):
        """
        Initialize a page.

        Args:
            address: Pager address (0 to 2097151)
            message: Message text (str, or raw bytes as read from input)
            function_code: Function code (0 to 3)
        """
        if not 0 <= address <= MAX_ADDRESS:
            raise ValueError(f"Address exceeds 21 bits: {address}")
        if not 0 <= function_code <= 3:
            raise ValueError(f"Invalid function: {function_code}. Must be between 0 and 3.")

        self.address = address
        self.message = message
        self.function_code = FunctionCode(function_code)

    @property
    def word_count(self) -> int:
        """Length of the encoded transmission in 32-bit words."""
        return message_length(self.address, len(self.message), self.function_code)

    def encode(self) -> List[int]:
        """Encode to a list of POCSAG words."""
        return encode_transmission(self.address, self.message, self.function_code)

    @classmethod
    def parse(cls, line: Text) -> "Page":
        """
        Parse an input line.

        Lines read as bytes keep their raw bytes as the message, so each
        byte is packed as one 7-bit character.

        Args:
            line: "ADDRESS:MESSAGE" or "ADDRESS:FUNCTION:MESSAGE", with an
                optional trailing newline

        Returns:
            Page

        Raises:
            ValueError: If the line is malformed or out of range
        """
        colon, newline, cr = _separators(line)

        if line.endswith(newline):
            line = line[:-1]
        if line.endswith(cr):
            line = line[:-1]

        if colon not in line:
            raise ValueError("Malformed line: missing colon separator")

        address_str, rest = line.split(colon, 1)
        try:
            address = int(address_str.strip())
        except ValueError:
            raise ValueError(f"Malformed line: invalid address {address_str!r}") from None

        function_code = FunctionCode.ALPHA
        message = rest
        if colon in rest:
            function_str, remainder = rest.split(colon, 1)
            if function_str.strip().isdigit():
                function_code = int(function_str)
                message = remainder

        return cls(address, message, function_code)

    def __repr__(self) -> str:
        return (
            f"Page(address={self.address}, function={int(self.function_code)}, "
            f"message={self.message!r})"
        )


def _separators(line: Text):
    if isinstance(line, (bytes, bytearray)):
        return b":", b"\n", b"\r"
    return ":", "\n", "\r"


def parse_lines(lines: Iterable[Text]) -> Iterator[Page]:
    """Parse input lines (str or bytes) into pages, skipping blank lines."""
    for line in lines:
        _, newline, cr = _separators(line)
        if not line.rstrip(cr + newline):
            continue
        yield Page.parse(line)
