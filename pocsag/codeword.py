"""
POCSAG codeword checksums.

Every address and message word is a BCH(31,21) codeword with an extra
even-parity bit:

    bit 31      flag (0 = address, 1 = message)
    bits 30-11  20 payload bits
    bits 10-1   CRC (remainder of division by the generator polynomial)
    bit 0       even parity over the 31 bits above
"""

from . import CRC_BITS, CRC_GENERATOR


def crc(payload: int) -> int:
    """
    Compute the 10-bit CRC of a 21-bit payload.

    Polynomial long division over GF(2): the payload is shifted left by
    CRC_BITS and the generator, aligned with bit 30, is XORed in under every
    set column before moving one column to the right.
    """
    denominator = CRC_GENERATOR << 20
    msg = payload << CRC_BITS

    for column in range(21):
        if (msg >> (30 - column)) & 1:
            msg ^= denominator
        denominator >>= 1

    return msg & 0x3FF


def parity(x: int) -> int:
    """Return 1 if x has an odd number of set bits in its low 32 bits, else 0."""
    p = 0
    for _ in range(32):
        p ^= x & 1
        x >>= 1
    return p


def encode_codeword(payload: int) -> int:
    """Append CRC and parity to a 21-bit payload, giving a 32-bit codeword."""
    full = (payload << CRC_BITS) | crc(payload)
    return (full << 1) | parity(full)


def codeword_payload(word: int) -> int:
    """Extract the 21-bit flagged payload from a codeword."""
    return (word >> (CRC_BITS + 1)) & 0x1FFFFF


def verify_codeword(word: int) -> bool:
    """Check parity and CRC of a 32-bit codeword."""
    if parity(word):
        return False
    return crc(codeword_payload(word)) == (word >> 1) & 0x3FF
