"""
bitstream.py

Bit vectors and byte-aligned segments.

Bits are held as numpy uint8 arrays with one element (0 or 1) per bit,
most significant bit first. A segment is framed as

    pad8(P) bits zeros(P)

where P is the smallest count that brings the framed bits to a multiple
of eight.
"""


from typing import Iterable, Optional

import numpy as np

from .errors import MalformedStreamError
from .logger import Logger, SegmentLog
from .settings import PAD_FIELD_BITS, MAX_PADDING
from .validators import validate_type


class BitOutputStream:
    """
    A helper class to collect bits into a bit vector.
    """

    def __init__(self) -> None:
        self._bits = bytearray()

    def write(self, bit: int) -> None:
        """
        Write a single bit (0 or 1).

        Raises:
            ValueError: If the bit is not 0 or 1.
        """
        if bit not in (0, 1):
            raise ValueError("Bit must be 0 or 1")
        self._bits.append(bit)

    def write_bits(self, bits: Iterable[int]) -> None:
        for bit in bits:
            self.write(bit)

    def write_uint(self, value: int, width: int) -> None:
        """
        Write value as an unsigned integer of width bits, MSB first.

        Raises:
            ValueError: If value does not fit in width bits.
        """
        if not 0 <= value < (1 << width):
            raise ValueError(f"Value {value} does not fit in {width} bits")
        for shift in range(width - 1, -1, -1):
            self._bits.append((value >> shift) & 1)

    def __len__(self) -> int:
        return len(self._bits)

    def to_array(self) -> np.ndarray:
        return np.frombuffer(bytes(self._bits), dtype=np.uint8).copy()


class BitInputStream:
    """
    A helper class to read bits from a bit vector, starting at an offset.
    Reading past the end raises MalformedStreamError.
    """

    def __init__(self, bits: np.ndarray, offset: int = 0) -> None:
        validate_type(bits, "Bits", np.ndarray)
        if not 0 <= offset <= len(bits):
            raise MalformedStreamError(f"Offset {offset} is outside a stream of {len(bits)} bits")
        self.bits: np.ndarray = bits
        self.position: int = offset

    @property
    def remaining(self) -> int:
        return len(self.bits) - self.position

    def _require(self, count: int, what: str) -> None:
        if count > self.remaining:
            raise MalformedStreamError(
                f"Unexpected end of bitstream reading {what}: need {count} bits at offset {self.position}, {self.remaining} left"
            )

    def read(self, what: str = "bit") -> int:
        self._require(1, what)
        bit = int(self.bits[self.position])
        self.position += 1
        return bit

    def read_uint(self, width: int, what: str = "integer") -> int:
        self._require(width, what)
        value = 0
        for bit in self.bits[self.position : self.position + width]:
            value = (value << 1) | int(bit)
        self.position += width
        return value

    def skip_padding(self, count: int) -> None:
        """
        Consume count padding bits, which must all be zero.
        """
        self._require(count, "padding")
        if self.bits[self.position : self.position + count].any():
            raise MalformedStreamError(f"Non-zero padding bits at offset {self.position}")
        self.position += count


def padding_for(num_bits: int) -> int:
    """
    Get the smallest non-negative P such that num_bits + P is a multiple of 8.
    """
    return -num_bits % 8


def frame_segment(bits: np.ndarray, segment_name: str = "segment", logger: Optional[Logger] = None) -> np.ndarray:
    """
    Frame bits as a byte-aligned segment: pad count, bits, zero padding.

    Args:
        bits (np.ndarray): The bits to frame.
        segment_name (str): Name used in logs.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        np.ndarray: The framed segment. Its length is a multiple of 8.
    """
    padding = padding_for(len(bits))
    header = BitOutputStream()
    header.write_uint(padding, PAD_FIELD_BITS)
    segment = np.concatenate([header.to_array(), bits.astype(np.uint8, copy=False), np.zeros(padding, dtype=np.uint8)])
    if logger is not None:
        logger.log(SegmentLog(segment_name, len(bits), padding))
    return segment


def read_padding(stream: BitInputStream) -> int:
    """
    Read a segment's pad count field.

    Raises:
        MalformedStreamError: If the field is truncated or exceeds 7.
    """
    padding = stream.read_uint(PAD_FIELD_BITS, "pad count")
    if padding > MAX_PADDING:
        raise MalformedStreamError(f"Pad count {padding} exceeds {MAX_PADDING}")
    return padding


def pack_bits_to_bytes(bits: np.ndarray) -> bytes:
    """
    Pack a bit vector into bytes, MSB first. A tail that is not a whole
    byte is zero-filled.
    """
    validate_type(bits, "Bits", np.ndarray)
    return np.packbits(bits.astype(np.uint8, copy=False)).tobytes()


def unpack_bytes_to_bits(data: bytes) -> np.ndarray:
    """
    Unpack bytes into a bit vector, MSB first.
    """
    validate_type(data, "Data", (bytes, bytearray, memoryview))
    return np.unpackbits(np.frombuffer(data, dtype=np.uint8))


def bits_to_text(bits: np.ndarray) -> str:
    """
    Render bits as a string of '0' and '1' characters.
    """
    validate_type(bits, "Bits", np.ndarray)
    return (bits.astype(np.uint8, copy=False) + ord("0")).tobytes().decode("ascii")


def text_to_bits(text: str) -> np.ndarray:
    """
    Parse a string of '0' and '1' characters. Surrounding whitespace is ignored.

    Raises:
        MalformedStreamError: If any other character is present.
    """
    validate_type(text, "Text", str)
    try:
        raw = text.strip().encode("ascii")
    except UnicodeEncodeError:
        raise MalformedStreamError("Bit text must contain only '0' and '1'")
    bits = np.frombuffer(raw, dtype=np.uint8) - ord("0")
    if bits.size and bits.max() > 1:
        raise MalformedStreamError("Bit text must contain only '0' and '1'")
    return bits
