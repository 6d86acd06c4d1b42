"""
coders.py

Payload coding against a prefix-code tree, and the full encode/decode
pipeline:

    output := tree_segment payload_segment
"""


import abc
from typing import Dict, Iterator, Optional, Tuple, Union

import numpy as np

from .bitstream import (
    BitInputStream,
    BitOutputStream,
    padding_for,
    read_padding,
    pack_bits_to_bytes,
    unpack_bytes_to_bits,
)
from .errors import EmptyInputError, MalformedStreamError, UnknownSymbolError
from .histogram import create_histogram
from .logger import Logger, CodeAssignmentLog, CodingProgressStep, SegmentLog
from .models import Node
from .settings import (
    ALPHABET_SIZE,
    CODER_CODE,
    DECODE_CHUNK_BITS,
    MAX_TREE_SEGMENT_BYTES,
    PAD_FIELD_BITS,
    PROGRESS_STEP_SYMBOLS,
)
from .tree_builder import build_tree
from .tree_codec import serialize_tree, deserialize_tree
from .validators import validate_type


class CoderBase(abc.ABC):
    """
    Abstract base class for coders.
    """

    def __init__(self) -> None:
        """Initialize the coder."""
        pass

    @abc.abstractmethod
    def encode(self, data: bytes) -> np.ndarray:
        """
        Encode a sequence of symbols into a bitstream.

        Args:
            data (bytes): The symbols to be encoded.

        Returns:
            np.ndarray: The encoded bits.
        """
        pass

    @abc.abstractmethod
    def decode(self, bits: np.ndarray, symbol_count: Optional[int] = None) -> bytes:
        """
        Decode a bitstream back into symbols.

        Args:
            bits (np.ndarray): The encoded bits.
            symbol_count (Optional[int]): The number of symbols encoded, when known.

        Returns:
            bytes: The decoded symbols.
        """
        pass

    @abc.abstractmethod
    def encode_packed(self, data: bytes) -> bytes:
        """Encode a sequence of symbols into a bitstream packed eight bits to a byte."""
        pass

    @abc.abstractmethod
    def decode_packed(self, data: bytes, symbol_count: Optional[int] = None) -> bytes:
        """Decode a bitstream packed eight bits to a byte."""
        pass

    @abc.abstractmethod
    def get_coder_code(self) -> int:
        """
        Get the code for the coder.

        Returns:
            int: The coder code.
        """
        pass


def build_code_table(root: Node) -> Dict[int, str]:
    """
    Derive each leaf's code by walking from the root, "0" per left edge and
    "1" per right edge. A single-leaf tree maps its symbol to "".

    Args:
        root (Node): The tree root.

    Returns:
        Dict[int, str]: Symbol to code.
    """
    validate_type(root, "Root", Node)
    codes: Dict[int, str] = {}

    def walk(node: Node, prefix: str) -> None:
        if node.is_leaf:
            codes[node.symbol] = prefix
        else:
            walk(node.left, prefix + "0")
            walk(node.right, prefix + "1")

    walk(root, "")
    return codes


def _code_arrays(code_table: Dict[int, str]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Lay a code table out by symbol: a (256, max_length) matrix of left-aligned
    code bits and a vector of code lengths.

    Raises:
        ValueError: If a symbol is outside 0..255 or a code holds anything
            other than '0' and '1'.
    """
    validate_type(code_table, "Code table", dict)
    for symbol, code in code_table.items():
        validate_type(symbol, "Symbol", int)
        if isinstance(symbol, bool) or not 0 <= symbol < ALPHABET_SIZE:
            raise ValueError(f"Symbol {symbol!r} is outside 0..{ALPHABET_SIZE - 1}")
        validate_type(code, "Code", str)
        if set(code) - {"0", "1"}:
            raise ValueError(f"Code {code!r} of symbol {symbol} must contain only '0' and '1'")

    max_length = max((len(code) for code in code_table.values()), default=0)
    code_matrix = np.zeros((ALPHABET_SIZE, max_length), dtype=np.uint8)
    lengths = np.zeros(ALPHABET_SIZE, dtype=np.int64)
    for symbol, code in code_table.items():
        code_matrix[symbol, : len(code)] = np.frombuffer(code.encode("ascii"), dtype=np.uint8) - ord("0")
        lengths[symbol] = len(code)
    return code_matrix, lengths


def _progress_steps(symbol_count: Optional[int]) -> Optional[int]:
    if symbol_count is None:
        return None
    return -(-symbol_count // PROGRESS_STEP_SYMBOLS)


class HuffmanCoder(CoderBase):
    """
    Encodes bytes as a serialized prefix-code tree followed by the payload
    coded against it.

    encode_packed() and decode_packed() keep the bitstream packed eight bits
    to a byte and expand it only a chunk at a time. encode() and decode()
    work on unpacked bit vectors.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        super().__init__()
        self.logger: Optional[Logger] = logger

    def get_coder_code(self) -> int:
        return CODER_CODE

    def _append_payload(self, symbols: np.ndarray, code_table: Dict[int, str], out: bytearray) -> None:
        code_matrix, lengths = _code_arrays(code_table)

        present = np.zeros(ALPHABET_SIZE, dtype=bool)
        present[list(code_table)] = True
        counts = np.bincount(symbols, minlength=ALPHABET_SIZE)
        if counts[~present].any():
            raise UnknownSymbolError(int(symbols[np.argmax(~present[symbols])]))

        meaningful = int(counts @ lengths)
        padding = padding_for(meaningful)
        header = BitOutputStream()
        header.write_uint(padding, PAD_FIELD_BITS)
        carry = header.to_array()

        max_length = code_matrix.shape[1]
        total_steps = _progress_steps(len(symbols))
        if self.logger is not None:
            self.logger.start_coding_progress()
        for start in range(0, len(symbols), PROGRESS_STEP_SYMBOLS):
            chunk = symbols[start : start + PROGRESS_STEP_SYMBOLS]
            mask = np.arange(max_length) < lengths[chunk][:, None]
            bits = np.concatenate([carry, code_matrix[chunk][mask]])
            whole = len(bits) - len(bits) % 8
            out += np.packbits(bits[:whole]).tobytes()
            carry = bits[whole:]
            if self.logger is not None:
                self.logger.log(CodingProgressStep("Encoding symbols", total_steps))
        # packbits zero-fills the last byte, which is exactly the padding.
        out += np.packbits(carry).tobytes()

        if self.logger is not None:
            self.logger.log(SegmentLog("payload", meaningful, padding))

    def encode_payload_packed(self, data: Union[bytes, bytearray], code_table: Dict[int, str]) -> bytes:
        """
        Concatenate the codes of data's symbols in order and frame them as a
        segment, packed eight bits to a byte.

        Args:
            data (bytes): The symbols.
            code_table (Dict[int, str]): Symbol to code, as built by build_code_table().

        Returns:
            bytes: The payload segment.

        Raises:
            UnknownSymbolError: If a symbol is missing from the table.
            ValueError: If the table holds a symbol outside 0..255 or a code
                that is not made of '0' and '1'.
        """
        validate_type(data, "Data", (bytes, bytearray, memoryview))
        out = bytearray()
        self._append_payload(np.frombuffer(data, dtype=np.uint8), code_table, out)
        return bytes(out)

    def encode_payload(self, data: Union[bytes, bytearray], code_table: Dict[int, str]) -> np.ndarray:
        """
        Same as encode_payload_packed(), returning the segment as a bit vector.
        """
        return unpack_bytes_to_bits(self.encode_payload_packed(data, code_table))

    def _walk(self, root: Node, chunks: Iterator[np.ndarray], meaningful: int, symbol_count: Optional[int]) -> bytes:
        if root.is_leaf:
            if meaningful:
                raise MalformedStreamError("Single-symbol tree cannot have payload bits")
            if symbol_count is None:
                raise ValueError("Symbol count is required to decode a single-symbol stream")
            return bytes([root.symbol]) * symbol_count

        total_steps = _progress_steps(symbol_count)
        if self.logger is not None:
            self.logger.start_coding_progress()
        out = bytearray()
        node = root
        for chunk in chunks:
            for bit in chunk.tolist():
                node = node.right if bit else node.left
                if node.is_leaf:
                    out.append(node.symbol)
                    node = root
                    if self.logger is not None and len(out) % PROGRESS_STEP_SYMBOLS == 0:
                        self.logger.log(CodingProgressStep("Decoding symbols", total_steps))
        if node is not root:
            raise MalformedStreamError("Payload ends inside a code")
        if self.logger is not None and len(out) % PROGRESS_STEP_SYMBOLS != 0:
            self.logger.log(CodingProgressStep("Decoding symbols", total_steps))
        if symbol_count is not None and len(out) != symbol_count:
            raise MalformedStreamError(f"Decoded {len(out)} symbols, expected {symbol_count}")
        return bytes(out)

    @staticmethod
    def _check_symbol_count(symbol_count: Optional[int]) -> None:
        if symbol_count is not None:
            validate_type(symbol_count, "Symbol count", int)
            if symbol_count < 0:
                raise ValueError("Symbol count must be non-negative")

    def decode_payload(self, bits: np.ndarray, offset: int, root: Node, symbol_count: Optional[int] = None) -> bytes:
        """
        Walk the tree bit by bit over the payload segment at offset, emitting
        a symbol at every leaf. Exactly the meaningful bits are consumed;
        padding is never read as payload.

        A single-leaf tree codes every symbol with zero bits, so the number
        of symbols must be supplied as symbol_count.

        Args:
            bits (np.ndarray): The bitstream.
            offset (int): Bit offset of the payload segment.
            root (Node): The tree root.
            symbol_count (Optional[int]): The expected number of symbols.

        Returns:
            bytes: The decoded symbols.

        Raises:
            MalformedStreamError: If the segment is inconsistent or the
                decoded count differs from symbol_count.
            ValueError: If the tree is a single leaf and symbol_count is None.
        """
        validate_type(root, "Root", Node)
        self._check_symbol_count(symbol_count)

        stream = BitInputStream(bits, offset)
        padding = read_padding(stream)
        total = stream.remaining
        if total < padding:
            raise MalformedStreamError(f"Payload holds {total} bits but declares {padding} padding bits")
        if total % 8 != 0:
            raise MalformedStreamError(f"Payload segment of {total} bits is not byte aligned")
        meaningful = total - padding
        start = stream.position
        stream.position += meaningful
        stream.skip_padding(padding)

        end = start + meaningful
        chunks = (bits[i : min(i + DECODE_CHUNK_BITS, end)] for i in range(start, end, DECODE_CHUNK_BITS))
        return self._walk(root, chunks, meaningful, symbol_count)

    def decode_payload_packed(self, data: Union[bytes, bytearray, memoryview], root: Node, symbol_count: Optional[int] = None) -> bytes:
        """
        Same as decode_payload(), over a payload segment packed eight bits to
        a byte. The segment runs to the end of data.
        """
        validate_type(data, "Data", (bytes, bytearray, memoryview))
        validate_type(root, "Root", Node)
        self._check_symbol_count(symbol_count)

        segment = np.frombuffer(data, dtype=np.uint8)
        header_bytes = PAD_FIELD_BITS // 8
        padding = read_padding(BitInputStream(np.unpackbits(segment[:header_bytes])))
        body = segment[header_bytes:]
        total = len(body) * 8
        if total < padding:
            raise MalformedStreamError(f"Payload holds {total} bits but declares {padding} padding bits")
        if padding and body[-1] & ((1 << padding) - 1):
            raise MalformedStreamError(f"Non-zero padding bits at offset {PAD_FIELD_BITS + total - padding}")
        meaningful = total - padding

        chunk_bytes = DECODE_CHUNK_BITS // 8
        chunks = (
            np.unpackbits(body[i : i + chunk_bytes])[: meaningful - 8 * i]
            for i in range(0, len(body), chunk_bytes)
        )
        return self._walk(root, chunks, meaningful, symbol_count)

    def encode_packed(self, data: Union[bytes, bytearray]) -> bytes:
        """
        Encode data as tree segment followed by payload segment, packed eight
        bits to a byte.

        Raises:
            EmptyInputError: If data is empty.
        """
        validate_type(data, "Data", (bytes, bytearray, memoryview))
        if len(data) == 0:
            raise EmptyInputError("Cannot encode empty input")
        histogram = create_histogram(data, self.logger)
        root = build_tree(histogram, self.logger)
        code_table = build_code_table(root)
        if self.logger is not None:
            for symbol in sorted(code_table):
                self.logger.log(CodeAssignmentLog(symbol, histogram[symbol], len(code_table[symbol])))
        out = bytearray(pack_bits_to_bytes(serialize_tree(root, self.logger)))
        self._append_payload(np.frombuffer(data, dtype=np.uint8), code_table, out)
        return bytes(out)

    def encode(self, data: Union[bytes, bytearray]) -> np.ndarray:
        """
        Encode data as tree segment followed by payload segment.

        Raises:
            EmptyInputError: If data is empty.
        """
        return unpack_bytes_to_bits(self.encode_packed(data))

    def decode_packed(self, data: Union[bytes, bytearray, memoryview], symbol_count: Optional[int] = None) -> bytes:
        """
        Decode a bitstream produced by encode_packed().
        """
        validate_type(data, "Data", (bytes, bytearray, memoryview))
        # A valid tree segment always fits in the leading bytes.
        head = unpack_bytes_to_bits(bytes(data[:MAX_TREE_SEGMENT_BYTES]))
        root, offset = deserialize_tree(head, 0)
        return self.decode_payload_packed(memoryview(data)[offset // 8 :], root, symbol_count)

    def decode(self, bits: np.ndarray, symbol_count: Optional[int] = None) -> bytes:
        """
        Decode a bitstream produced by encode().
        """
        validate_type(bits, "Bits", np.ndarray)
        root, offset = deserialize_tree(bits, 0)
        return self.decode_payload(bits, offset, root, symbol_count)



def get_coder(code: int, logger: Optional[Logger] = None) -> CoderBase:
    """
    Retrieve a coder instance based on the given code.

    Args:
        code (int): The coder code.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        CoderBase: An instance of a coder.

    Raises:
        ValueError: If the coder code is not supported.
    """
    if code == CODER_CODE:
        return HuffmanCoder(logger)
    else:
        raise ValueError("Unknown coder code: " + str(code))
