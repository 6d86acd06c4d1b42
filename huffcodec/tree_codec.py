"""
tree_codec.py

Serializes a prefix-code tree to a byte-aligned segment and back.

Pre-order walk: an internal node is written as bit 0 followed by its left
and right subtrees, a leaf as bit 1 followed by its 8-bit symbol. The walk
is framed with frame_segment().
"""


from typing import Optional, Set, Tuple

import numpy as np

from .bitstream import BitOutputStream, BitInputStream, frame_segment, read_padding
from .errors import MalformedStreamError
from .logger import Logger
from .models import Node, Leaf, Internal
from .settings import SYMBOL_BITS, MAX_TREE_DEPTH
from .validators import validate_type

LEAF_TAG = 1
INTERNAL_TAG = 0


def _write_node(node: Node, out: BitOutputStream) -> None:
    if node.is_leaf:
        out.write(LEAF_TAG)
        out.write_uint(node.symbol, SYMBOL_BITS)
    else:
        out.write(INTERNAL_TAG)
        _write_node(node.left, out)
        _write_node(node.right, out)


def serialize_tree(root: Node, logger: Optional[Logger] = None) -> np.ndarray:
    """
    Serialize a tree into a framed segment.

    Args:
        root (Node): The tree root.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        np.ndarray: The tree segment bits.
    """
    validate_type(root, "Root", Node)
    out = BitOutputStream()
    _write_node(root, out)
    return frame_segment(out.to_array(), "tree", logger)


def _read_node(stream: BitInputStream, depth: int, seen: Set[int]) -> Node:
    if depth > MAX_TREE_DEPTH:
        raise MalformedStreamError(f"Tree is deeper than {MAX_TREE_DEPTH} levels")
    tag = stream.read("tree tag")
    if tag == LEAF_TAG:
        symbol = stream.read_uint(SYMBOL_BITS, "leaf symbol")
        if symbol in seen:
            raise MalformedStreamError(f"Symbol {symbol} appears in more than one leaf")
        seen.add(symbol)
        return Leaf(symbol)
    left = _read_node(stream, depth + 1, seen)
    right = _read_node(stream, depth + 1, seen)
    return Internal(left, right)


def deserialize_tree(bits: np.ndarray, offset: int = 0) -> Tuple[Node, int]:
    """
    Deserialize a tree segment starting at offset.

    Args:
        bits (np.ndarray): The bitstream.
        offset (int): Bit offset of the tree segment.

    Returns:
        Tuple[Node, int]: The tree root and the offset just past the
        segment's padding, i.e. the start of the next segment.

    Raises:
        MalformedStreamError: If the segment is truncated or inconsistent.
    """
    stream = BitInputStream(bits, offset)
    padding = read_padding(stream)
    start = stream.position
    root = _read_node(stream, 0, set())
    if (stream.position - start + padding) % 8 != 0:
        raise MalformedStreamError(f"Pad count {padding} does not align the tree segment")
    stream.skip_padding(padding)
    return root, stream.position
