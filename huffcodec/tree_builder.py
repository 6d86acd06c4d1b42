"""
tree_builder.py

Builds a prefix-code tree by greedily merging the two lightest entries.
"""


import heapq
from typing import Dict, List, Optional, Tuple

from .errors import EmptyInputError
from .logger import Logger, TreeBuildLog
from .models import Node, Leaf, Internal
from .validators import validate_type


def build_tree(histogram: Dict[int, int], logger: Optional[Logger] = None) -> Node:
    """
    Build a full binary prefix-code tree from a histogram.

    Ties are broken by a sequence number: leaves are numbered in ascending
    symbol order, merged nodes are numbered after them in the order they are
    created, and the lower (weight, sequence) entry becomes the left child.
    The same histogram therefore always gives the same tree.

    Args:
        histogram (Dict[int, int]): Symbol to occurrence count, counts >= 1.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        Node: The root. A histogram with one entry gives a single Leaf.

    Raises:
        EmptyInputError: If the histogram is empty.
        ValueError: If a count is not a positive integer.
    """
    validate_type(histogram, "Histogram", dict)
    if not histogram:
        raise EmptyInputError("Cannot build a tree from an empty histogram")

    heap: List[Tuple[int, int, Node]] = []
    for sequence, symbol in enumerate(sorted(histogram)):
        count = histogram[symbol]
        if not isinstance(count, int) or count < 1:
            raise ValueError(f"Count for symbol {symbol} must be a positive integer")
        heap.append((count, sequence, Leaf(symbol)))
    heapq.heapify(heap)

    sequence = len(heap)
    while len(heap) > 1:
        left_weight, _, left = heapq.heappop(heap)
        right_weight, _, right = heapq.heappop(heap)
        heapq.heappush(heap, (left_weight + right_weight, sequence, Internal(left, right)))
        sequence += 1

    root = heap[0][2]
    if logger is not None:
        logger.log(TreeBuildLog(len(histogram), root.depth()))
    return root
