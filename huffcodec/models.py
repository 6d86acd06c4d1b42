"""
models.py

The tree objects shared across huffcodec.

A prefix-code tree is full: every node is either a Leaf holding one byte
value, or an Internal node holding exactly two children.
"""


from typing import Iterator, List, Tuple

from .settings import ALPHABET_SIZE


class Node:
    """
    Base class of the two tree node variants.
    """

    @property
    def is_leaf(self) -> bool:
        raise NotImplementedError

    def depth(self) -> int:
        """
        Get the number of edges on the longest root-to-leaf path.

        Returns:
            int: 0 for a single leaf.
        """
        raise NotImplementedError

    def leaves(self) -> Iterator["Leaf"]:
        """Yield the leaves from left to right."""
        raise NotImplementedError

    def leaf_count(self) -> int:
        return sum(1 for _ in self.leaves())

    def to_dot(self) -> str:
        """
        Render the tree in Graphviz DOT. Edges are labelled with the bit
        they stand for.

        Returns:
            str: The DOT source.
        """
        lines: List[str] = ["digraph {"]
        counter = [0]

        def name_of(node: Node) -> str:
            if node.is_leaf:
                return f'"{node.symbol}"'
            counter[0] += 1
            return f'"n{counter[0]}"'

        def visit(node: Node, name: str) -> None:
            if node.is_leaf:
                lines.append(f"  {name};")
                return
            for bit, child in (("0", node.left), ("1", node.right)):
                child_name = name_of(child)
                lines.append(f'  {name} -> {child_name} [label="{bit}"];')
                visit(child, child_name)

        visit(self, name_of(self))
        lines.append("}")
        return "\n".join(lines)


class Leaf(Node):
    """
    Represents a leaf holding a single symbol (a byte value).
    """
    __slots__ = ("symbol",)

    def __init__(self, symbol: int) -> None:
        if not isinstance(symbol, int) or isinstance(symbol, bool):
            raise ValueError("Symbol must be of type int")
        if not 0 <= symbol < ALPHABET_SIZE:
            raise ValueError(f"Symbol must be in range 0..{ALPHABET_SIZE - 1}")
        self.symbol: int = symbol

    @property
    def is_leaf(self) -> bool:
        return True

    def depth(self) -> int:
        return 0

    def leaves(self) -> Iterator["Leaf"]:
        yield self

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Leaf):
            return self.symbol == other.symbol
        return False

    def __hash__(self) -> int:
        return hash(("leaf", self.symbol))

    def __repr__(self) -> str:
        return f"Leaf({self.symbol})"


class Internal(Node):
    """
    Represents an internal node. It owns exactly two children and no symbol.
    """
    __slots__ = ("left", "right")

    def __init__(self, left: Node, right: Node) -> None:
        if not isinstance(left, Node) or not isinstance(right, Node):
            raise ValueError("Children must be of type Node")
        self.left: Node = left
        self.right: Node = right

    @property
    def is_leaf(self) -> bool:
        return False

    def children(self) -> Tuple[Node, Node]:
        return self.left, self.right

    def depth(self) -> int:
        return 1 + max(self.left.depth(), self.right.depth())

    def leaves(self) -> Iterator[Leaf]:
        yield from self.left.leaves()
        yield from self.right.leaves()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Internal):
            return self.left == other.left and self.right == other.right
        return False

    def __hash__(self) -> int:
        return hash(("internal", self.left, self.right))

    def __repr__(self) -> str:
        return f"Internal({self.left!r}, {self.right!r})"
