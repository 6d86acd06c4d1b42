"""
errors.py

Exceptions raised by huffcodec. All of them are ValueErrors so callers
that only catch ValueError keep working.
"""


class HuffmanCodecError(ValueError):
    """Base class for codec errors."""


class EmptyInputError(HuffmanCodecError):
    """Raised when a histogram or tree is requested for zero symbols."""


class MalformedStreamError(HuffmanCodecError):
    """Raised when a bitstream is truncated or corrupted."""


class UnknownSymbolError(HuffmanCodecError):
    """Raised when a symbol has no entry in the code table."""

    def __init__(self, symbol: int) -> None:
        self.symbol = symbol
        super().__init__(f"Symbol {symbol} is not in the code table")
