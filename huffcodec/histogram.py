"""
histogram.py

Symbol occurrence counting.
"""


from typing import Dict, Optional, Union

import numpy as np

from .logger import Logger, HistogramLog
from .settings import ALPHABET_SIZE
from .validators import validate_type


def create_histogram(data: Union[bytes, bytearray, memoryview], logger: Optional[Logger] = None) -> Dict[int, int]:
    """
    Count how often each byte value occurs in data.

    Args:
        data (bytes): The input symbols.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        Dict[int, int]: Every distinct byte value present mapped to its
        count. Empty input gives an empty mapping.
    """
    validate_type(data, "Data", (bytes, bytearray, memoryview))
    symbols = np.frombuffer(data, dtype=np.uint8)
    counts = np.bincount(symbols, minlength=ALPHABET_SIZE)
    histogram = {int(symbol): int(counts[symbol]) for symbol in np.flatnonzero(counts)}
    if logger is not None:
        logger.log(HistogramLog(len(histogram), int(symbols.size)))
    return histogram
