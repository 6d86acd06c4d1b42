"""
validators.py

Shared codes for input validation in huffcodec.
"""


import os
from typing import Any, Tuple, Union

def validate_type(variable: Any, name: str, expected_type: Union[type, Tuple[type, ...]]) -> None:
    """Validate that variable is of the expected type."""
    if not isinstance(variable, expected_type):
        if isinstance(expected_type, tuple):
            type_name = " or ".join(t.__name__ for t in expected_type)
        else:
            type_name = expected_type.__name__
        raise ValueError(f"{name} must be of type {type_name}")


def validate_file_exists(file_path: str) -> None:
    """Validate that the given file path exists."""
    if not os.path.exists(file_path):
        raise ValueError(f"File does not exist: {file_path}")
