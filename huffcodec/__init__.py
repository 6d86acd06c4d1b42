"""
huffcodec: Huffman compression of byte streams with a self-describing bitstream.
"""

from .codecs import (
    CompressedModel,
    CompressedModelFile,
    HuffmanCodec,
    HuffmanCodecFile,
    HuffmanCodecText,
)

from .coders import (
    CoderBase,
    HuffmanCoder,
    build_code_table,
    get_coder,
)

from .models import (
    Node,
    Leaf,
    Internal,
)

from .histogram import create_histogram
from .tree_builder import build_tree
from .tree_codec import serialize_tree, deserialize_tree

from .bitstream import (
    BitOutputStream,
    BitInputStream,
    frame_segment,
    padding_for,
    pack_bits_to_bytes,
    unpack_bytes_to_bits,
    bits_to_text,
    text_to_bits,
)

from .errors import (
    HuffmanCodecError,
    EmptyInputError,
    MalformedStreamError,
    UnknownSymbolError,
)

from .logger import (
    Logger,
    Log,
    LogLevel,
    HistogramLog,
    TreeBuildLog,
    CodeAssignmentLog,
    SegmentLog,
    CodingProgressStep,
)

# Validators
from .validators import *

__all__ = [

    "CompressedModel",
    "CompressedModelFile",
    "HuffmanCodec",
    "HuffmanCodecFile",
    "HuffmanCodecText",

    "CoderBase",
    "HuffmanCoder",
    "build_code_table",
    "get_coder",

    "Node",
    "Leaf",
    "Internal",

    "create_histogram",
    "build_tree",
    "serialize_tree",
    "deserialize_tree",

    "BitOutputStream",
    "BitInputStream",
    "frame_segment",
    "padding_for",
    "pack_bits_to_bytes",
    "unpack_bytes_to_bits",
    "bits_to_text",
    "text_to_bits",

    "HuffmanCodecError",
    "EmptyInputError",
    "MalformedStreamError",
    "UnknownSymbolError",

    "Logger",
    "Log",
    "LogLevel",
    "HistogramLog",
    "TreeBuildLog",
    "CodeAssignmentLog",
    "SegmentLog",
    "CodingProgressStep",

    "validate_type",
    "validate_file_exists",
]
