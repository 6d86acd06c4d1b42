"""
settings.py

Constants shared across huffcodec.
"""

# Bit widths of the fixed-size fields in the bitstream.
PAD_FIELD_BITS = 8
SYMBOL_BITS = 8
MAX_PADDING = 7

ALPHABET_SIZE = 256

# A full tree over 256 leaves is at most 255 levels deep.
MAX_TREE_DEPTH = ALPHABET_SIZE - 1

# Container
FILE_SIGNATURE = b"HFC"
FORMAT_VERSION = 1
COMPRESSED_FILE_EXTENSION = ".hfc"

CODER_CODE = 1

# Symbols coded between two progress ticks.
PROGRESS_STEP_SYMBOLS = 4096

# Bits walked per chunk when decoding.
DECODE_CHUNK_BITS = 1 << 19

# Largest value of an unsigned 32-bit container field.
MAX_CONTAINER_FIELD = 0xFFFFFFFF

# Upper bound on a serialized tree segment over the full alphabet.
MAX_TREE_SEGMENT_BYTES = (PAD_FIELD_BITS + (2 * ALPHABET_SIZE - 1) + ALPHABET_SIZE * SYMBOL_BITS + MAX_PADDING) // 8
