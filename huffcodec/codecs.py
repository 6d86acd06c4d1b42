import os
import struct
from typing import Optional

from .bitstream import bits_to_text, text_to_bits
from .coders import HuffmanCoder, get_coder
from .errors import EmptyInputError, MalformedStreamError
from .logger import Logger
from .settings import FILE_SIGNATURE, FORMAT_VERSION, MAX_CONTAINER_FIELD
from .validators import validate_type, validate_file_exists

HEADER_FMT = "<3sBBII"
HEADER_SIZE = struct.calcsize(HEADER_FMT)
LENGTH_FMT = "<I"
LENGTH_SIZE = struct.calcsize(LENGTH_FMT)


class CompressedModel:
    """Represents a compressed file."""

    def __init__(
        self,
        version: int,
        coder_code: int,
        symbol_count: int,
        data: bytes,
        original_file_name: Optional[str] = None,
    ) -> None:
        validate_type(version, "Version", int)
        validate_type(coder_code, "Coder code", int)
        validate_type(symbol_count, "Symbol count", int)
        validate_type(data, "Data", bytes)
        if original_file_name is not None:
            validate_type(original_file_name, "Original file name", str)

        if version != FORMAT_VERSION:
            raise ValueError("Version not supported")
        if symbol_count < 1:
            raise ValueError("Symbol count must be positive")
        if symbol_count > MAX_CONTAINER_FIELD:
            raise ValueError(f"Symbol count {symbol_count} does not fit the container")
        if len(data) > MAX_CONTAINER_FIELD:
            raise ValueError(f"Data of {len(data)} bytes does not fit the container")

        get_coder(coder_code)

        self.original_file_name = original_file_name
        self.version = version
        self.coder_code = coder_code
        self.symbol_count = symbol_count
        self.data = data

    @staticmethod
    def serialize(model: 'CompressedModel') -> bytes:
        """
        Serialize a CompressedModel instance into bytes.

        The format (little-endian):
          - signature (3 bytes, b"HFC")
          - version (1 byte, unsigned)
          - coder_code (1 byte, unsigned)
          - symbol_count (4 bytes, unsigned int)
          - data length (4 bytes, unsigned int)
          - data (variable length, the packed bitstream)
          - original_file_name length (4 bytes, unsigned int; 0 if None)
          - original_file_name (UTF-8 encoded, if present)
        """
        file_name_bytes = (
            model.original_file_name.encode("utf-8") if model.original_file_name is not None else b""
        )
        if len(file_name_bytes) > MAX_CONTAINER_FIELD:
            raise ValueError("Original file name does not fit the container")

        serialized = struct.pack(
            HEADER_FMT,
            FILE_SIGNATURE,
            model.version,
            model.coder_code,
            model.symbol_count,
            len(model.data),
        )
        serialized += model.data
        serialized += struct.pack(LENGTH_FMT, len(file_name_bytes))
        serialized += file_name_bytes

        return serialized

    @staticmethod
    def deserialize(serialized: bytes) -> 'CompressedModel':
        """
        Deserialize bytes into a CompressedModel instance.
        The byte structure is expected to be the same as produced by serialize().
        """
        validate_type(serialized, "Serialized data", bytes)
        if len(serialized) < HEADER_SIZE:
            raise MalformedStreamError("Serialized data is too short")
        signature, version, coder_code, symbol_count, data_length = struct.unpack(HEADER_FMT, serialized[:HEADER_SIZE])
        if signature != FILE_SIGNATURE:
            raise MalformedStreamError("Invalid file signature")
        if version != FORMAT_VERSION:
            raise MalformedStreamError(f"Unsupported version: {version}")
        offset = HEADER_SIZE

        if len(serialized) < offset + data_length:
            raise MalformedStreamError("Serialized data is incomplete for data")
        data = serialized[offset : offset + data_length]
        offset += data_length

        if len(serialized) < offset + LENGTH_SIZE:
            raise MalformedStreamError("Serialized data is incomplete for file name length")
        file_name_length, = struct.unpack(LENGTH_FMT, serialized[offset : offset + LENGTH_SIZE])
        offset += LENGTH_SIZE
        if len(serialized) < offset + file_name_length:
            raise MalformedStreamError("Serialized data is incomplete for file name")
        try:
            if file_name_length > 0:
                original_file_name = serialized[offset : offset + file_name_length].decode("utf-8")
            else:
                original_file_name = None
            return CompressedModel(version, coder_code, symbol_count, data, original_file_name)
        except ValueError as e:
            raise MalformedStreamError(f"Invalid container: {e}")


class CompressedModelFile:
    """Provides methods to write and read a CompressedModel instance to/from a file."""

    @staticmethod
    def write_to_file(model: CompressedModel, file_path: str) -> None:
        """
        Serialize the model and write it as binary data to the given file.

        Args:
            model (CompressedModel): The compressed model to write.
            file_path (str): The path to the output file.
        """
        serialized_data = CompressedModel.serialize(model)
        with open(file_path, "wb") as file:
            file.write(serialized_data)

    @staticmethod
    def read_from_file(file_path: str) -> CompressedModel:
        """
        Read binary data from the given file and deserialize it into a CompressedModel instance.

        Args:
            file_path (str): The path to the compressed file.

        Returns:
            CompressedModel: The deserialized compressed model.
        """
        with open(file_path, "rb") as file:
            serialized_data = file.read()
        return CompressedModel.deserialize(serialized_data)


class HuffmanCodec:
    def compress(self, data: bytes, logger: Optional[Logger] = None) -> CompressedModel:
        """
        Compress the input data.

        Args:
            data (bytes): The data to compress.
            logger: Logger instance for logging.

        Returns:
            CompressedModel: The resulting compressed model.
        """
        validate_type(data, "Data", bytes)
        if not data:
            raise EmptyInputError("Cannot compress empty input")

        coder = HuffmanCoder(logger)
        return CompressedModel(FORMAT_VERSION, coder.get_coder_code(), len(data), coder.encode_packed(data))

    def decompress(self, compressed_model: CompressedModel, logger: Optional[Logger] = None) -> bytes:
        """
        Decompress the encoded data.

        Args:
            compressed_model (CompressedModel): The compressed model.
            logger: Logger instance for logging.

        Returns:
            bytes: The decompressed data.
        """
        if not isinstance(compressed_model, CompressedModel):
            raise ValueError("Input must be a CompressedModel instance")

        coder = get_coder(compressed_model.coder_code, logger=logger)
        return coder.decode_packed(compressed_model.data, compressed_model.symbol_count)


class HuffmanCodecFile(HuffmanCodec):
    def compress(self, input_path: str, output_path: str, logger: Optional[Logger] = None) -> None:
        """
        Compress the input file and write the compressed model to an output file.

        Args:
            input_path (str): Path to the input file.
            output_path (str): Path to the output file.
            logger: Logger instance for logging.
        """
        validate_type(input_path, "Input path", str)
        validate_type(output_path, "Output path", str)
        validate_file_exists(input_path)

        with open(input_path, "rb") as file:
            data = file.read()

        compressed_model = super().compress(data, logger)
        compressed_model.original_file_name = os.path.basename(input_path)
        CompressedModelFile.write_to_file(compressed_model, output_path)

    def decompress(self, compressed_file_path: str, output_file_path: str, logger: Optional[Logger] = None) -> None:
        """
        Decompress the input file and write the decompressed data to an output file.

        Args:
            compressed_file_path (str): Path to the compressed file.
            output_file_path (str): Path to the output file.
            logger: Logger instance for logging.
        """
        validate_type(compressed_file_path, "Compressed file path", str)
        validate_type(output_file_path, "Output file path", str)
        validate_file_exists(compressed_file_path)

        compressed_model = CompressedModelFile.read_from_file(compressed_file_path)
        data = super().decompress(compressed_model, logger)
        with open(output_file_path, "wb") as file:
            file.write(data)


class HuffmanCodecText:
    """
    The bitstream as a string of '0' and '1' characters, one per bit.

    The text form carries no symbol count, so input with a single distinct
    byte value can only be decompressed when symbol_count is given.
    """

    def compress(self, data: bytes, logger: Optional[Logger] = None) -> str:
        validate_type(data, "Data", bytes)
        return bits_to_text(HuffmanCoder(logger).encode(data))

    def decompress(self, text: str, symbol_count: Optional[int] = None, logger: Optional[Logger] = None) -> bytes:
        bits = text_to_bits(text)
        return HuffmanCoder(logger).decode(bits, symbol_count)
