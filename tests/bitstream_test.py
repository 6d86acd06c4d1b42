import unittest
import numpy as np

from huffcodec.bitstream import (
    BitOutputStream,
    BitInputStream,
    frame_segment,
    read_padding,
    padding_for,
    pack_bits_to_bytes,
    unpack_bytes_to_bits,
    bits_to_text,
    text_to_bits,
)
from huffcodec.errors import MalformedStreamError
from huffcodec.logger import Logger, SegmentLog

class TestBitStreamHelpers(unittest.TestCase):
    def test_bit_output_stream(self):
        bos = BitOutputStream()
        for bit in [1, 0, 1, 0, 1, 0, 1, 0]:
            bos.write(bit)
        self.assertEqual(len(bos), 8)
        self.assertEqual(pack_bits_to_bytes(bos.to_array()), bytes([0b10101010]))

    def test_bit_output_stream_padding(self):
        bos = BitOutputStream()
        bos.write_bits([1, 0, 1])
        self.assertEqual(pack_bits_to_bytes(bos.to_array()), bytes([0b10100000]))

    def test_write_uint_msb_first(self):
        bos = BitOutputStream()
        bos.write_uint(97, 8)
        self.assertEqual(bits_to_text(bos.to_array()), "01100001")

    def test_write_uint_overflow(self):
        bos = BitOutputStream()
        with self.assertRaises(ValueError):
            bos.write_uint(256, 8)

    def test_invalid_bit_write(self):
        bos = BitOutputStream()
        with self.assertRaises(ValueError):
            bos.write(2)

    def test_bit_input_stream(self):
        bis = BitInputStream(unpack_bytes_to_bits(bytes([0b11001010])))
        bits = [bis.read() for _ in range(8)]
        self.assertEqual(bits, [1, 1, 0, 0, 1, 0, 1, 0])
        self.assertEqual(bis.remaining, 0)

    def test_bit_input_stream_offset_and_uint(self):
        bis = BitInputStream(text_to_bits("1101100001"), offset=2)
        self.assertEqual(bis.read_uint(8), 97)
        self.assertEqual(bis.position, 10)

    def test_read_past_end(self):
        bis = BitInputStream(text_to_bits("101"))
        with self.assertRaises(MalformedStreamError):
            bis.read_uint(8)

    def test_offset_out_of_range(self):
        with self.assertRaises(MalformedStreamError):
            BitInputStream(text_to_bits("101"), offset=4)

    def test_non_zero_padding(self):
        bis = BitInputStream(text_to_bits("0010"))
        with self.assertRaises(MalformedStreamError):
            bis.skip_padding(4)

class TestSegments(unittest.TestCase):
    def test_padding_for(self):
        self.assertEqual(padding_for(0), 0)
        self.assertEqual(padding_for(3), 5)
        self.assertEqual(padding_for(8), 0)
        self.assertEqual(padding_for(19), 5)

    def test_frame_segment(self):
        segment = frame_segment(text_to_bits("011"))
        self.assertEqual(bits_to_text(segment), "00000101" + "011" + "00000")

    def test_frame_empty_segment(self):
        self.assertEqual(bits_to_text(frame_segment(text_to_bits(""))), "00000000")

    def test_frame_segment_alignment_and_bound(self):
        for n in range(0, 33):
            segment = frame_segment(np.ones(n, dtype=np.uint8))
            self.assertEqual(len(segment) % 8, 0)
            padding = read_padding(BitInputStream(segment))
            self.assertTrue(0 <= padding <= 7)
            self.assertEqual(len(segment), 8 + n + padding)

    def test_read_padding_rejects_large_count(self):
        with self.assertRaises(MalformedStreamError):
            read_padding(BitInputStream(text_to_bits("00001000")))

    def test_segment_logging(self):
        logger = Logger()
        frame_segment(text_to_bits("011"), "payload", logger)
        logs = [log for log in logger.logs if isinstance(log, SegmentLog)]
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0].segment_name, "payload")
        self.assertEqual(logs[0].payload_bits, 3)
        self.assertEqual(logs[0].padding, 5)

class TestConversions(unittest.TestCase):
    def test_unpack_bytes(self):
        self.assertEqual(bits_to_text(unpack_bytes_to_bits(b"\x80\x01")), "1000000000000001")

    def test_text_to_bits_strips_whitespace(self):
        self.assertEqual(text_to_bits(" 0101\n").tolist(), [0, 1, 0, 1])

    def test_text_to_bits_rejects_other_characters(self):
        for text in ("0120", "01 10", "abc", "01é"):
            with self.assertRaises(MalformedStreamError):
                text_to_bits(text)

    def test_invalid_types(self):
        with self.assertRaises(ValueError):
            pack_bits_to_bytes([1, 0])
        with self.assertRaises(ValueError):
            unpack_bytes_to_bits("10")
        with self.assertRaises(ValueError):
            text_to_bits(b"10")

if __name__ == '__main__':
    unittest.main()
