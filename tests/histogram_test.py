import unittest
from huffcodec.histogram import create_histogram
from huffcodec.logger import Logger, HistogramLog

class TestCreateHistogram(unittest.TestCase):
    def test_counts(self):
        self.assertEqual(create_histogram(b"abb"), {97: 1, 98: 2})

    def test_single_symbol(self):
        self.assertEqual(create_histogram(b"aaaa"), {97: 4})

    def test_empty_input(self):
        self.assertEqual(create_histogram(b""), {})

    def test_full_byte_range(self):
        histogram = create_histogram(bytes(range(256)) * 2)
        self.assertEqual(len(histogram), 256)
        self.assertTrue(all(count == 2 for count in histogram.values()))

    def test_keys_are_plain_ints(self):
        histogram = create_histogram(bytearray(b"\x00\xff\xff"))
        self.assertEqual(histogram, {0: 1, 255: 2})
        for symbol, count in histogram.items():
            self.assertIs(type(symbol), int)
            self.assertIs(type(count), int)

    def test_invalid_type(self):
        with self.assertRaises(ValueError):
            create_histogram("abb")

    def test_logging(self):
        logger = Logger()
        create_histogram(b"abcab", logger)
        logs = [log for log in logger.logs if isinstance(log, HistogramLog)]
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0].distinct_symbols, 3)
        self.assertEqual(logs[0].total_symbols, 5)

if __name__ == '__main__':
    unittest.main()
