import io
import struct
import unittest

import numpy as np

from fdnn.algebra import binary_io
from fdnn.core.exception import DimensionMismatch


class TestBinaryIO(unittest.TestCase):

    def test_size_words_are_little_endian_u64(self):
        stream = io.BytesIO()
        binary_io.write_sizes(stream, 3, 258)
        self.assertEqual(stream.getvalue(), struct.pack('<QQ', 3, 258))

        stream.seek(0)
        self.assertEqual(binary_io.read_sizes(stream, 2), (3, 258))

    def test_elements_are_little_endian(self):
        array = np.array([[1.5, -2.0]], dtype=np.float32)
        stream = io.BytesIO()
        binary_io.write_elements(stream, array)
        self.assertEqual(stream.getvalue(), struct.pack('<ff', 1.5, -2.0))

    def test_big_endian_input_is_written_little_endian(self):
        array = np.array([1.0], dtype='>f8')
        stream = io.BytesIO()
        binary_io.write_elements(stream, array)
        self.assertEqual(stream.getvalue(), struct.pack('<d', 1.0))

    def test_read_elements_is_writable(self):
        stream = io.BytesIO(struct.pack('<ff', 1.0, 2.0))
        data = binary_io.read_elements(stream, 2, np.float32)
        data[0] = 5.0
        self.assertEqual(data.tolist(), [5.0, 2.0])

    def test_check_sizes(self):
        binary_io.check_sizes((2, 3), (2, 3), 'matrix')
        with self.assertRaises(DimensionMismatch):
            binary_io.check_sizes((2, 3), (3, 2), 'matrix')

    def test_short_stream(self):
        with self.assertRaises(EOFError):
            binary_io.read_sizes(io.BytesIO(b'\x01\x00'), 1)


if __name__ == '__main__':
    unittest.main()
