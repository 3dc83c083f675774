import io
import unittest

import numpy as np

from fdnn.algebra.matrix import Matrix
from fdnn.algebra.vector import Vector
from fdnn.core.exception import DimensionMismatch, IndexOutOfRange


class TestMatrix(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)

    def random_matrix(self, rows, cols, dtype=np.float64):
        return Matrix.from_array(
            self.random_state.randn(rows, cols), dtype=dtype)

    def test_from_rows(self):
        m = Matrix.from_rows(2, 3, [[1, 2, 3], [4, 5, 6]])
        self.assertEqual(m.shape, (2, 3))
        self.assertEqual(m[1, 2], 6)

    def test_from_rows_wrong_shape(self):
        with self.assertRaises(DimensionMismatch):
            Matrix.from_rows(3, 2, [[1, 2], [3, 4]])

        with self.assertRaises(DimensionMismatch):
            Matrix.from_rows(2, 2, [[1, 2], [3, 4, 5]])

    def test_row_access_writes_through(self):
        m = Matrix.zeros(2, 2, dtype=np.float64)
        m[1][0] = 3.0
        self.assertEqual(m.to_array().tolist(), [[0, 0], [3, 0]])

    def test_row_assignment(self):
        m = Matrix.zeros(2, 3, dtype=np.float64)
        m[0] = Vector.from_elements(3, [1, 2, 3], dtype=np.float64)
        self.assertEqual(m[0].to_array().tolist(), [1, 2, 3])

        with self.assertRaises(DimensionMismatch):
            m[1] = Vector.zeros(2)

    def test_row_index_out_of_range(self):
        m = Matrix.zeros(2, 3)

        with self.assertRaises(IndexOutOfRange):
            m[2]

        with self.assertRaises(IndexOutOfRange):
            m[0, 3]

        with self.assertRaises(IndexOutOfRange):
            m[0][3]

    def test_add_commutes_and_sub_inverts(self):
        a = self.random_matrix(4, 3)
        b = self.random_matrix(4, 3)

        self.assertTrue(np.allclose((a + b).to_array(), (b + a).to_array()))
        self.assertTrue(np.allclose(((a + b) - b).to_array(), a.to_array()))

    def test_shape_mismatch(self):
        a = Matrix.zeros(2, 3)
        b = Matrix.zeros(3, 2)

        with self.assertRaises(DimensionMismatch):
            a + b

        with self.assertRaises(DimensionMismatch):
            a *= b

    def test_scalar_arithmetic_and_compound(self):
        m = Matrix.from_rows(1, 2, [[2, 4]], dtype=np.float64)

        self.assertEqual((m * 0.5).to_array().tolist(), [[1, 2]])
        self.assertEqual((m / 2).to_array().tolist(), [[1, 2]])
        self.assertEqual((m - 2).to_array().tolist(), [[0, 2]])

        alias = m
        m += m
        self.assertIs(m, alias)
        self.assertEqual(m.to_array().tolist(), [[4, 8]])

    def test_numpy_scalar_on_the_left(self):
        m = Matrix.filled(2, 2, 1.0)

        scaled = np.float64(2) * m
        self.assertIsInstance(scaled, Matrix)
        self.assertEqual(scaled.shape, (2, 2))
        self.assertEqual(scaled.to_array().tolist(), [[2, 2], [2, 2]])

        shifted = np.float32(3) - m
        self.assertIsInstance(shifted, Matrix)
        self.assertEqual(shifted.to_array().tolist(), [[2, 2], [2, 2]])

        with self.assertRaises(TypeError):
            m + np.ones((2, 2))

    def test_apply(self):
        m = Matrix.from_rows(2, 2, [[1, -2], [-3, 4]], dtype=np.float64)
        out = m.apply(abs)
        self.assertEqual(out.to_array().tolist(), [[1, 2], [3, 4]])

    def test_transpose_twice(self):
        for rows, cols in [(1, 1), (2, 5), (7, 3)]:
            m = self.random_matrix(rows, cols)
            t = m.transpose()

            self.assertEqual(t.shape, (cols, rows))
            self.assertEqual(t.transpose(), m)

    def test_transpose_values(self):
        m = Matrix.from_rows(2, 3, [[1, 2, 3], [4, 5, 6]])
        t = m.transpose()
        self.assertEqual(t.to_array().tolist(), [[1, 4], [2, 5], [3, 6]])

    def test_dot_hand_computed(self):
        a = Matrix.from_rows(2, 3, [[1, 2, 3], [4, 5, 6]], dtype=np.float64)
        b = Matrix.from_rows(3, 2, [[7, 8], [9, 10], [11, 12]],
                             dtype=np.float64)

        out = a.dot(b)

        self.assertEqual(out.shape, (2, 2))
        # [1*7 + 2*9 + 3*11, 1*8 + 2*10 + 3*12], ...
        self.assertEqual(out.to_array().tolist(), [[58, 64], [139, 154]])

    def test_dot_dimension_mismatch(self):
        a = Matrix.zeros(2, 3)

        for rows in [1, 2, 4]:
            with self.assertRaises(DimensionMismatch):
                a.dot(Matrix.zeros(rows, 2))

        with self.assertRaises(DimensionMismatch):
            a.dot(Vector.zeros(2))

    def test_dot_vector(self):
        m = Matrix.from_rows(2, 3, [[1, 2, 3], [4, 5, 6]], dtype=np.float64)
        v = Vector.from_elements(3, [1, 0, -1], dtype=np.float64)

        out = m.dot(v)

        self.assertIsInstance(out, Vector)
        self.assertEqual(out.to_array().tolist(), [-2, -2])

    def test_flatten(self):
        m = Matrix.from_rows(2, 3, [[1, 2, 3], [4, 5, 6]])

        vertical = m.flatten_vertical()
        horizontal = m.flatten_horizontal()

        self.assertEqual(vertical.shape, (6, 1))
        self.assertEqual(horizontal.shape, (1, 6))
        self.assertEqual(
            vertical.to_array().ravel().tolist(), [1, 2, 3, 4, 5, 6])
        self.assertEqual(horizontal.to_array()[0].tolist(), [1, 2, 3, 4, 5, 6])

    def test_randomize_bounds(self):
        m = Matrix(20, 30)
        m.randomize(16, random_state=self.random_state)

        values = m.to_array()
        self.assertTrue((values >= -0.25).all())
        self.assertTrue((values <= 0.25).all())
        self.assertTrue((values < 0).any())
        self.assertTrue((values > 0).any())

    def test_randomize_reproducible(self):
        a = Matrix(3, 4).randomize(4, random_state=np.random.RandomState(5))
        b = Matrix(3, 4).randomize(4, random_state=np.random.RandomState(5))
        self.assertEqual(a, b)

    def test_randomize_granularity(self):
        m = Matrix(10, 10, dtype=np.float64)
        m.randomize(1, random_state=self.random_state, granularity=10)

        # Samples lie on a grid of width 1/10 starting at -1
        scaled = (m.to_array() + 1) * 10
        self.assertTrue(np.allclose(scaled, np.round(scaled)))
        self.assertTrue((m.to_array() >= -1).all())
        self.assertTrue((m.to_array() < 1).all())

    def test_binary_round_trip(self):
        m = Matrix(4, 5, dtype=np.float32)
        m.randomize(5, random_state=self.random_state)

        stream = io.BytesIO()
        m.save_binary(stream)
        self.assertEqual(len(stream.getvalue()), 2 * 8 + 4 * 5 * 4)

        stream.seek(0)
        loaded = Matrix.load_binary(stream, 4, 5, dtype=np.float32)

        self.assertEqual(loaded.to_array().tobytes(), m.to_array().tobytes())

    def test_binary_shape_mismatch(self):
        m = Matrix.zeros(4, 5)
        stream = io.BytesIO()
        m.save_binary(stream)

        for rows, cols in [(5, 4), (4, 6), (3, 5)]:
            stream.seek(0)
            with self.assertRaises(DimensionMismatch):
                Matrix.load_binary(stream, rows, cols)

    def test_binary_truncated(self):
        stream = io.BytesIO()
        Matrix.zeros(4, 5).save_binary(stream)
        truncated = io.BytesIO(stream.getvalue()[:-1])

        with self.assertRaises(EOFError):
            Matrix.load_binary(truncated, 4, 5)


if __name__ == '__main__':
    unittest.main()
