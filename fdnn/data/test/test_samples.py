import os
import tempfile
import unittest

import numpy as np

from fdnn.algebra.vector import Vector
from fdnn.core.exception import DimensionMismatch
from fdnn.data.samples import LabeledSample, load_csv, make_samples


class TestSamples(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def write_csv(self, text):
        filename = os.path.join(self.tmp_dir.name, 'data.csv')
        with open(filename, 'w') as f:
            f.write(text)
        return filename

    def test_make_samples(self):
        inputs = np.arange(6).reshape(3, 2)
        samples = make_samples(inputs, [0, 1, 1], dtype=np.float64)

        self.assertEqual(len(samples), 3)
        self.assertIsInstance(samples[0], LabeledSample)
        self.assertIsInstance(samples[0].input, Vector)
        self.assertEqual(samples[2].input.to_array().tolist(), [4, 5])
        self.assertEqual(samples[2].label, 1)

    def test_make_samples_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            make_samples(np.zeros((3, 2)), [0, 1])

        with self.assertRaises(ValueError):
            make_samples(np.zeros((2, 2)), [0, -1])

    def test_load_csv(self):
        filename = self.write_csv("3,0,255,51\n1,255,0,0\n")

        samples = load_csv(filename, 3, dtype=np.float64)

        self.assertEqual([s.label for s in samples], [3, 1])
        self.assertTrue(np.allclose(
            samples[0].input.to_array(), [0, 1, 0.2]))

    def test_load_csv_n_samples_and_header(self):
        filename = self.write_csv(
            "label,a,b\n0,1,2\n1,3,4\n\n2,5,6\n")

        samples = load_csv(filename, 2, n_samples=2, scale=1.0,
                           skip_header=True, dtype=np.float64)

        self.assertEqual(len(samples), 2)
        self.assertEqual(samples[1].input.to_array().tolist(), [3, 4])

    def test_load_csv_wrong_width(self):
        filename = self.write_csv("0,1,2,3\n1,3,4,5\n")

        with self.assertRaises(DimensionMismatch):
            load_csv(filename, 2)

    def test_load_csv_unparseable(self):
        for text in ["0,1,2\n1,3\n", "0,1,x\n"]:
            filename = self.write_csv(text)

            with self.assertRaises(ValueError):
                load_csv(filename, 2)

    def test_load_csv_single_row(self):
        filename = self.write_csv("2,10,20\n")

        samples = load_csv(filename, 2, scale=10.0, dtype=np.float64)

        self.assertEqual(len(samples), 1)
        self.assertEqual(samples[0].label, 2)
        self.assertEqual(samples[0].input.to_array().tolist(), [1, 2])

    def test_load_csv_bad_label(self):
        filename = self.write_csv("0.5,1,2\n")

        with self.assertRaises(ValueError):
            load_csv(filename, 2)

    def test_load_csv_missing_file(self):
        with self.assertRaises(OSError):
            load_csv(os.path.join(self.tmp_dir.name, 'missing.csv'), 2)


if __name__ == '__main__':
    unittest.main()
