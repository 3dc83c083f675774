from collections import namedtuple
import logging

import numpy

from fdnn.algebra.vector import DEFAULT_DTYPE, Vector, validate_size
from fdnn.core.exception import DimensionMismatch


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


# An input vector and its integer class label
LabeledSample = namedtuple('LabeledSample', ['input', 'label'])


def make_samples(inputs, labels, dtype=DEFAULT_DTYPE):
    """ Wrap the rows of `inputs` and the entries of `labels` into a list
    of labeled samples

    Parameters
    ----------
    inputs: ndarray, shape=(n_samples, input_size)

    labels: ndarray, shape=(n_samples,)
        Non-negative integer class labels.

    Returns
    -------
    samples: list of LabeledSample

    """
    inputs = numpy.asarray(inputs)
    labels = numpy.asarray(labels)

    if inputs.ndim != 2:
        msg = "`inputs` should be two dimensional but has shape {}"
        raise DimensionMismatch(msg.format(inputs.shape))

    if labels.shape != (inputs.shape[0],):
        msg = "`labels` shape {} does not match {} inputs"
        raise DimensionMismatch(msg.format(labels.shape, inputs.shape[0]))

    samples = []
    for i in range(inputs.shape[0]):
        label = _validate_label(labels[i], i)
        samples.append(LabeledSample(
            input=Vector.from_array(inputs[i], dtype=dtype), label=label))

    return samples


def _validate_label(label, index):
    if float(label) != int(label) or int(label) < 0:
        msg = "Label of sample {} ({}) is not a non-negative integer"
        raise ValueError(msg.format(index, label))
    return int(label)


def load_csv(filename, input_size, n_samples=None, scale=255.0,
             delimiter=',', skip_header=False, dtype=DEFAULT_DTYPE):
    """ Load labeled samples from a delimited text file

    Each row holds the integer label followed by `input_size` values, e.g.
    the MNIST csv format::

        label,pixel0,pixel1,...,pixel783

    Parameters
    ----------
    filename: str
        Path to the file.

    input_size: int
        Number of values after the label in every row.

    n_samples: int, default=None
        Read at most this many rows; None reads the whole file.

    scale: float, default=255.0
        Every input value is divided by `scale`.

    delimiter: str, default=','

    skip_header: bool, default=False
        If True, the first line is skipped.

    Returns
    -------
    samples: list of LabeledSample

    """
    input_size = validate_size(input_size, 'input_size')
    if n_samples is not None:
        n_samples = validate_size(n_samples, 'n_samples')

    try:
        data = numpy.loadtxt(
            filename, delimiter=delimiter, skiprows=int(bool(skip_header)),
            max_rows=n_samples, ndmin=2, dtype=numpy.float64)
    except ValueError as err:
        msg = "Could not parse {}: {}"
        raise ValueError(msg.format(filename, err)) from err

    if data.shape[0] > 0 and data.shape[1] != input_size + 1:
        msg = ("Rows of {} have {} values but expected a label "
               "and {} inputs")
        raise DimensionMismatch(msg.format(
            filename, data.shape[1], input_size))

    samples = []
    for i, row in enumerate(data):
        label = _validate_label(row[0], i)
        inputs = Vector.from_array(row[1:] / scale, dtype=dtype)
        samples.append(LabeledSample(input=inputs, label=label))

    if n_samples is not None and len(samples) < n_samples:
        msg = "Requested {} samples but {} only holds {}"
        logger.warning(msg.format(n_samples, filename, len(samples)))

    msg = "Loaded {} samples from {}"
    logger.info(msg.format(len(samples), filename))

    return samples
