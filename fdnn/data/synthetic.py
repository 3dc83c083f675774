""" Small, linearly or non-linearly separable 2d datasets for exercising
the network.
"""
import numpy

from fdnn.algebra.sampling import get_random_state
from fdnn.algebra.vector import DEFAULT_DTYPE
from fdnn.data.samples import make_samples


def make_two_clusters(n_samples, random_state=None, centers=None,
                      sigma=0.1, dtype=DEFAULT_DTYPE):
    """ Two Gaussian clusters, labeled 0 and 1, alternating by index

    Parameters
    ----------
    n_samples: int
        The number of examples.

    random_state: numpy.random.RandomState, default=None
        Include for reproducible results.

    centers: array-like, shape=(2, 2), default=None
        Cluster centers; the default is (0.2, 0.8) and (0.8, 0.2).

    sigma: float, default=0.1
        Standard deviation of each cluster.

    Returns
    -------
    samples: list of LabeledSample

    """
    random_state = get_random_state(random_state)

    if centers is None:
        centers = [[0.2, 0.8], [0.8, 0.2]]
    centers = numpy.asarray(centers, dtype=numpy.float64)

    if centers.shape != (2, 2):
        msg = "`centers` was shape {} but should be (2, 2)"
        raise ValueError(msg.format(centers.shape))

    labels = numpy.arange(n_samples) % 2
    inputs = centers[labels] + sigma * random_state.randn(n_samples, 2)

    return make_samples(inputs, labels, dtype=dtype)


def make_xor(n_samples, random_state=None, dtype=DEFAULT_DTYPE):
    """ Points drawn uniformly from the unit square; the label is 1 when
    exactly one coordinate exceeds 0.5 (the XOR quadrants)

    A margin of 0.1 around the quadrant boundaries is kept empty.
    """
    random_state = get_random_state(random_state)

    inputs = numpy.empty((n_samples, 2))
    for i in range(n_samples):
        point = random_state.uniform(0, 1, size=2)
        while numpy.any(numpy.abs(point - 0.5) < 0.1):
            point = random_state.uniform(0, 1, size=2)
        inputs[i] = point

    labels = numpy.logical_xor(inputs[:, 0] > 0.5, inputs[:, 1] > 0.5)

    return make_samples(inputs, labels.astype(int), dtype=dtype)
