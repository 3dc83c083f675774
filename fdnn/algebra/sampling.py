import logging

import numpy


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def get_random_state(random_state=None):
    """ Validate `random_state`, creating a fresh one when None
    """
    if random_state is None:
        msg = "RandomState not provided; results will not be reproducible"
        logger.warning(msg)
        return numpy.random.RandomState()

    if not isinstance(random_state, numpy.random.RandomState):
        msg = "`random_state` ({}) not instance numpy.random.RandomState"
        raise TypeError(msg.format(type(random_state)))

    return random_state


def uniform_distribution(low, high, random_state, size=None,
                         granularity=None):
    """ Sample uniformly from the interval `[low, high)`

    Parameters
    ----------
    low, high: float
        The interval bounds. Negative values are fine, but `high` must be
        greater than `low`.

    random_state: numpy.random.RandomState
        Source of randomness. There is no global fallback.

    size: int or tuple of int, default=None
        Output shape; None returns a single float.

    granularity: int, default=None
        If None, samples come from the continuous uniform distribution.
        Otherwise the interval is split into `int((high - low) * granularity)`
        buckets of width `1 / granularity`, a bucket index is drawn
        uniformly, and the sample is `low + index / granularity`.

    Returns
    -------
    samples: float or ndarray

    """
    if not high > low:
        msg = "`high` ({}) must be greater than `low` ({})"
        raise ValueError(msg.format(high, low))

    if granularity is None:
        return random_state.uniform(low, high, size=size)

    if int(granularity) != granularity or granularity <= 0:
        msg = "`granularity` ({}) must be a positive integer or None"
        raise ValueError(msg.format(granularity))

    n_buckets = int((high - low) * granularity)
    if n_buckets < 1:
        msg = "Interval [{}, {}) is narrower than one bucket of width 1/{}"
        raise ValueError(msg.format(low, high, granularity))

    buckets = random_state.randint(0, n_buckets, size=size)
    return low + 1.0 * buckets / granularity
