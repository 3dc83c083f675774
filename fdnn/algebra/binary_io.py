""" Low level helpers for the fixed-width binary container format.

Every size word is a little-endian unsigned 64 bit integer. Element data
follow as the little-endian encoding of the container's dtype, row-major::

    Vector: [size][size * element]
    Matrix: [rows][cols][rows * cols * element]

"""
import numpy

from fdnn.core.exception import DimensionMismatch


SIZE_DTYPE = numpy.dtype('<u8')


def _little_endian(dtype):
    return numpy.dtype(dtype).newbyteorder('<')


def _read_exactly(stream, nbytes):
    buffer = stream.read(nbytes)
    if len(buffer) != nbytes:
        msg = "Expected {} bytes but the stream ended after {}"
        raise EOFError(msg.format(nbytes, len(buffer)))
    return buffer


def write_sizes(stream, *sizes):
    """ Write one size word per argument
    """
    stream.write(numpy.array(sizes, dtype=SIZE_DTYPE).tobytes())


def read_sizes(stream, count):
    """ Read `count` size words and return them as a tuple of ints
    """
    buffer = _read_exactly(stream, count * SIZE_DTYPE.itemsize)
    return tuple(int(size) for size in numpy.frombuffer(buffer, SIZE_DTYPE))


def check_sizes(stored, expected, kind):
    """ Raise DimensionMismatch if the stored header differs from the
    expected shape
    """
    if tuple(stored) != tuple(expected):
        msg = "Tried to load a {} of shape {} but the stream holds shape {}"
        raise DimensionMismatch(msg.format(
            kind, tuple(expected), tuple(stored)))


def write_elements(stream, array):
    """ Write the raw element bytes of `array` in row-major order
    """
    data = numpy.ascontiguousarray(
        array, dtype=_little_endian(array.dtype))
    stream.write(data.tobytes())


def read_elements(stream, count, dtype):
    """ Read `count` elements of `dtype` and return them as a flat,
    writable array in the native byte order
    """
    dtype = numpy.dtype(dtype)
    buffer = _read_exactly(stream, count * dtype.itemsize)
    data = numpy.frombuffer(buffer, dtype=_little_endian(dtype))
    return data.astype(dtype)
