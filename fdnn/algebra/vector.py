import numpy

from fdnn.algebra import binary_io
from fdnn.core.exception import (
    DimensionMismatch, EmptyContainer, IndexOutOfRange)


DEFAULT_DTYPE = numpy.float32


def validate_size(size, name='size'):
    """ Returns `size` as an int after checking it is a non-negative integer
    """
    if isinstance(size, (bool, numpy.bool_)) or \
            not isinstance(size, (int, numpy.integer)):
        msg = "`{}` ({}) must be an integer"
        raise TypeError(msg.format(name, size))

    if size < 0:
        msg = "`{}` ({}) must be non-negative"
        raise ValueError(msg.format(name, size))

    return int(size)


def validate_index(index, size, kind='element'):
    """ Returns `index` as an int after checking `0 <= index < size`
    """
    if isinstance(index, (bool, numpy.bool_)) or \
            not isinstance(index, (int, numpy.integer)):
        msg = "Index ({!r}) must be an integer"
        raise TypeError(msg.format(index))

    if index < 0 or index >= size:
        msg = "Tried to access {} {} but there are {} {}s"
        raise IndexOutOfRange(msg.format(kind, index, size, kind))

    return int(index)


class Vector(object):
    """ A fixed-length vector of numbers.

    The length (`size`) and element type (`dtype`) are set at construction
    and never change. Arithmetic is element-wise and only defined between
    vectors of the same size, or between a vector and a scalar.

    Note
    ----
    :meth:`dot` is the *outer* product of two vectors, producing a matrix.
    Back-propagation builds its weight-shaped gradients with it.
    """

    def __init__(self, size, dtype=DEFAULT_DTYPE):
        """ Create a vector with unspecified contents

        Parameters
        ----------
        size: int
            The fixed number of elements.

        dtype: numpy dtype, default=numpy.float32
            The element type.

        """
        size = validate_size(size)
        self._data = numpy.empty(size, dtype=dtype)

    @classmethod
    def _wrap(cls, data):
        """ Wrap a 1d array without copying it
        """
        vector = cls.__new__(cls)
        vector._data = data
        return vector

    @classmethod
    def filled(cls, size, value, dtype=DEFAULT_DTYPE):
        """ Create a vector with every element set to `value`
        """
        size = validate_size(size)
        return cls._wrap(numpy.full(size, value, dtype=dtype))

    @classmethod
    def zeros(cls, size, dtype=DEFAULT_DTYPE):
        return cls.filled(size, 0, dtype=dtype)

    @classmethod
    def from_elements(cls, size, elements, dtype=DEFAULT_DTYPE):
        """ Create a vector from exactly `size` literal elements
        """
        size = validate_size(size)
        elements = list(elements)

        if len(elements) != size:
            msg = "Tried to initialize a vector of size {} with {} elements"
            raise DimensionMismatch(msg.format(size, len(elements)))

        return cls._wrap(numpy.array(elements, dtype=dtype).reshape(size))

    @classmethod
    def from_array(cls, array, dtype=None):
        """ Create a vector holding a copy of a one dimensional array; the
        size is taken from the array
        """
        array = numpy.asarray(array)

        if array.ndim != 1:
            msg = "Expected a one dimensional array but got shape {}"
            raise DimensionMismatch(msg.format(array.shape))

        dtype = array.dtype if dtype is None else dtype
        return cls._wrap(numpy.array(array, dtype=dtype))

    @classmethod
    def load_binary(cls, stream, size, dtype=DEFAULT_DTYPE):
        """ Read a vector of the given size from a binary stream

        Raises
        ------
        DimensionMismatch
            If the stored length differs from `size`. No element data is
            consumed in that case.

        """
        size = validate_size(size)

        stored = binary_io.read_sizes(stream, 1)
        binary_io.check_sizes(stored, (size,), 'vector')

        return cls._wrap(binary_io.read_elements(stream, size, dtype))

    def save_binary(self, stream):
        """ Write the size word followed by the raw element bytes
        """
        binary_io.write_sizes(stream, self.size)
        binary_io.write_elements(stream, self._data)
        return stream

    @property
    def size(self):
        return self._data.shape[0]

    @property
    def dtype(self):
        return self._data.dtype

    def to_array(self):
        return self._data.copy()

    def copy(self):
        return self._wrap(self._data.copy())

    def apply(self, func):
        """ Returns a new vector with `func` applied to every element
        """
        out = numpy.fromiter(
            (func(element) for element in self._data),
            dtype=self.dtype, count=self.size)
        return self._wrap(out)

    def dot(self, other):
        """ The outer product with `other`

        Returns
        -------
        out: Matrix, shape=(self.size, other.size)
            `out[i][j] = self[i] * other[j]`

        """
        from fdnn.algebra.matrix import Matrix

        if not isinstance(other, Vector):
            msg = "Outer product requires a Vector, got {}"
            raise TypeError(msg.format(type(other).__name__))

        out = numpy.outer(self._data, other._data).astype(
            self.dtype, copy=False)
        return Matrix._wrap(out)

    def softmax(self):
        """ Returns `exp(x[i]) / sum(exp(x))` for every element

        The maximum element is subtracted before exponentiating, which gives
        the same distribution without overflowing on large inputs.
        """
        if self.size == 0:
            return self.copy()

        exp = numpy.exp(self._data - self._data.max())
        return self._wrap((exp / exp.sum()).astype(self.dtype, copy=False))

    def argmax(self):
        """ Index of the largest element; the first one wins ties
        """
        if self.size == 0:
            raise EmptyContainer(
                "The argmax method is not possible on a vector of size 0")

        return int(numpy.argmax(self._data))

    ######################################################################
    # Element access

    def __len__(self):
        return self.size

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, index):
        return self._data[validate_index(index, self.size)]

    def __setitem__(self, index, value):
        self._data[validate_index(index, self.size)] = value

    ######################################################################
    # Arithmetic

    # numpy defers mixed operators to the reflected methods below
    __array_ufunc__ = None

    def _operand(self, other):
        if isinstance(other, Vector):
            if other.size != self.size:
                msg = "Vector size mismatch: {} and {}"
                raise DimensionMismatch(msg.format(self.size, other.size))
            return other._data
        if numpy.isscalar(other):
            return other
        return NotImplemented

    def _binary(self, other, ufunc, reflected=False):
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented

        if reflected:
            out = ufunc(operand, self._data)
        else:
            out = ufunc(self._data, operand)

        return self._wrap(numpy.asarray(out).astype(self.dtype, copy=False))

    def _inplace(self, other, ufunc):
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented

        ufunc(self._data, operand, out=self._data, casting='unsafe')
        return self

    def __add__(self, other):
        return self._binary(other, numpy.add)

    def __radd__(self, other):
        return self._binary(other, numpy.add, reflected=True)

    def __iadd__(self, other):
        return self._inplace(other, numpy.add)

    def __sub__(self, other):
        return self._binary(other, numpy.subtract)

    def __rsub__(self, other):
        return self._binary(other, numpy.subtract, reflected=True)

    def __isub__(self, other):
        return self._inplace(other, numpy.subtract)

    def __mul__(self, other):
        return self._binary(other, numpy.multiply)

    def __rmul__(self, other):
        return self._binary(other, numpy.multiply, reflected=True)

    def __imul__(self, other):
        return self._inplace(other, numpy.multiply)

    def __truediv__(self, other):
        return self._binary(other, numpy.true_divide)

    def __rtruediv__(self, other):
        return self._binary(other, numpy.true_divide, reflected=True)

    def __itruediv__(self, other):
        return self._inplace(other, numpy.true_divide)

    ######################################################################
    # Representation

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and \
            bool(numpy.array_equal(self._data, other._data))

    __hash__ = None

    def __str__(self):
        return "[{}]".format(", ".join(str(x) for x in self._data))

    def __repr__(self):
        return "Vector({}, dtype={})".format(self, self.dtype)
