import numpy

from fdnn.algebra import binary_io
from fdnn.algebra.sampling import get_random_state, uniform_distribution
from fdnn.algebra.vector import (
    DEFAULT_DTYPE, Vector, validate_index, validate_size)
from fdnn.core.exception import DimensionMismatch


class Matrix(object):
    """ A fixed-shape matrix stored as `rows` row vectors of `cols` elements.

    The shape and element type are set at construction and never change.
    Row access (`m[i]`) returns a :class:`Vector` that writes through to the
    matrix, so `m[i][j] = x` updates the matrix in place.
    """

    def __init__(self, rows, cols, dtype=DEFAULT_DTYPE):
        """ Create a matrix with unspecified contents

        Parameters
        ----------
        rows, cols: int
            The fixed shape.

        dtype: numpy dtype, default=numpy.float32
            The element type.

        """
        rows = validate_size(rows, 'rows')
        cols = validate_size(cols, 'cols')
        self._data = numpy.empty((rows, cols), dtype=dtype)

    @classmethod
    def _wrap(cls, data):
        """ Wrap a 2d array without copying it
        """
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    @classmethod
    def filled(cls, rows, cols, value, dtype=DEFAULT_DTYPE):
        """ Create a matrix with every element set to `value`
        """
        rows = validate_size(rows, 'rows')
        cols = validate_size(cols, 'cols')
        return cls._wrap(numpy.full((rows, cols), value, dtype=dtype))

    @classmethod
    def zeros(cls, rows, cols, dtype=DEFAULT_DTYPE):
        return cls.filled(rows, cols, 0, dtype=dtype)

    @classmethod
    def from_rows(cls, rows, cols, elements, dtype=DEFAULT_DTYPE):
        """ Create a matrix from a list of `rows` rows of `cols` literal
        elements each
        """
        rows = validate_size(rows, 'rows')
        cols = validate_size(cols, 'cols')
        elements = list(elements)

        if len(elements) != rows:
            msg = ("Tried to initialize a matrix with {} rows but {} rows "
                   "were supplied")
            raise DimensionMismatch(msg.format(rows, len(elements)))

        out = cls(rows, cols, dtype=dtype)
        for irow, row in enumerate(elements):
            out._data[irow] = Vector.from_elements(
                cols, row, dtype=dtype)._data

        return out

    @classmethod
    def from_array(cls, array, dtype=None):
        """ Create a matrix holding a copy of a two dimensional array
        """
        array = numpy.asarray(array)

        if array.ndim != 2:
            msg = "Expected a two dimensional array but got shape {}"
            raise DimensionMismatch(msg.format(array.shape))

        dtype = array.dtype if dtype is None else dtype
        return cls._wrap(numpy.array(array, dtype=dtype))

    @classmethod
    def load_binary(cls, stream, rows, cols, dtype=DEFAULT_DTYPE):
        """ Read a matrix of the given shape from a binary stream

        Raises
        ------
        DimensionMismatch
            If the stored shape differs from `(rows, cols)`. No element data
            is consumed in that case.

        """
        rows = validate_size(rows, 'rows')
        cols = validate_size(cols, 'cols')

        stored = binary_io.read_sizes(stream, 2)
        binary_io.check_sizes(stored, (rows, cols), 'matrix')

        data = binary_io.read_elements(stream, rows * cols, dtype)
        return cls._wrap(data.reshape(rows, cols))

    def save_binary(self, stream):
        """ Write the two size words followed by the row-major element bytes
        """
        binary_io.write_sizes(stream, self.rows, self.cols)
        binary_io.write_elements(stream, self._data)
        return stream

    @property
    def rows(self):
        return self._data.shape[0]

    @property
    def cols(self):
        return self._data.shape[1]

    @property
    def shape(self):
        return self._data.shape

    @property
    def dtype(self):
        return self._data.dtype

    def to_array(self):
        return self._data.copy()

    def copy(self):
        return self._wrap(self._data.copy())

    def apply(self, func):
        """ Returns a new matrix with `func` applied to every element
        """
        out = numpy.fromiter(
            (func(element) for element in self._data.flat),
            dtype=self.dtype, count=self._data.size)
        return self._wrap(out.reshape(self.shape))

    def dot(self, other):
        """ Matrix product with a Matrix, or matrix-vector product with a
        Vector

        Parameters
        ----------
        other: Matrix or Vector
            A matrix with `other.rows == self.cols`, or a vector with
            `other.size == self.cols`.

        Returns
        -------
        out: Matrix, shape=(self.rows, other.cols), or Vector, size=self.rows

        """
        if isinstance(other, Matrix):
            if self.cols != other.rows:
                msg = ("Dot product dimension mismatch, lhs cols ({}) != "
                       "rhs rows ({})")
                raise DimensionMismatch(msg.format(self.cols, other.rows))

            out = numpy.dot(self._data, other._data)
            return self._wrap(out.astype(self.dtype, copy=False))

        if isinstance(other, Vector):
            if self.cols != other.size:
                msg = ("Dot product dimension mismatch, lhs cols ({}) != "
                       "vector size ({})")
                raise DimensionMismatch(msg.format(self.cols, other.size))

            out = numpy.dot(self._data, other._data)
            return Vector._wrap(out.astype(self.dtype, copy=False))

        msg = "Dot product requires a Matrix or a Vector, got {}"
        raise TypeError(msg.format(type(other).__name__))

    def transpose(self):
        return self._wrap(self._data.T.copy())

    def flatten_vertical(self):
        """ Returns the row-major elements as a single column matrix
        """
        return self._wrap(self._data.reshape(self._data.size, 1).copy())

    def flatten_horizontal(self):
        """ Returns the row-major elements as a single row matrix
        """
        return self._wrap(self._data.reshape(1, self._data.size).copy())

    def randomize(self, n, random_state=None, granularity=None):
        """ Fill the matrix in place with samples drawn uniformly from
        `[-1/sqrt(n), 1/sqrt(n)]`

        Parameters
        ----------
        n: float
            Usually the fan-in of the layer the matrix feeds.

        random_state: numpy.random.RandomState, default=None
            Source of randomness.

        granularity: int, default=None
            See :func:`fdnn.algebra.sampling.uniform_distribution`.

        """
        if not n > 0:
            msg = "`n` ({}) must be positive"
            raise ValueError(msg.format(n))

        random_state = get_random_state(random_state)

        bound = 1.0 / numpy.sqrt(n)
        self._data[...] = uniform_distribution(
            -bound, bound, random_state=random_state,
            size=self.shape, granularity=granularity)

        return self

    ######################################################################
    # Element access

    def __len__(self):
        return self.rows

    def __iter__(self):
        for irow in range(self.rows):
            yield Vector._wrap(self._data[irow])

    def _validate_key(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                msg = "Matrix indices must be (row, col), got {!r}"
                raise TypeError(msg.format(key))
            return (validate_index(key[0], self.rows, 'row'),
                    validate_index(key[1], self.cols, 'column'))
        return validate_index(key, self.rows, 'row')

    def __getitem__(self, key):
        key = self._validate_key(key)
        if isinstance(key, tuple):
            return self._data[key]
        return Vector._wrap(self._data[key])

    def __setitem__(self, key, value):
        key = self._validate_key(key)
        if isinstance(key, tuple):
            self._data[key] = value
            return

        if not isinstance(value, Vector):
            msg = "Rows can only be assigned from a Vector, got {}"
            raise TypeError(msg.format(type(value).__name__))

        if value.size != self.cols:
            msg = "Tried to assign a vector of size {} to a row of size {}"
            raise DimensionMismatch(msg.format(value.size, self.cols))

        self._data[key] = value._data

    ######################################################################
    # Arithmetic

    # numpy defers mixed operators to the reflected methods below
    __array_ufunc__ = None

    def _operand(self, other):
        if isinstance(other, Matrix):
            if other.shape != self.shape:
                msg = "Matrix shape mismatch: {} and {}"
                raise DimensionMismatch(msg.format(self.shape, other.shape))
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
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and \
            bool(numpy.array_equal(self._data, other._data))

    __hash__ = None

    def __str__(self):
        rows = ",\n".join("\t{}".format(row) for row in self)
        return "[\n{}\n]".format(rows)

    def __repr__(self):
        return "Matrix(shape={}, dtype={})".format(self.shape, self.dtype)
