"""
A two-layer perceptron built on the fixed-size algebra types.

    Input (R^n) => Hidden (R^h) => Output (R^k)

There are no biases. The network state is the pair of weight matrices::

    hidden_weights: Matrix, shape=(h, n)
    output_weights: Matrix, shape=(k, h)

For a single input vector, the computation chain is::

    hidden = activation(hidden_weights . input)
    output = activation(output_weights . hidden)

Training uses mini-batch gradient descent. The per-sample weight deltas
of a mini-batch are summed into zero-initialized accumulators and the
weights are updated once, at the end of the mini-batch, with the average
delta scaled by the learning rate. The learning rate is multiplied by a
decay factor after every epoch.
"""
import logging

import numpy

from fdnn.algebra.matrix import Matrix
from fdnn.algebra.sampling import get_random_state
from fdnn.algebra.vector import DEFAULT_DTYPE, Vector, validate_size
from fdnn.core.exception import DimensionMismatch, EmptyContainer
from fdnn.core.logger import progress_message


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def one_hot(label, size, dtype=DEFAULT_DTYPE):
    """ Returns the expected output vector for class `label`: a 1 at index
    `label` and 0 everywhere else
    """
    expected = Vector.zeros(size, dtype=dtype)
    expected[label] = 1
    return expected


def _validate_positive(value, name):
    value = validate_size(value, name)
    if value < 1:
        msg = "`{}` ({}) must be at least 1"
        raise ValueError(msg.format(name, value))
    return value


def _validate_float(value, name):
    try:
        return float(value)
    except (ValueError, TypeError):
        msg = "`{}` ({!r}) must be numeric"
        raise ValueError(msg.format(name, value))


class NeuralNetwork(object):
    """ Two-layer feed-forward network trained by mini-batch gradient
    descent.

    Activation functions are passed to each operation as plain scalar
    callables. The derivative `activation_prime` is evaluated on activated
    values (see :mod:`fdnn.network.activations`).
    """

    def __init__(self, input_size, hidden_size, output_size,
                 dtype=DEFAULT_DTYPE, random_state=None, granularity=None):
        """
        Parameters
        ----------
        input_size, hidden_size, output_size: int
            Number of units in each layer.

        dtype: numpy dtype, default=numpy.float32
            Element type of the weights and all intermediate values.

        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results.

        granularity: int, default=None
            Passed to :meth:`Matrix.randomize`; None samples the initial
            weights from the continuous uniform distribution.

        Note
        ----
        Each weight matrix is drawn from `[-1/sqrt(n), 1/sqrt(n)]` where
        `n` is the fan-in of the layer it feeds.
        """
        input_size = _validate_positive(input_size, 'input_size')
        hidden_size = _validate_positive(hidden_size, 'hidden_size')
        output_size = _validate_positive(output_size, 'output_size')

        random_state = get_random_state(random_state)

        self.hidden_weights = Matrix(hidden_size, input_size, dtype=dtype)
        self.hidden_weights.randomize(
            input_size, random_state=random_state, granularity=granularity)

        self.output_weights = Matrix(output_size, hidden_size, dtype=dtype)
        self.output_weights.randomize(
            hidden_size, random_state=random_state, granularity=granularity)

    @classmethod
    def from_weights(cls, hidden_weights, output_weights):
        """ Create a network that takes ownership of existing weight
        matrices

        Parameters
        ----------
        hidden_weights: Matrix, shape=(hidden_size, input_size)

        output_weights: Matrix, shape=(output_size, hidden_size)

        """
        for name, weights in (('hidden_weights', hidden_weights),
                              ('output_weights', output_weights)):
            if not isinstance(weights, Matrix):
                msg = "`{}` was type {} but should be Matrix"
                raise TypeError(msg.format(name, type(weights).__name__))

        if output_weights.cols != hidden_weights.rows:
            msg = ("`output_weights` has {} columns but `hidden_weights` "
                   "has {} rows")
            raise DimensionMismatch(msg.format(
                output_weights.cols, hidden_weights.rows))

        if output_weights.dtype != hidden_weights.dtype:
            msg = "Weight dtypes differ: {} and {}"
            raise TypeError(msg.format(
                hidden_weights.dtype, output_weights.dtype))

        network = cls.__new__(cls)
        network.hidden_weights = hidden_weights
        network.output_weights = output_weights
        return network

    @classmethod
    def load_binary(cls, stream, input_size, hidden_size, output_size,
                    dtype=DEFAULT_DTYPE):
        """ Read the hidden then output weight matrices from a binary stream
        """
        hidden_weights = Matrix.load_binary(
            stream, hidden_size, input_size, dtype=dtype)
        output_weights = Matrix.load_binary(
            stream, output_size, hidden_size, dtype=dtype)
        return cls.from_weights(hidden_weights, output_weights)

    @classmethod
    def load(cls, filename, input_size, hidden_size, output_size,
             dtype=DEFAULT_DTYPE):
        with open(filename, 'rb') as f:
            network = cls.load_binary(
                f, input_size, hidden_size, output_size, dtype=dtype)

        msg = "Loaded weights from {}"
        logger.info(msg.format(filename))
        return network

    def save_binary(self, stream):
        """ Write the hidden then output weight matrices, with no header
        """
        self.hidden_weights.save_binary(stream)
        self.output_weights.save_binary(stream)
        return stream

    def save(self, filename):
        with open(filename, 'wb') as f:
            self.save_binary(f)

        msg = "Saved weights to {}"
        logger.info(msg.format(filename))

    @property
    def input_size(self):
        return self.hidden_weights.cols

    @property
    def hidden_size(self):
        return self.hidden_weights.rows

    @property
    def output_size(self):
        return self.output_weights.rows

    @property
    def dtype(self):
        return self.hidden_weights.dtype

    def __repr__(self):
        return "<NeuralNetwork input=%d, hidden=%d, output=%d>" % (
            self.input_size, self.hidden_size, self.output_size)

    ######################################################################
    # Forward pass and back-propagation

    def feed_forward(self, input, activation):
        """ Compute the activated hidden and output layers for `input`

        Returns
        -------
        hidden, output: Vector, Vector

        """
        hidden_unactivated = self.hidden_weights.dot(input)
        hidden = hidden_unactivated.apply(activation)

        output_unactivated = self.output_weights.dot(hidden)
        output = output_unactivated.apply(activation)

        return hidden, output

    def find_errors(self, expected, actual):
        """ Compute the output error and back-propagate it through the
        current output weights

        Returns
        -------
        hidden_error, output_error: Vector, Vector

        """
        output_error = expected - actual
        hidden_error = self.output_weights.transpose().dot(output_error)
        return hidden_error, output_error

    @staticmethod
    def back_propagate_core(layer_output, layer_error, layer_input,
                            activation_prime):
        """ Weight delta for one layer: the outer product of
        `layer_error * activation_prime(layer_output)` with `layer_input`
        """
        primed_output = layer_output.apply(activation_prime)
        return (layer_error * primed_output).dot(layer_input)

    @classmethod
    def back_propagate(cls, hidden_error, output_error, hidden_output,
                       final_output, input, activation_prime):
        """
        Returns
        -------
        hidden_delta, output_delta: Matrix, Matrix
            Shaped like `hidden_weights` and `output_weights`.

        """
        output_delta = cls.back_propagate_core(
            final_output, output_error, hidden_output, activation_prime)
        hidden_delta = cls.back_propagate_core(
            hidden_output, hidden_error, input, activation_prime)
        return hidden_delta, output_delta

    def train(self, input, expected, activation, activation_prime):
        """ Compute the weight deltas for a single sample. The weights are
        not modified.

        Returns
        -------
        hidden_delta, output_delta: Matrix, Matrix

        """
        hidden_output, final_output = self.feed_forward(input, activation)
        hidden_error, output_error = self.find_errors(expected, final_output)
        return self.back_propagate(
            hidden_error, output_error, hidden_output, final_output,
            input, activation_prime)

    ######################################################################
    # Mini-batch gradient descent

    def train_mini_batch(self, samples, activation, activation_prime,
                         mini_batch_size=None):
        """ Sum the weight deltas of the first `mini_batch_size` samples

        Parameters
        ----------
        samples: sequence of LabeledSample
            Each sample has an `input` Vector and an integer `label`.

        mini_batch_size: int, default=None
            Number of samples to use; None uses all of `samples`.

        Returns
        -------
        hidden_delta_sum, output_delta_sum: Matrix, Matrix
            The summed (not averaged) deltas.

        """
        if mini_batch_size is None:
            mini_batch_size = len(samples)
        mini_batch_size = _validate_positive(
            mini_batch_size, 'mini_batch_size')

        if len(samples) < mini_batch_size:
            msg = "Mini-batch of size {} requested but only {} samples given"
            raise ValueError(msg.format(mini_batch_size, len(samples)))

        hidden_delta_sum = Matrix.zeros(
            self.hidden_size, self.input_size, dtype=self.dtype)
        output_delta_sum = Matrix.zeros(
            self.output_size, self.hidden_size, dtype=self.dtype)

        for i in range(mini_batch_size):
            sample = samples[i]
            expected = one_hot(sample.label, self.output_size, self.dtype)

            hidden_delta, output_delta = self.train(
                sample.input, expected, activation, activation_prime)

            hidden_delta_sum += hidden_delta
            output_delta_sum += output_delta

        return hidden_delta_sum, output_delta_sum

    def train_batch_inner(self, samples, learning_rate, activation,
                          activation_prime, mini_batch_size):
        """ Train on one mini-batch and apply the averaged update. This is
        the only place the weights change.
        """
        hidden_delta_sum, output_delta_sum = self.train_mini_batch(
            samples, activation, activation_prime, mini_batch_size)

        step = learning_rate / mini_batch_size

        self.hidden_weights += hidden_delta_sum * step
        self.output_weights += output_delta_sum * step

    def train_batch(self, samples, epochs, n_samples, mini_batch_size,
                    learning_rate, decay_factor, activation,
                    activation_prime, on_epoch=None):
        """ Run `epochs` passes of mini-batch gradient descent over the
        first `n_samples` samples

        Parameters
        ----------
        samples: sequence of LabeledSample
            Must support slicing.

        epochs: int
            Number of passes over the training samples.

        n_samples: int or None
            Number of samples to train on; None uses all of `samples`.

        mini_batch_size: int
            Size of the consecutive, non-overlapping windows. If it does not
            divide `n_samples`, the trailing samples are not used.

        learning_rate: float
            Initial learning rate.

        decay_factor: float
            The learning rate is multiplied by this after every epoch.

        activation, activation_prime: callable
            Scalar activation function and its derivative (in terms of the
            activated value).

        on_epoch: callable or list of callables, default=None
            Each is called as `func(epoch, network, learning_rate)` after
            every epoch, with the learning rate used during that epoch.

        Returns
        -------
        learning_rate: float
            The decayed learning rate after the last epoch.

        """
        epochs = _validate_positive(epochs, 'epochs')
        mini_batch_size = _validate_positive(
            mini_batch_size, 'mini_batch_size')
        learning_rate = _validate_float(learning_rate, 'learning_rate')
        decay_factor = _validate_float(decay_factor, 'decay_factor')

        if n_samples is None:
            n_samples = len(samples)
        n_samples = validate_size(n_samples, 'n_samples')

        if n_samples > len(samples):
            msg = "`n_samples` ({}) exceeds the number of samples ({})"
            raise ValueError(msg.format(n_samples, len(samples)))

        n_batches = n_samples // mini_batch_size
        if n_batches == 0:
            msg = "`n_samples` ({}) is smaller than `mini_batch_size` ({})"
            raise ValueError(msg.format(n_samples, mini_batch_size))

        remainder = n_samples % mini_batch_size
        if remainder:
            msg = ("{} trailing samples do not fill a mini-batch of size {} "
                   "and will not be used")
            logger.warning(msg.format(remainder, mini_batch_size))

        if on_epoch is None:
            on_epoch = []
        elif callable(on_epoch):
            on_epoch = [on_epoch]

        for epoch in range(1, epochs + 1):
            for ibatch in range(n_batches):
                start = ibatch * mini_batch_size

                msg = "Epoch {}/{}, mini-batch".format(epoch, epochs)
                logger.debug(progress_message(msg, ibatch + 1, n_batches))

                self.train_batch_inner(
                    samples[start:start + mini_batch_size], learning_rate,
                    activation, activation_prime, mini_batch_size)

            msg = "Finished epoch {}/{} (learning rate = {:.7f})"
            logger.info(msg.format(epoch, epochs, learning_rate))

            for func in on_epoch:
                func(epoch, self, learning_rate)

            learning_rate *= decay_factor

        return learning_rate

    ######################################################################
    # Inference

    def predict(self, input, activation):
        """ Returns the softmax of the output layer for `input`
        """
        _, output = self.feed_forward(input, activation)
        return output.softmax()

    def predict_sample(self, sample, activation):
        """ Returns the predicted class of a labeled sample
        """
        return self.predict(sample.input, activation).argmax()

    def predict_samples(self, samples, activation):
        """ Returns the fraction of `samples` whose predicted class equals
        the label
        """
        if len(samples) == 0:
            raise EmptyContainer("Cannot score an empty set of samples")

        n_correct = sum(
            self.predict_sample(sample, activation) == sample.label
            for sample in samples)

        return 1.0 * n_correct / len(samples)

    def mean_output_error(self, samples, activation):
        """ Mean over `samples` of the squared norm of the output error
        against the one-hot expected output
        """
        if len(samples) == 0:
            raise EmptyContainer("Cannot score an empty set of samples")

        total = 0.0
        for sample in samples:
            _, output = self.feed_forward(sample.input, activation)
            expected = one_hot(sample.label, self.output_size, self.dtype)
            error = (expected - output).to_array()
            total += float(numpy.dot(error, error))

        return total / len(samples)
