""" Scalar activation functions and their derivatives.

The derivatives take the *activated* value `y = activation(x)` rather than
`x`, which is how back-propagation evaluates them on the stored layer
outputs. For the logistic function this gives `y * (1 - y)`.
"""
from scipy.special import expit


def sigmoid(x):
    return expit(x)


def sigmoid_prime(y):
    return (1 - y) * y


def relu(x):
    if x >= 0:
        return x
    return 0


def relu_prime(y):
    if y > 0:
        return 1
    return 0


ACTIVATIONS = {
    'relu': (relu, relu_prime),
    'sigmoid': (sigmoid, sigmoid_prime),
}


def get_activation(name):
    """ Returns the `(activation, activation_prime)` pair named by `name`
    """
    try:
        return ACTIVATIONS[name]
    except KeyError:
        msg = "Unknown activation ({}); choose from {}"
        raise ValueError(msg.format(name, sorted(ACTIVATIONS)))
