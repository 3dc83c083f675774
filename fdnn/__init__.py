# flake8: noqa

from .algebra.matrix import Matrix
from .algebra.vector import Vector
from .network.neural_network import NeuralNetwork
