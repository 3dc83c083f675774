""" This module provides a few simple `on_epoch` functions that can be
used in the :meth:`NeuralNetwork.train_batch` member function
"""
import logging


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def collect_accuracy(samples, score_list, activation):
    """ Collects the accuracy over `samples` after each epoch. Scores are
    appended to :code:`score_list` and so an empty list should be provided.
    Usage::

        scores = []
        collector = collect_accuracy(validation, scores, relu)
        network.train_batch(..., on_epoch=[collector, ...])
    """

    def on_epoch(epoch, network, learning_rate):
        score = network.predict_samples(samples, activation)
        score_list.append(score)

        msg = "Epoch {} accuracy = {:.5f}"
        logger.info(msg.format(epoch, score))

    return on_epoch


def collect_learning_rates(rate_list):
    """ Appends the learning rate used during each epoch to `rate_list`
    """

    def on_epoch(epoch, network, learning_rate):
        rate_list.append(learning_rate)

    return on_epoch
