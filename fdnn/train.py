""" Command line driver: train a network on a labeled csv file, optionally
save the weights and score a test file.

Usage::

    python -m fdnn.train data/mnist_train.csv --n-samples 10000 \\
        --save net.bin --test-csv data/mnist_test.csv --n-test 3000

"""
import argparse
import logging

import numpy

from fdnn.core.logger import setup_logging
from fdnn.data.samples import load_csv
from fdnn.network.activations import ACTIVATIONS, get_activation
from fdnn.network.neural_network import NeuralNetwork


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Train a two-layer network with mini-batch gradient "
                    "descent")
    parser.add_argument("training_csv", help="rows of label,x0,x1,...")
    parser.add_argument("--input-size", type=int, default=784)
    parser.add_argument("--hidden-size", type=int, default=300)
    parser.add_argument("--output-size", type=int, default=10)
    parser.add_argument("--n-samples", type=int, default=None,
                        help="number of training rows to use")
    parser.add_argument("--epochs", type=int, default=4)
    parser.add_argument("--mini-batch-size", type=int, default=50)
    parser.add_argument("--learning-rate", type=float, default=0.7)
    parser.add_argument("--decay-factor", type=float, default=0.9)
    parser.add_argument("--activation", choices=sorted(ACTIVATIONS),
                        default='relu')
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--granularity", type=int, default=None,
                        help="bucket count per unit for weight sampling")
    parser.add_argument("--scale", type=float, default=255.0,
                        help="input values are divided by this")
    parser.add_argument("--skip-header", action="store_true")
    parser.add_argument("--load", default=None,
                        help="start from weights in this file")
    parser.add_argument("--save", default=None,
                        help="write the trained weights to this file")
    parser.add_argument("--test-csv", default=None)
    parser.add_argument("--n-test", type=int, default=None)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--quiet", action="store_true",
                        help="only log warnings to the console")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    setup_logging(
        filename=args.log_file,
        level=logging.WARNING if args.quiet else logging.DEBUG)

    activation, activation_prime = get_activation(args.activation)

    if args.load is not None:
        network = NeuralNetwork.load(
            args.load, args.input_size, args.hidden_size, args.output_size)
    else:
        random_state = (None if args.seed is None
                        else numpy.random.RandomState(args.seed))
        network = NeuralNetwork(
            args.input_size, args.hidden_size, args.output_size,
            random_state=random_state, granularity=args.granularity)

    logger.info("Training {}".format(network))

    samples = load_csv(
        args.training_csv, args.input_size, n_samples=args.n_samples,
        scale=args.scale, skip_header=args.skip_header)

    network.train_batch(
        samples, epochs=args.epochs, n_samples=len(samples),
        mini_batch_size=args.mini_batch_size,
        learning_rate=args.learning_rate, decay_factor=args.decay_factor,
        activation=activation, activation_prime=activation_prime)

    if args.save is not None:
        network.save(args.save)

    if args.test_csv is not None:
        test_samples = load_csv(
            args.test_csv, args.input_size, n_samples=args.n_test,
            scale=args.scale, skip_header=args.skip_header)
        score = network.predict_samples(test_samples, activation)
        print("Score: {:2.3f}%".format(score * 100))

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
