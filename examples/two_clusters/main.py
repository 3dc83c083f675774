import io

import matplotlib.pyplot as plt
import numpy as np

from fdnn import NeuralNetwork
from fdnn.core.logger import setup_logging
from fdnn.data.synthetic import make_two_clusters, make_xor
from fdnn.network.activations import sigmoid, sigmoid_prime
from fdnn.util.on_epoch import collect_accuracy
from fdnn.visualize import plot_history


setup_logging(filename='fit-log.txt', stdout=False)

random_state = np.random.RandomState(1234)


# Create toy datasets #########################################################

training = make_two_clusters(400, random_state=random_state)
validation = make_two_clusters(200, random_state=random_state)

xor_training = make_xor(400, random_state=random_state)
xor_validation = make_xor(200, random_state=random_state)

# Set up the networks and fit them ############################################

fig, ax = plt.subplots(figsize=(6, 4))

for name, (train_set, valid_set) in [
        ('two clusters', (training, validation)),
        ('xor', (xor_training, xor_validation))]:

    network = NeuralNetwork(2, 8, 2, random_state=random_state)

    scores = []
    network.train_batch(
        train_set, epochs=30, n_samples=len(train_set), mini_batch_size=10,
        learning_rate=2.0, decay_factor=0.98,
        activation=sigmoid, activation_prime=sigmoid_prime,
        on_epoch=collect_accuracy(valid_set, scores, sigmoid))

    plot_history(scores, ax=ax, label=name)
    print("{}: final validation accuracy {:.3f}".format(name, scores[-1]))

    # The weights survive a round trip through the binary format
    stream = io.BytesIO()
    network.save_binary(stream)
    stream.seek(0)
    restored = NeuralNetwork.load_binary(stream, 2, 8, 2)
    assert restored.predict_samples(valid_set, sigmoid) == scores[-1]

ax.set_ylabel('validation accuracy')
plt.show()
