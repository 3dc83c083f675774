import matplotlib.pyplot as plt


def plot_history(scores, ax=None, label='accuracy', **line_kwargs):
    """ Plot a per-epoch score curve

    Parameters
    ----------
    scores: list of float
        One score per epoch, e.g. collected with
        :func:`fdnn.util.on_epoch.collect_accuracy`.

    ax: matplotlib axis, default=None
        Axis to draw on; a new figure is created if None.

    label: str, default='accuracy'
        The y-axis label and legend entry.

    line_kwargs: args
        Any keyword arguments that can be passed to `matplotlib.pyplot.plot`.

    Returns
    -------
    ax: matplotlib axis

    """
    if len(scores) == 0:
        raise ValueError("`scores` is empty")

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))

    epochs = range(1, len(scores) + 1)
    ax.plot(epochs, scores, label=label, **line_kwargs)
    ax.set_xlabel('epoch')
    ax.set_ylabel(label)
    ax.set_xlim(1, max(len(scores), 2))
    ax.legend()

    return ax
