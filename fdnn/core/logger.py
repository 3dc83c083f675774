import logging


LINE_FORMAT = ("[%(asctime)s] [%(name)s:%(lineno)d] "
               "%(levelname)-8s %(message)s")
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(filename=None, stdout=True, level=logging.DEBUG):
    """ Sets up logging formatting, handlers, etc

    Parameters
    ----------
    filename: str, default=None
        If given, log records are also written to this file (truncated
        first).

    stdout: bool, default=True
        If True, log records are echoed to the console.

    level: int, default=logging.DEBUG
        The level of the root logger.

    Returns
    -------
    root: logging.Logger
        The configured root logger.

    """
    formatter = logging.Formatter(fmt=LINE_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicating output when called more than once
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if filename is not None:
        fhandler = logging.FileHandler(filename, mode='w')
        fhandler.setFormatter(formatter)
        root.addHandler(fhandler)

    if stdout:
        shandler = logging.StreamHandler()
        shandler.setFormatter(formatter)
        root.addHandler(shandler)

    return root


def progress_message(msg, i, n):
    """ Prefix `msg` with a zero-padded `(i / n)` counter
    """
    fmt = "(%%0%dd / %d) %s" % (len(str(n)), n, msg)
    return fmt % i
