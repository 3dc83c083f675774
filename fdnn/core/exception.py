

class DimensionMismatch(ValueError):
    """ Raised when the shape of an operand, a literal, or a serialized
    container does not agree with the expected fixed shape
    """


class IndexOutOfRange(IndexError):
    """ Raised when accessing an element or row outside of the fixed size
    """


class EmptyContainer(ValueError):
    """ Raised when an operation requires at least one element (or sample)
    but none are present
    """
