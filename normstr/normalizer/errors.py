class PreconditionError(ValueError):
    """
    A mutating operation (or a range tag) was handed an argument it cannot honour.

    Raised before any state is touched, so the :class:`NormalizedString` is left as it was.
    Callers decide whether this is fatal.
    """
