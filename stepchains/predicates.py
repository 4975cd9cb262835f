"""
Failure predicates - Decide whether a step's value stops the chain.

A value stops the chain when it is ``None`` or when the chain's failure
predicate returns True for it. By convention a failing step returns a
mapping that carries a sentinel key, ``{'break': reason}``.
"""

from collections.abc import Mapping

BREAK = 'break'


def is_absent(value):
    """Return True if the value is the absence marker (None)."""
    return value is None


def has_sentinel(sentinel=BREAK):
    """
    Build a predicate that flags mappings containing a sentinel key.

    Args:
        sentinel: The key whose presence marks a value as failed

    Returns:
        Function taking a value and returning True if it is a mapping
        with the sentinel key
    """
    def predicate(value):
        return isinstance(value, Mapping) and sentinel in value

    predicate.__name__ = f'has_sentinel_{sentinel}'
    predicate.sentinel = sentinel
    return predicate


def default_failure(value):
    """Return True if the value is a mapping containing the ``'break'`` key."""
    return isinstance(value, Mapping) and BREAK in value


def broken(reason=True, sentinel=BREAK, **extra):
    """
    Build a culprit value that the sentinel predicate will flag.

    Example:
        >>> broken('missing customer', order_id='ORD-1')
        {'break': 'missing customer', 'order_id': 'ORD-1'}
    """
    culprit = {sentinel: reason}
    culprit.update(extra)
    return culprit


def any_of(*predicates):
    """Combine predicates so a value fails if any of them flags it."""
    if not predicates:
        raise ValueError("any_of() needs at least one predicate")
    for predicate in predicates:
        if not callable(predicate):
            raise TypeError(f"Predicate {predicate!r} is not callable")

    def combined(value):
        return any(predicate(value) for predicate in predicates)

    return combined
