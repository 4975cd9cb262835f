"""
BindingStep - A named unit of computation whose value is bound in the chain.
"""

from collections.abc import Sequence


class BindingStep:
    """
    Base class for steps in a binding chain.

    A step produces one value from the bindings made so far. The chain binds
    that value to the step's name unless it stops the chain.

    Steps should not mutate the context - the chain does the binding.
    """

    def __init__(self, name):
        if not isinstance(name, str):
            raise TypeError(f"Step name must be a string, got {type(name).__name__}")
        if not name:
            raise ValueError("Step name must not be empty")
        self.name = name

    def evaluate(self, context):
        """
        Compute the step's value.

        Args:
            context: BindingContext holding every earlier binding

        Returns:
            The value to bind, None, or a value the failure predicate flags

        Raises:
            NotImplementedError: This method must be implemented by subclasses
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement evaluate()")

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r})"

    def __str__(self):
        return self.name


class FunctionStep(BindingStep):
    """Step backed by a callable taking the context."""

    def __init__(self, name, expression):
        super().__init__(name)
        if not callable(expression):
            raise TypeError(f"Expression for step '{name}' is not callable")
        self.expression = expression

    def evaluate(self, context):
        return self.expression(context)


def as_step(item):
    """
    Coerce a step or a ``(name, expression)`` pair to a BindingStep.

    Any two-item sequence other than a string counts as a pair, so
    ``[name, expression]`` lists work as well as tuples.

    Raises:
        TypeError: If the item is neither
    """
    if isinstance(item, BindingStep):
        return item
    if isinstance(item, Sequence) and not isinstance(item, (str, bytes)) and len(item) == 2:
        name, expression = item
        return FunctionStep(name, expression)
    raise TypeError(f"Expected a BindingStep or (name, expression) pair, got {item!r}")
