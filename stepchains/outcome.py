"""
Outcome - Describes how one evaluation of a binding chain ended.
"""


class Outcome:
    """
    The value a chain returned, plus whether a step cut it short.

    ``value`` is exactly what ``BindingChain.evaluate`` would have returned:
    the final expression's value, or the culprit value of the failing step.
    """

    def __init__(self, value, short_circuited, failed_step=None, bindings=None):
        """
        Initialize an Outcome.

        Args:
            value: Final value, or the culprit that stopped the chain
            short_circuited: True if a step stopped the chain
            failed_step: Name of the step that stopped the chain
            bindings: Dictionary of bindings when evaluation stopped
        """
        self.value = value
        self.short_circuited = short_circuited
        self.failed_step = failed_step
        self.bindings = bindings if bindings is not None else {}

    @staticmethod
    def completed(value, bindings=None):
        """Create an outcome for a chain whose final expression ran."""
        return Outcome(value, False, bindings=bindings)

    @staticmethod
    def short_circuit(value, step_name, bindings=None):
        """Create an outcome for a chain stopped by the named step."""
        return Outcome(value, True, failed_step=step_name, bindings=bindings)

    def is_success(self):
        """Return True if every step succeeded and the final expression ran."""
        return not self.short_circuited

    def is_failure(self):
        """Return True if a step stopped the chain."""
        return self.short_circuited

    def __bool__(self):
        """Allow Outcome to be used in boolean context (if outcome: ...)"""
        return not self.short_circuited

    def __repr__(self):
        if self.short_circuited:
            return f"Outcome.short_circuit(value={self.value!r}, failed_step={self.failed_step!r})"
        return f"Outcome.completed(value={self.value!r})"

    def __str__(self):
        if self.short_circuited:
            return f"Short-circuited at {self.failed_step}: {self.value!r}"
        return f"Completed: {self.value!r}"
