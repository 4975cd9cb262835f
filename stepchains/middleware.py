"""
Middleware - Cross-cutting behaviour wrapped around each step evaluation.
"""

import logging
import time


class Middleware:
    """
    Base class for middleware that wraps step evaluation.

    Middleware provides cross-cutting concerns like logging and timing.
    Middleware executes in LIFO order (reverse of registration) - like gift wrapping.
    """

    def execute(self, step, context, next_callable):
        """
        Execute the middleware logic.

        Args:
            step: The BindingStep about to be evaluated
            context: BindingContext holding the bindings made so far
            next_callable: Function to call to continue the chain (must be called)

        Returns:
            The step's value from next_callable (or a replacement value)

        Example:
            def execute(self, step, context, next_callable):
                print(f"Before {step.name}")
                value = next_callable(context)
                print(f"After {step.name}")
                return value
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement execute()")

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __str__(self):
        return self.__class__.__name__


class LoggingMiddleware(Middleware):
    """
    Log each step and the value it produced.

    The chain decides whether a value stops evaluation, so this middleware
    only reports what it sees. Pass ``fail_predicate`` to have failing
    values logged at WARNING instead of the normal level.
    """

    def __init__(self, logger=None, level=logging.DEBUG, fail_predicate=None):
        self.logger = logger if logger is not None else logging.getLogger('stepchains')
        self.level = level
        self.fail_predicate = fail_predicate

    def execute(self, step, context, next_callable):
        self.logger.log(self.level, "Evaluating step %s with %d binding(s)", step.name, len(context))
        value = next_callable(context)

        if value is None:
            self.logger.warning("Step %s produced None", step.name)
        elif self.fail_predicate is not None and self.fail_predicate(value):
            self.logger.warning("Step %s failed: %r", step.name, value)
        else:
            self.logger.log(self.level, "Step %s produced %r", step.name, value)
        return value


class TimingMiddleware(Middleware):
    """Record how long each step takes, keyed by step name."""

    def __init__(self):
        self.timings = {}

    def execute(self, step, context, next_callable):
        start = time.perf_counter()
        try:
            return next_callable(context)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            self.timings.setdefault(step.name, []).append(elapsed)

    def report(self):
        """
        Summarise recorded timings.

        Returns:
            List of dictionaries with step, calls, avg_ms, min_ms and max_ms,
            sorted by step name
        """
        rows = []
        for name, times in sorted(self.timings.items()):
            rows.append({
                'step': name,
                'calls': len(times),
                'avg_ms': sum(times) / len(times),
                'min_ms': min(times),
                'max_ms': max(times),
            })
        return rows

    def reset(self):
        """Discard recorded timings."""
        self.timings.clear()
