"""
BindingChain - Evaluates named steps in order and stops at the first failure.
"""

import logging

from .context import BindingContext
from .outcome import Outcome
from .predicates import BREAK, has_sentinel
from .step import as_step

logger = logging.getLogger(__name__)


class BindingChain:
    """
    Evaluates a sequence of named steps, binding each value to its name.

    The chain manages:
    - Sequential step evaluation against a fresh BindingContext
    - Short-circuit on None or on a value the failure predicate flags
    - Middleware pipeline (LIFO order) around each step
    - Evaluation of the final expression over every binding

    A failing step is not an error: its value is returned as the result of
    the whole chain, and no later step runs.
    """

    def __init__(self, fail_predicate=None, sentinel=None):
        """
        Initialize a BindingChain.

        Args:
            fail_predicate: Function flagging failed values (default: mapping
                containing the sentinel key)
            sentinel: Sentinel key for the default predicate (default: BREAK).
                Only valid when fail_predicate is not given.
        """
        if fail_predicate is None:
            fail_predicate = has_sentinel(BREAK if sentinel is None else sentinel)
        elif not callable(fail_predicate):
            raise TypeError("fail_predicate must be callable")
        elif sentinel is not None:
            raise TypeError("sentinel only applies to the default predicate; "
                            "pass either fail_predicate or sentinel")
        self._steps = []
        self._middleware = []
        self._fail_predicate = fail_predicate
        self._pipeline = None
        self._pipeline_built = False

    @property
    def fail_predicate(self):
        return self._fail_predicate

    def bind(self, name, expression):
        """
        Add a step that binds ``name`` to ``expression(context)``.

        Args:
            name: Binding name, visible to later steps and the final expression
            expression: Function taking the BindingContext

        Returns:
            self (for method chaining)
        """
        return self.add_step((name, expression))

    def add_step(self, step):
        """
        Add a step to the chain.

        Args:
            step: BindingStep instance or (name, expression) pair

        Returns:
            self (for method chaining)
        """
        self._steps.append(as_step(step))
        return self

    def use_middleware(self, middleware):
        """
        Add middleware to the chain.
        Middleware executes in LIFO order (reverse of registration).

        Args:
            middleware: Middleware instance to add

        Returns:
            self (for method chaining)
        """
        self._middleware.append(middleware)
        self._pipeline_built = False  # Invalidate cached pipeline
        return self

    def is_failure(self, value):
        """Return True if the value would stop the chain."""
        return value is None or bool(self._fail_predicate(value))

    def evaluate(self, final, environment=None):
        """
        Evaluate every step, then the final expression.

        Args:
            final: Function taking the BindingContext, called only if no step fails
            environment: Mapping of initial bindings (optional, copied)

        Returns:
            The culprit value of the first failing step, or the value of final
        """
        return self.execute(final, environment).value

    def execute(self, final, environment=None):
        """
        Evaluate the chain and report how it ended.

        Args:
            final: Function taking the BindingContext, called only if no step fails
            environment: Mapping of initial bindings (optional, copied)

        Returns:
            Outcome holding the returned value and the failing step, if any
        """
        if not callable(final):
            raise TypeError("final must be callable")

        if not self._pipeline_built:
            self._pipeline = self._build_pipeline()
            self._pipeline_built = True

        context = BindingContext(environment)

        for step in self._steps:
            value = self._pipeline(step, context)

            if self.is_failure(value):
                logger.debug("Chain short-circuited at step %s", step.name)
                return Outcome.short_circuit(value, step.name, context.to_dict())

            context.set(step.name, value)

        return Outcome.completed(final(context), context.to_dict())

    def _build_pipeline(self):
        """
        Build the middleware pipeline.
        Middleware wraps in LIFO order (reverse of registration).

        Returns:
            Function that evaluates a step through all middleware
        """
        def evaluate_step(step, context):
            return step.evaluate(context)

        pipeline = evaluate_step

        for middleware in reversed(self._middleware):
            pipeline = self._create_middleware_wrapper(middleware, pipeline)

        return pipeline

    def _create_middleware_wrapper(self, middleware, next_pipeline):
        def wrapper(step, context):
            return middleware.execute(
                step,
                context,
                lambda ctx: next_pipeline(step, ctx)
            )
        return wrapper

    def clear_steps(self):
        """Remove all steps from the chain."""
        self._steps.clear()
        return self

    def clear_middleware(self):
        """Remove all middleware from the chain."""
        self._middleware.clear()
        self._pipeline_built = False
        return self

    def reset(self):
        """Clear both steps and middleware."""
        self.clear_steps()
        self.clear_middleware()
        return self

    def step_count(self):
        return len(self._steps)

    def middleware_count(self):
        return len(self._middleware)

    def step_names(self):
        """Return the binding names in evaluation order."""
        return [step.name for step in self._steps]

    def __len__(self):
        return len(self._steps)

    def __repr__(self):
        return (f"BindingChain(steps={len(self._steps)}, "
                f"middleware={len(self._middleware)}, "
                f"fail_predicate={getattr(self._fail_predicate, '__name__', self._fail_predicate)})")


def evaluate(steps, final, fail_predicate=None, environment=None):
    """
    Evaluate named steps in order, stopping at the first failure.

    Each step's value is bound to its name and visible to later steps and to
    ``final``. A step fails when it produces None or a value ``fail_predicate``
    flags; that value is returned at once and nothing after it runs.

    Args:
        steps: Ordered iterable of BindingStep or (name, expression) pairs
        final: Function taking the BindingContext, evaluated if no step fails
        fail_predicate: Function flagging failed values (default: mapping
            containing the 'break' key)
        environment: Mapping of initial bindings (optional, copied)

    Returns:
        The culprit value of the first failing step, or the value of final

    Example:
        >>> evaluate(
        ...     [('a', lambda env: {'ok': 1}),
        ...      ('b', lambda env: {'ok': env.a['ok'] + 1})],
        ...     lambda env: env.b['ok'] + 1)
        3
    """
    chain = BindingChain(fail_predicate=fail_predicate)
    for step in steps:
        chain.add_step(step)
    return chain.evaluate(final, environment)
