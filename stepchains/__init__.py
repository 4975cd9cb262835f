"""
StepChains - Sequential binding that stops at the first failing step

StepChains evaluates a chain of named computations where each step can use
the values bound before it. The chain short-circuits as soon as a step
produces None or a value the failure predicate flags, and returns that value
unchanged. If every step succeeds, a final expression is evaluated over all
the bindings and its value is returned.
- Steps compute one value each from the bindings made so far
- BindingContext carries those bindings between steps
- Failure predicates decide which values stop the chain
- Middleware adds reusable behaviors around step evaluation

Example:
    from stepchains import evaluate, broken

    def load_user(env):
        user = users.get(env.user_id)
        return user if user else broken('unknown user')

    result = evaluate(
        [('user', load_user),
         ('account', lambda env: accounts.get(env.user['account_id']))],
        lambda env: env.account['balance'],
        environment={'user_id': 42})
"""

import logging

__version__ = "1.0.0"
__author__ = "StepChains Contributors"

from .chain import BindingChain, evaluate
from .context import BindingContext
from .middleware import LoggingMiddleware, Middleware, TimingMiddleware
from .outcome import Outcome
from .predicates import BREAK, any_of, broken, default_failure, has_sentinel, is_absent
from .step import BindingStep, FunctionStep, as_step

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'BindingChain',
    'BindingContext',
    'BindingStep',
    'FunctionStep',
    'Middleware',
    'LoggingMiddleware',
    'TimingMiddleware',
    'Outcome',
    'BREAK',
    'any_of',
    'as_step',
    'broken',
    'default_failure',
    'evaluate',
    'has_sentinel',
    'is_absent',
]
