"""
Tests for middleware: pipeline order, LoggingMiddleware, TimingMiddleware
"""

import logging
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

import pytest

from stepchains import (
    BindingChain,
    LoggingMiddleware,
    Middleware,
    TimingMiddleware,
    broken,
    default_failure,
)
from stepchains.examples.order_validation import (
    OrderLoggingMiddleware,
    build_order_chain,
    confirmation,
    create_sample_order,
)


class RecordingMiddleware(Middleware):
    def __init__(self, label, journal):
        self.label = label
        self.journal = journal

    def execute(self, step, context, next_callable):
        self.journal.append(f"{self.label}:before:{step.name}")
        value = next_callable(context)
        self.journal.append(f"{self.label}:after:{step.name}")
        return value


class ReplaceNoneMiddleware(Middleware):
    """Turns a None value into a default so the chain keeps going."""

    def execute(self, step, context, next_callable):
        value = next_callable(context)
        return 'default' if value is None else value


def test_middleware_wraps_each_step_in_lifo_order():
    journal = []
    chain = (BindingChain()
        .bind('a', lambda env: 1)
        .bind('b', lambda env: 2)
        .use_middleware(RecordingMiddleware('outer', journal))
        .use_middleware(RecordingMiddleware('inner', journal)))

    assert chain.middleware_count() == 2
    assert chain.evaluate(lambda env: env.a + env.b) == 3
    assert journal == [
        'outer:before:a', 'inner:before:a', 'inner:after:a', 'outer:after:a',
        'outer:before:b', 'inner:before:b', 'inner:after:b', 'outer:after:b',
    ]


def test_middleware_not_called_after_short_circuit():
    journal = []
    chain = (BindingChain()
        .bind('a', lambda env: broken('a'))
        .bind('b', lambda env: 2)
        .use_middleware(RecordingMiddleware('m', journal)))

    assert chain.evaluate(lambda env: 'final') == {'break': 'a'}
    assert journal == ['m:before:a', 'm:after:a']


def test_middleware_can_replace_value():
    chain = (BindingChain()
        .bind('a', lambda env: None)
        .use_middleware(ReplaceNoneMiddleware()))

    assert chain.evaluate(lambda env: env.a) == 'default'

    chain.clear_middleware()
    assert chain.middleware_count() == 0
    assert chain.evaluate(lambda env: env.a) is None


def test_reset_clears_steps_and_middleware():
    chain = BindingChain().bind('a', lambda env: 1).use_middleware(TimingMiddleware())
    chain.reset()
    assert chain.step_count() == 0
    assert chain.middleware_count() == 0


def test_logging_middleware(caplog):
    logger = logging.getLogger('stepchains.test')
    chain = (BindingChain()
        .bind('a', lambda env: 1)
        .bind('b', lambda env: broken('bad'))
        .use_middleware(LoggingMiddleware(logger=logger, fail_predicate=default_failure)))

    with caplog.at_level(logging.DEBUG, logger='stepchains'):
        chain.evaluate(lambda env: None)

    messages = [record.getMessage() for record in caplog.records if record.name == 'stepchains.test']
    assert messages[0] == "Evaluating step a with 0 binding(s)"
    assert messages[1] == "Step a produced 1"
    assert messages[2] == "Evaluating step b with 1 binding(s)"
    assert messages[3] == "Step b failed: {'break': 'bad'}"

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1

    assert any(record.name == 'stepchains.chain' and 'step b' in record.getMessage()
               for record in caplog.records)


def test_logging_middleware_warns_on_none(caplog):
    chain = BindingChain().bind('a', lambda env: None).use_middleware(LoggingMiddleware())

    with caplog.at_level(logging.DEBUG, logger='stepchains'):
        assert chain.evaluate(lambda env: 'x') is None

    assert any(r.levelno == logging.WARNING and r.getMessage() == "Step a produced None"
               for r in caplog.records)


def test_timing_middleware():
    timing = TimingMiddleware()
    chain = (BindingChain()
        .bind('a', lambda env: 1)
        .bind('b', lambda env: 2)
        .use_middleware(timing))

    chain.evaluate(lambda env: None)
    chain.evaluate(lambda env: None)

    report = timing.report()
    assert [row['step'] for row in report] == ['a', 'b']
    assert all(row['calls'] == 2 for row in report)
    assert all(row['min_ms'] <= row['avg_ms'] <= row['max_ms'] for row in report)

    timing.reset()
    assert timing.report() == []


def test_timing_middleware_records_raising_step():
    timing = TimingMiddleware()

    def explode(env):
        raise RuntimeError("boom")

    chain = BindingChain().bind('a', explode).use_middleware(timing)
    with pytest.raises(RuntimeError):
        chain.evaluate(lambda env: None)
    assert len(timing.timings['a']) == 1


def test_order_validation_example():
    chain = build_order_chain()

    outcome = chain.execute(confirmation, environment={'raw_order': create_sample_order('ORD-1', 'C-1')})
    assert outcome.is_success()
    assert outcome.value['order_id'] == 'ORD-1'
    assert outcome.value['payment_id'] == 'PAY-1'

    again = chain.execute(confirmation, environment={'raw_order': create_sample_order('ORD-1', 'C-1')})
    assert again.value == outcome.value

    outcome = chain.execute(confirmation,
                            environment={'raw_order': create_sample_order('ORD-2', 'C-2', gadgets=4)})
    assert outcome.failed_step == 'reserved'
    assert outcome.value == {'break': 'Not enough stock for Gadget', 'order_id': 'ORD-2'}
    assert 'payment_id' not in outcome.bindings

    outcome = chain.execute(confirmation, environment={'raw_order': create_sample_order('ORD-3', None)})
    assert outcome.failed_step == 'order'
    assert outcome.value['break'] == "Customer ID is missing"


def test_order_validation_example_with_middleware(capsys):
    timing = TimingMiddleware()
    chain = build_order_chain(OrderLoggingMiddleware(), timing)

    outcome = chain.execute(confirmation,
                            environment={'raw_order': create_sample_order('ORD-7', 'C-7', gadgets=4)})
    assert outcome.failed_step == 'reserved'

    printed = capsys.readouterr().out
    assert "[ORD-7] ✗ reserved failed: Not enough stock for Gadget" in printed
    assert [row['step'] for row in timing.report()] == ['order', 'reserved', 'totals']
