"""
Simple example demonstrating a StepChains binding chain.
"""

import logging

from stepchains import BindingChain, LoggingMiddleware, TimingMiddleware, broken, default_failure


def parse_age(env):
    raw = env.form.get('age')
    if raw is None or not raw.isdigit():
        return broken(f"age must be a number, got {raw!r}")
    return int(raw)


def check_adult(env):
    if env.age < 18:
        return broken(f"{env.form['name']} is under 18")
    return True


def greet(env):
    return f"Welcome, {env.form['name']} ({env.age})!"


def main():
    logging.basicConfig(level=logging.DEBUG, format="[%(name)s] %(message)s")

    print("=" * 60)
    print("StepChains Simple Example")
    print("=" * 60)
    print()

    timing = TimingMiddleware()

    chain = (BindingChain()
        .bind('age', parse_age)
        .bind('adult', check_adult)
        .use_middleware(LoggingMiddleware(fail_predicate=default_failure))
        .use_middleware(timing))

    print(f"Chain built: {chain}")
    print()

    forms = [
        {'name': 'Alice', 'age': '34'},
        {'name': 'Bob', 'age': '12'},
        {'name': 'Carol', 'age': 'unknown'},
    ]

    for form in forms:
        print("-" * 60)
        outcome = chain.execute(greet, environment={'form': form})
        if outcome:
            print(f"✓ {outcome.value}")
        else:
            print(f"✗ Stopped at '{outcome.failed_step}': {outcome.value['break']}")

    print("-" * 60)
    print()
    for row in timing.report():
        print(f"[TIMING] {row['step']} avg {row['avg_ms']:.3f}ms over {row['calls']} call(s)")

    print()
    print("=" * 60)


if __name__ == "__main__":
    main()
