"""
Order validation example demonstrating a business workflow with StepChains.
"""

from stepchains import BREAK, BindingChain, BindingStep, Middleware, TimingMiddleware, broken, default_failure

TAX_RATE = 0.08

INVENTORY = {'Widget': 10, 'Gadget': 1, 'Doohickey': 5}


# Steps
class ValidateOrder(BindingStep):
    def __init__(self):
        super().__init__('order')

    def evaluate(self, context):
        order = context.get('raw_order')

        if not order:
            return broken("Order is missing")

        if not order.get('items'):
            return broken("Order has no items", order_id=order.get('id'))

        if not order.get('customer_id'):
            return broken("Customer ID is missing", order_id=order.get('id'))

        print(f"✓ Order validated for customer {order['customer_id']}")
        return order


class CalculateTotals(BindingStep):
    def __init__(self):
        super().__init__('totals')

    def evaluate(self, context):
        items = context.order['items']

        subtotal = sum(item['price'] * item['quantity'] for item in items)
        tax = subtotal * TAX_RATE
        total = subtotal + tax

        print(f"✓ Calculated totals - Subtotal: ${subtotal:.2f}, Tax: ${tax:.2f}, Total: ${total:.2f}")
        return {'subtotal': subtotal, 'tax': tax, 'total': total}


class CheckInventory(BindingStep):
    def __init__(self):
        super().__init__('reserved')

    def evaluate(self, context):
        reserved = []
        for item in context.order['items']:
            print(f"  Checking inventory for {item['name']}...")
            if INVENTORY.get(item['name'], 0) < item['quantity']:
                return broken(f"Not enough stock for {item['name']}", order_id=context.order['id'])
            reserved.append(item['name'])

        print("✓ Inventory check passed")
        return reserved


class ProcessPayment(BindingStep):
    def __init__(self):
        super().__init__('payment_id')

    def evaluate(self, context):
        total = context.totals['total']
        payment_method = context.order.get('payment_method', 'credit_card')

        # Simulated processor
        payment_id = f"PAY-{context.order['id'].split('-')[-1]}"

        print(f"✓ Payment processed: {payment_id} (${total:.2f} via {payment_method})")
        return payment_id


def confirmation(context):
    order = context.order
    return {
        'order_id': order['id'],
        'customer_email': order.get('customer_email', 'customer@example.com'),
        'total': round(context.totals['total'], 2),
        'payment_id': context.payment_id,
    }


# Middleware
class OrderLoggingMiddleware(Middleware):
    def execute(self, step, context, next_callable):
        raw_order = context.get('raw_order') or {}
        order_id = raw_order.get('id', 'N/A')

        print(f"\n[{order_id}] → {step.name}")
        value = next_callable(context)

        if default_failure(value):
            print(f"[{order_id}] ✗ {step.name} failed: {value[BREAK]}")

        return value


def create_sample_order(order_id, customer_id, gadgets=1):
    return {
        'id': order_id,
        'customer_id': customer_id,
        'customer_email': f'customer{customer_id}@example.com',
        'payment_method': 'credit_card',
        'items': [
            {'name': 'Widget', 'price': 19.99, 'quantity': 2},
            {'name': 'Gadget', 'price': 49.99, 'quantity': gadgets},
            {'name': 'Doohickey', 'price': 9.99, 'quantity': 3}
        ]
    }


def build_order_chain(*middleware):
    chain = (BindingChain()
        .add_step(ValidateOrder())
        .add_step(CalculateTotals())
        .add_step(CheckInventory())
        .add_step(ProcessPayment()))
    for item in middleware:
        chain.use_middleware(item)
    return chain


def main():
    print("=" * 60)
    print("StepChains Order Validation Example")
    print("=" * 60)

    timing = TimingMiddleware()
    order_chain = build_order_chain(OrderLoggingMiddleware(), timing)

    print(f"\nChain: {order_chain}\n")

    orders = [
        create_sample_order('ORD-001', 'CUST-123'),
        create_sample_order('ORD-002', 'CUST-456', gadgets=4),
        create_sample_order('ORD-003', None),
    ]

    successful = 0
    failed = 0

    for order in orders:
        outcome = order_chain.execute(confirmation, environment={'raw_order': order})

        if outcome:
            successful += 1
            print(f"\n✓ Order {order['id']} confirmed: {outcome.value}")
        else:
            failed += 1
            print(f"\n✗ Order {order['id']} stopped at {outcome.failed_step}: {outcome.value[BREAK]}")

    print()
    for row in timing.report():
        print(f"[TIMING] {row['step']} avg {row['avg_ms']:.3f}ms over {row['calls']} call(s)")

    print("\n" + "=" * 60)
    print(f"Summary: {successful} successful, {failed} failed")
    print("=" * 60)


if __name__ == "__main__":
    main()
