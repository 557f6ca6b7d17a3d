"""Checkout log context for the Ordering domain.

Handlers and processors are configured by ``shared.logging``; this module
only binds the shopper session onto the lines logged during a checkout.
"""

import structlog

from shared.logging import add_context


def bind_checkout_context(session_id: str, customer_name: str) -> None:
    """Attach the shopper session to every log line emitted during a checkout."""
    add_context(session_id=session_id, customer_name=customer_name)


def clear_checkout_context() -> None:
    structlog.contextvars.unbind_contextvars("session_id", "customer_name")
