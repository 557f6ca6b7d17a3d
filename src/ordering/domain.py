"""Ordering bounded context — Shopping Cart, Checkout and Orders.

The cart lives in the shopper's session and is never persisted; checkout
turns it into an Order, records it and hands a summary to the store's
messaging channel.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
