"""Shopper session — owns one cart and the free-text special request note."""

from uuid import uuid4

from ordering.cart.cart import ShoppingCart


class ShopperSession:
    """A single shopper's browsing session.

    One logical actor mutates a session at a time, so nothing here is locked.
    """

    def __init__(self, session_id=None, customer_id=None, customer_phone=None):
        self.session_id = session_id or str(uuid4())
        self.customer_id = customer_id
        self.customer_phone = customer_phone
        self.cart = ShoppingCart.create(session_id=self.session_id)
        self.special_request = ""

    def reset_note(self):
        self.special_request = ""

    def __repr__(self):
        return f"<ShopperSession {self.session_id} items={self.cart.get_item_count()}>"
