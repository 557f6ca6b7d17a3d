"""Domain events for the Offer aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Offer")
class OfferCreated:
    """A promotional offer was set up by an administrator."""

    __version__ = 1

    offer_id: Identifier(required=True)
    title: String(required=True)
    discount_type: String(required=True)
    discount_value: Float(required=True)
    start_date: DateTime(required=True)
    end_date: DateTime(required=True)
    product_ids: Text(required=True)  # JSON array
    is_active: Boolean(default=True)


@catalogue.event(part_of="Offer")
class OfferRevised:
    """An offer's terms, window or product list were edited."""

    __version__ = 1

    offer_id: Identifier(required=True)
    title: String(required=True)
    discount_type: String(required=True)
    discount_value: Float(required=True)
    start_date: DateTime(required=True)
    end_date: DateTime(required=True)
    product_ids: Text(required=True)


@catalogue.event(part_of="Offer")
class OfferActivated:
    __version__ = 1

    offer_id: Identifier(required=True)


@catalogue.event(part_of="Offer")
class OfferDeactivated:
    __version__ = 1

    offer_id: Identifier(required=True)


@catalogue.event(part_of="Offer")
class OfferWithdrawn:
    """An offer was deleted outright."""

    __version__ = 1

    offer_id: Identifier(required=True)
    withdrawn_at: DateTime(required=True)
