"""Offer administration — commands and handler."""

from protean import handle
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.offer.offer import Offer


@catalogue.command(part_of="Offer")
class CreateOffer:
    title: String(required=True, max_length=255)
    description: Text()
    discount_type: String(required=True, max_length=20)
    discount_value: Float(required=True, min_value=0.0)
    start_date: DateTime(required=True)
    end_date: DateTime(required=True)
    product_ids: Text()  # JSON array of product ids
    max_qty_per_order: Integer(min_value=1)
    is_active: Boolean(default=True)


@catalogue.command(part_of="Offer")
class ReviseOffer:
    offer_id: Identifier(required=True)
    title: String(max_length=255)
    description: Text()
    discount_type: String(max_length=20)
    discount_value: Float(min_value=0.0)
    start_date: DateTime()
    end_date: DateTime()
    product_ids: Text()
    max_qty_per_order: Integer(min_value=1)


@catalogue.command(part_of="Offer")
class ActivateOffer:
    offer_id: Identifier(required=True)


@catalogue.command(part_of="Offer")
class DeactivateOffer:
    offer_id: Identifier(required=True)


@catalogue.command(part_of="Offer")
class WithdrawOffer:
    offer_id: Identifier(required=True)


@catalogue.command_handler(part_of=Offer)
class ManageOfferHandler:
    @handle(CreateOffer)
    def create_offer(self, command):
        offer = Offer.create(
            title=command.title,
            description=command.description,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            start_date=command.start_date,
            end_date=command.end_date,
            product_ids=command.product_ids,
            max_qty_per_order=command.max_qty_per_order,
            is_active=command.is_active if command.is_active is not None else True,
        )
        current_domain.repository_for(Offer).add(offer)
        return str(offer.id)

    @handle(ReviseOffer)
    def revise_offer(self, command):
        repo = current_domain.repository_for(Offer)
        offer = repo.get(command.offer_id)
        offer.revise(
            title=command.title,
            description=command.description,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            start_date=command.start_date,
            end_date=command.end_date,
            product_ids=command.product_ids,
            max_qty_per_order=command.max_qty_per_order,
        )
        repo.add(offer)

    @handle(ActivateOffer)
    def activate_offer(self, command):
        repo = current_domain.repository_for(Offer)
        offer = repo.get(command.offer_id)
        offer.activate()
        repo.add(offer)

    @handle(DeactivateOffer)
    def deactivate_offer(self, command):
        repo = current_domain.repository_for(Offer)
        offer = repo.get(command.offer_id)
        offer.deactivate()
        repo.add(offer)

    @handle(WithdrawOffer)
    def withdraw_offer(self, command):
        repo = current_domain.repository_for(Offer)
        offer = repo.get(command.offer_id)
        offer.withdraw()
        # Persist first so OfferWithdrawn is dispatched with the unit of work
        repo.add(offer)
        repo._dao.delete(offer)
