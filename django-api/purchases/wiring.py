"""Assemble purchase services over the ORM stores."""

from common.codes import PURCHASE_CODE_PREFIX
from common.wiring import code_encoder, code_generator, museum_config
from purchases.services import PurchaseWorkflow, RedemptionVerifier
from purchases.stores.django_store import DjangoPurchaseStore
from tickets.services import InventoryService
from tickets.stores.django_store import DjangoTicketStore


def purchase_workflow() -> PurchaseWorkflow:
    config = museum_config()
    tickets = DjangoTicketStore()
    return PurchaseWorkflow(
        store=DjangoPurchaseStore(),
        tickets=tickets,
        inventory=InventoryService(tickets),
        codes=code_generator(PURCHASE_CODE_PREFIX),
        encoder=code_encoder(config),
        config=config,
    )


def redemption_verifier() -> RedemptionVerifier:
    return RedemptionVerifier(DjangoPurchaseStore())
