"""Runnable catalog scenarios, one per design principle."""
import asyncio
from typing import Any, Callable, Dict

from capkit.catalog.api import DataService
from capkit.catalog.gestures import DoubleTapButton, SuperButton
from capkit.catalog.invoice import Invoice, InvoiceService, Product
from capkit.catalog.payment import PaymentProcessor
from capkit.catalog.zoo import Animal, Cage
from capkit.domain.base.ports import ComposerPort


def invoice_scenario(composer: ComposerPort) -> Dict[str, Any]:
    """Single responsibility: totals, rendering and saving are separate."""
    invoice = Invoice(
        products=[Product(price=99.0), Product(price=9.0), Product(price=999.0)],
        discount_percentage=20,
    )
    service = composer.compose_type(InvoiceService)
    return {
        "invoice_id": invoice.id,
        "total": round(invoice.total, 2),
        "rendered": service.print_invoice(invoice),
        "saved_to": service.save_invoice(invoice),
    }


def payment_scenario(composer: ComposerPort) -> Dict[str, Any]:
    """Dependency inversion: the processor only knows PaymentMethod."""
    processor = composer.compose_type(PaymentProcessor)
    receipt = processor.make_payment(200)
    return {"method": receipt.method, "amount": receipt.amount, "reference": receipt.reference}


def zoo_scenario(composer: ComposerPort) -> Dict[str, Any]:
    """Open/closed and Liskov: cages and animals vary only by registration."""
    cage = composer.compose_type(Cage, label="lion cage")
    penguin = composer.compose_type(Animal, selections={"movement": "Swimming"}, name="penguin")
    sparrow = composer.compose_type(Animal, selections={"movement": "Flying"}, name="sparrow")
    return {
        "cage": cage.describe(),
        "feeding": cage.feed(),
        "animals": [penguin.move(), sparrow.move()],
    }


def gestures_scenario(composer: ComposerPort) -> Dict[str, Any]:
    """Interface segregation: each button requires only the gestures it handles."""
    super_button = composer.compose_type(SuperButton)
    double_tap_button = composer.compose_type(DoubleTapButton)
    return {
        "super_button": [super_button.handle(g) for g in super_button.gestures],
        "double_tap_button": [double_tap_button.handle(g) for g in double_tap_button.gestures],
    }


def api_scenario(composer: ComposerPort) -> Dict[str, Any]:
    """The one asynchronous call: a mock fetch whose failures are reported."""
    service = composer.compose_type(DataService)
    return {"data": asyncio.run(service.load())}


SCENARIOS: Dict[str, Callable[[ComposerPort], Dict[str, Any]]] = {
    "invoice": invoice_scenario,
    "payment": payment_scenario,
    "zoo": zoo_scenario,
    "gestures": gestures_scenario,
    "api": api_scenario,
}
