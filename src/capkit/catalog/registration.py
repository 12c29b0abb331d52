"""Registration of the built-in catalog implementations."""
from typing import Any, Callable, List, Tuple

from capkit.catalog.api import DataFetcher, MockAPI
from capkit.catalog.gestures import (
    DoubleTapHandler,
    DoubleTappable,
    LongPressable,
    LongPressHandler,
    Tappable,
    TapHandler,
)
from capkit.catalog.invoice import (
    CoreDataPersistence,
    DatabasePersistence,
    InMemoryInvoicePersistence,
    InvoicePersistable,
    InvoiceRenderer,
    TextInvoiceRenderer,
)
from capkit.catalog.payment import ApplePayPayment, CreditCardPayment, DebitCardPayment, PaymentMethod
from capkit.catalog.reporting import ConsoleReporter, RecordingReporter, Reporter, StructuredReporter
from capkit.catalog.zoo import (
    Bowl,
    Door,
    Flying,
    FruitBowl,
    IronDoor,
    MeatBowl,
    Movement,
    Swimming,
    Walking,
    WoodenDoor,
)
from capkit.domain.capability import Lifetime, Registration, RegistrationPolicy
from capkit.infrastructure.logging.logger import get_logger
from capkit.infrastructure.registry.capability_registry import CapabilityRegistry

logger = get_logger(__name__)

# (capability, default implementation, alternatives registered before the default)
CATALOG: List[Tuple[type, Callable[..., Any], List[Callable[..., Any]]]] = [
    (Reporter, StructuredReporter, [ConsoleReporter, RecordingReporter]),
    (InvoiceRenderer, TextInvoiceRenderer, []),
    (InvoicePersistable, InMemoryInvoicePersistence, [CoreDataPersistence, DatabasePersistence]),
    (PaymentMethod, CreditCardPayment, [DebitCardPayment, ApplePayPayment]),
    (Door, WoodenDoor, [IronDoor]),
    (Bowl, FruitBowl, [MeatBowl]),
    (Movement, Walking, [Flying, Swimming]),
    (Tappable, TapHandler, []),
    (DoubleTappable, DoubleTapHandler, []),
    (LongPressable, LongPressHandler, []),
    (DataFetcher, MockAPI, []),
]


def register_catalog(registry: CapabilityRegistry) -> List[Registration]:
    """
    Register the catalog implementations.

    Alternatives are only registered when the registry allows more than
    one implementation per capability; the default is always registered
    last so it wins resolution.

    Args:
        registry: Registry to register into

    Returns:
        Registrations created
    """
    registrations = []
    with_alternatives = registry.policy == RegistrationPolicy.LAST_WINS

    for interface, default, alternatives in CATALOG:
        if with_alternatives:
            for alternative in alternatives:
                registrations.append(registry.register(interface, alternative))

        lifetime = Lifetime.SINGLETON if interface is Reporter else None
        registrations.append(registry.register(interface, default, lifetime=lifetime))

    logger.info(f"Registered {len(registrations)} catalog implementation(s)")
    return registrations
