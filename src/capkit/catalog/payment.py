"""
Payment capabilities.

PaymentProcessor depends on the PaymentMethod abstraction only; the
concrete method is chosen by registration.
"""
from abc import ABC, abstractmethod
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from capkit.catalog.reporting import Reporter
from capkit.domain.base.exceptions import ValidationError
from capkit.domain.capability import capability
from capkit.infrastructure.di.decorators import composite


class PaymentReceipt(BaseModel):
    """Record of an executed payment."""
    model_config = ConfigDict(frozen=True)

    method: str
    amount: float
    reference: str = Field(default_factory=lambda: str(uuid4()))


def validate_amount(amount: float) -> float:
    """Payments are for positive amounts only."""
    if amount <= 0:
        raise ValidationError(f"Payment amount must be positive, got {amount}", details={"amount": amount})
    return amount


@capability
class PaymentMethod(ABC):
    """Executes a payment for an amount."""

    @abstractmethod
    def execute(self, amount: float) -> PaymentReceipt:
        """Execute a payment."""


class ReportingPaymentMethod(PaymentMethod):
    """Base for payment methods that report each execution."""

    label = "payment"

    def __init__(self, reporter: Optional[Reporter] = None):
        self.reporter = reporter

    def execute(self, amount: float) -> PaymentReceipt:
        receipt = PaymentReceipt(method=self.label, amount=validate_amount(amount))
        if self.reporter is not None:
            self.reporter.report(f"{self.label} amount {amount}", reference=receipt.reference)
        return receipt


class DebitCardPayment(ReportingPaymentMethod):
    label = "Debit card"


class CreditCardPayment(ReportingPaymentMethod):
    label = "Credit card"


class ApplePayPayment(ReportingPaymentMethod):
    label = "Apple Pay"


@composite
class PaymentProcessor:
    """Makes payments with whichever payment method it was given."""

    def __init__(self, payment: PaymentMethod):
        self.payment = payment

    def make_payment(self, amount: float) -> PaymentReceipt:
        return self.payment.execute(validate_amount(amount))
