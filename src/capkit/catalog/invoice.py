"""
Invoice capabilities.

An invoice only knows its products and how to total them. Rendering and
persistence are separate capabilities, and new persistence targets are
added as new implementations without touching InvoiceService.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from capkit.catalog.reporting import Reporter
from capkit.domain.capability import capability
from capkit.infrastructure.di.decorators import composite


class Product(BaseModel):
    """A priced product line."""

    name: str = "item"
    price: float

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        """Validate product price."""
        if v < 0:
            raise ValueError("Product price cannot be negative")
        return v


class Invoice(BaseModel):
    """Products with an optional percentage discount."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    products: List[Product] = Field(default_factory=list)
    discount_percentage: float = 0.0

    @field_validator("discount_percentage")
    @classmethod
    def validate_discount(cls, v: float) -> float:
        """Validate discount percentage."""
        if not 0 <= v <= 100:
            raise ValueError("Discount percentage must be between 0 and 100")
        return v

    @property
    def subtotal(self) -> float:
        return sum(product.price for product in self.products)

    @property
    def total(self) -> float:
        discounted_amount = self.subtotal * (self.discount_percentage / 100)
        return self.subtotal - discounted_amount


@capability
class InvoiceRenderer(ABC):
    """Turns an invoice into printable text."""

    @abstractmethod
    def render(self, invoice: Invoice) -> str:
        """Render an invoice."""


@capability
class InvoicePersistable(ABC):
    """Stores an invoice somewhere."""

    @abstractmethod
    def save(self, invoice: Invoice) -> str:
        """Save an invoice and return where it went."""


class TextInvoiceRenderer(InvoiceRenderer):
    """Plain text invoice between separator lines."""

    def __init__(self, width: int = 22):
        self.width = width

    def render(self, invoice: Invoice) -> str:
        separator = "-" * self.width
        return "\n".join([
            separator,
            f"Invoice id: {invoice.id}",
            f"Total Cost ${invoice.total:.2f}",
            f"Discounts: {invoice.discount_percentage:g}%",
            separator,
        ])


class InMemoryInvoicePersistence(InvoicePersistable):
    """Keeps saved invoices in a dictionary keyed by id."""

    def __init__(self):
        self.saved: Dict[str, Invoice] = {}

    def save(self, invoice: Invoice) -> str:
        self.saved[invoice.id] = invoice
        return f"memory://{invoice.id}"


class CoreDataPersistence(InvoicePersistable):
    """Reports a save to Core Data."""

    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def save(self, invoice: Invoice) -> str:
        self.reporter.report("Save to Core Data", invoice_id=invoice.id)
        return f"coredata://{invoice.id}"


class DatabasePersistence(InvoicePersistable):
    """Reports a save to a remote database."""

    def __init__(self, reporter: Reporter, collection: str = "invoices"):
        self.reporter = reporter
        self.collection = collection

    def save(self, invoice: Invoice) -> str:
        self.reporter.report("Save to database", invoice_id=invoice.id, collection=self.collection)
        return f"database://{self.collection}/{invoice.id}"


@composite
class InvoiceService:
    """Prints and saves invoices through injected capabilities."""

    def __init__(self, renderer: InvoiceRenderer, persistence: InvoicePersistable,
                 reporter: Optional[Reporter] = None):
        self.renderer = renderer
        self.persistence = persistence
        self.reporter = reporter

    def print_invoice(self, invoice: Invoice) -> str:
        text = self.renderer.render(invoice)
        if self.reporter is not None:
            self.reporter.report(text)
        return text

    def save_invoice(self, invoice: Invoice) -> str:
        return self.persistence.save(invoice)
