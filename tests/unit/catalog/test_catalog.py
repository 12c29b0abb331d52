"""Tests for the built-in catalog of capabilities and composites."""
import asyncio
import io

import pytest
from pydantic import ValidationError as PydanticValidationError

from capkit.catalog import CATALOG, SCENARIOS, register_catalog
from capkit.catalog.api import APIError, APIErrorKind, DataFetcher, DataService, MockAPI
from capkit.catalog.gestures import DoubleTapButton, SuperButton, TapHandler
from capkit.catalog.invoice import Invoice, InvoiceService, Product, TextInvoiceRenderer
from capkit.catalog.payment import ApplePayPayment, PaymentProcessor
from capkit.catalog.reporting import ConsoleReporter, RecordingReporter, Reporter
from capkit.catalog.zoo import Animal, Cage, Door, IronDoor
from capkit.domain.base.exceptions import ValidationError
from capkit.domain.capability import Lifetime, RegistrationPolicy
from capkit.infrastructure.di import Composer
from capkit.infrastructure.registry import CapabilityRegistry


@pytest.fixture
def catalog_registry():
    registry = CapabilityRegistry()
    register_catalog(registry)
    return registry


@pytest.fixture
def recorder(catalog_registry):
    """Replace the default reporter with a shared recording one."""
    catalog_registry.register(Reporter, RecordingReporter, lifetime=Lifetime.SINGLETON)
    return catalog_registry.resolve(Reporter)


@pytest.fixture
def catalog_composer(catalog_registry):
    return Composer(catalog_registry)


class TestCatalogRegistration:
    """Test registering the catalog."""

    def test_defaults_registered_last(self, catalog_registry):
        for interface, default, alternatives in CATALOG:
            implementations = catalog_registry.get_implementations(interface)
            assert implementations[-1] == default.__name__
            assert implementations[:-1] == [a.__name__ for a in alternatives]

    def test_strict_registry_gets_defaults_only(self):
        registry = CapabilityRegistry(policy=RegistrationPolicy.STRICT)

        registrations = register_catalog(registry)

        assert len(registrations) == len(CATALOG)
        assert registry.get_implementations(Door) == ["WoodenDoor"]

    def test_default_reporter_is_shared(self, catalog_registry):
        assert catalog_registry.resolve(Reporter) is catalog_registry.resolve(Reporter)


class TestInvoice:
    """Test invoice totals, rendering and persistence."""

    def setup_method(self):
        self.invoice = Invoice(
            id="inv-1",
            products=[Product(price=99.0), Product(price=9.0), Product(price=999.0)],
            discount_percentage=20,
        )

    def test_total(self):
        assert self.invoice.subtotal == pytest.approx(1107.0)
        assert self.invoice.total == pytest.approx(885.6)

    def test_render(self):
        text = TextInvoiceRenderer().render(self.invoice)

        assert text.splitlines() == [
            "-" * 22,
            "Invoice id: inv-1",
            "Total Cost $885.60",
            "Discounts: 20%",
            "-" * 22,
        ]

    def test_invalid_values(self):
        with pytest.raises(PydanticValidationError):
            Invoice(discount_percentage=120)
        with pytest.raises(PydanticValidationError):
            Product(price=-1)

    def test_service_saves_in_memory(self, catalog_composer, recorder):
        service = catalog_composer.compose_type(InvoiceService)

        assert service.save_invoice(self.invoice) == "memory://inv-1"
        assert service.persistence.saved == {"inv-1": self.invoice}

        service.print_invoice(self.invoice)
        assert recorder.entries[0][0].startswith("-" * 22)

    def test_persistence_swapped_by_selection(self, catalog_composer, recorder):
        """Test that a new persistence target needs no change to InvoiceService."""
        service = catalog_composer.compose_type(
            InvoiceService, selections={"persistence": "CoreDataPersistence"}
        )

        assert service.save_invoice(self.invoice) == "coredata://inv-1"
        assert ("Save to Core Data", {"invoice_id": "inv-1"}) in recorder.entries

    def test_database_persistence(self, catalog_composer, recorder):
        service = catalog_composer.compose_type(
            InvoiceService, selections={"persistence": "DatabasePersistence"}
        )

        assert service.save_invoice(self.invoice) == "database://invoices/inv-1"


class TestPayment:
    """Test payment processing through the PaymentMethod capability."""

    def test_default_method(self, catalog_composer, recorder):
        receipt = catalog_composer.compose_type(PaymentProcessor).make_payment(200)

        assert receipt.method == "Credit card"
        assert receipt.amount == 200
        assert recorder.entries == [("Credit card amount 200", {"reference": receipt.reference})]

    def test_selected_method(self, catalog_composer):
        processor = catalog_composer.compose_type(PaymentProcessor, selections={"payment": "ApplePayPayment"})

        assert isinstance(processor.payment, ApplePayPayment)
        assert processor.make_payment(5).method == "Apple Pay"

    @pytest.mark.parametrize("amount", [0, -10])
    def test_non_positive_amount(self, catalog_composer, amount):
        processor = catalog_composer.compose_type(PaymentProcessor)

        with pytest.raises(ValidationError, match="must be positive"):
            processor.make_payment(amount)


class TestZoo:
    """Test cages and animals."""

    def test_cage(self, catalog_composer):
        cage = catalog_composer.compose_type(Cage, label="lion cage")

        assert cage.feed() == "lion cage: wooden door creaks open, serving bowl of apples"

    def test_cage_with_iron_door(self, catalog_composer):
        cage = catalog_composer.compose_type(Cage, selections={"door": "IronDoor"})

        assert isinstance(cage.door, IronDoor)
        assert cage.describe()["door"] == "IronDoor"

    @pytest.mark.parametrize("movement, expected", [
        ("Walking", "lion walks"),
        ("Flying", "lion flies"),
        ("Swimming", "lion swims"),
    ])
    def test_animal_movements(self, catalog_composer, movement, expected):
        animal = catalog_composer.compose_type(Animal, selections={"movement": movement}, name="lion")

        assert animal.move() == expected


class TestGestures:
    """Test buttons that only require the gestures they handle."""

    def test_super_button(self, catalog_composer, recorder):
        button = catalog_composer.compose_type(SuperButton)

        assert button.gestures == ["double_tap", "long_press", "tap"]
        assert button.handle("long_press") == "long_press"
        assert ("Gesture handled", {"gesture": "long_press"}) in recorder.entries

    def test_double_tap_button(self, catalog_composer):
        button = catalog_composer.compose_type(DoubleTapButton)

        assert button.gestures == ["double_tap"]
        assert button.handle("double_tap") == "double_tap"
        with pytest.raises(ValidationError, match="does not handle 'tap'"):
            button.handle("tap")

    def test_handler_without_reporter(self):
        assert TapHandler().did_tap() == "tap"


class TestDataService:
    """Test the asynchronous data service."""

    def test_load_payload(self, catalog_registry, catalog_composer):
        catalog_registry.register(DataFetcher, MockAPI, config={"payload": {"user": "ada"}})

        service = catalog_composer.compose_type(DataService)

        assert asyncio.run(service.load()) == {"user": "ada"}

    def test_load_error_is_reported(self, catalog_registry, catalog_composer, recorder):
        catalog_registry.register(DataFetcher, MockAPI, config={"error": "invalid_url"})

        service = catalog_composer.compose_type(DataService)

        assert asyncio.run(service.load()) is None
        assert recorder.entries == [("Error", {"error": "invalid_url"})]

    def test_mock_api_raises(self):
        api = MockAPI(error="invalid_status_code")

        with pytest.raises(APIError) as exc_info:
            asyncio.run(api.fetch_data())

        assert exc_info.value.kind == APIErrorKind.INVALID_STATUS_CODE


class TestReporters:
    def test_console_reporter(self):
        stream = io.StringIO()

        ConsoleReporter(stream).report("Save to Core Data", invoice_id="inv-1")

        assert stream.getvalue() == "Save to Core Data invoice_id=inv-1\n"

    def test_recording_reporter(self):
        reporter = RecordingReporter()
        reporter.report("one")
        reporter.report("two", n=2)

        assert reporter.entries == [("one", {}), ("two", {"n": 2})]


class TestScenarios:
    """Test the runnable scenarios against a catalog registry."""

    def test_all_scenarios_run(self, catalog_composer):
        results = {name: scenario(catalog_composer) for name, scenario in SCENARIOS.items()}

        assert results["invoice"]["total"] == 885.6
        assert results["invoice"]["saved_to"] == f"memory://{results['invoice']['invoice_id']}"
        assert results["payment"]["method"] == "Credit card"
        assert results["zoo"]["animals"] == ["penguin swims", "sparrow flies"]
        assert results["zoo"]["cage"] == {"label": "lion cage", "door": "WoodenDoor", "bowl": "FruitBowl"}
        assert results["gestures"]["double_tap_button"] == ["double_tap"]
        assert results["api"] == {"data": {}}
