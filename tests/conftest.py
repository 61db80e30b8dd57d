import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.core.session import SessionManager
from storefront.core.storage import MemoryKeyValueStore
from storefront.database.carts import CartStore
from storefront.database.orders import OrderStore
from storefront.database.products import ProductDatabase
from storefront.main import create_app
from storefront.models.cart import CartLineItem
from storefront.models.checkout import CheckoutForm, PaymentMethod
from storefront.services.checkout import CheckoutOrchestrator
from storefront.services.payment import SimulatedPaymentGateway


@pytest.fixture()
def make_item():
    def _make(id="1", price=10.0, quantity=1, **overrides):
        data = {
            "id": id,
            "name": f"Product {id}",
            "price": price,
            "seller": "FurniturePro",
            "category": "Home",
            "quantity": quantity,
        }
        data.update(overrides)
        return CartLineItem(**data)

    return _make


@pytest.fixture()
def storage():
    return MemoryKeyValueStore()


@pytest.fixture()
def cart_store(storage):
    return CartStore(storage)


@pytest.fixture()
def order_store(storage):
    return OrderStore(storage)


@pytest.fixture()
def orchestrator(cart_store, order_store):
    return CheckoutOrchestrator(
        cart_store=cart_store,
        order_store=order_store,
        gateway=SimulatedPaymentGateway(delay_seconds=0),
    )


@pytest.fixture()
def cod_form():
    return CheckoutForm(
        customer_name="Amina Benali",
        customer_email="amina@example.com",
        customer_phone="+213 555 12 34 56",
        address="12 Rue Didouche Mourad",
        city="Algiers",
        postal_code="16000",
        payment_method=PaymentMethod.CASH_ON_DELIVERY,
    )


@pytest.fixture()
def card_form(cod_form):
    return cod_form.model_copy(
        update={
            "payment_method": PaymentMethod.CARD,
            "card_number": "4242 4242 4242 4242",
            "expiry_date": "12/27",
            "cvv": "987",
        }
    )


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        storage_dir=str(tmp_path / "sessions"),
        payment_delay_seconds=0,
        payment_timeout_seconds=5,
        payment_gateway_url=None,
    )


@pytest.fixture()
def session_manager(settings):
    stores: dict[str, MemoryKeyValueStore] = {}

    def storage_factory(session_id):
        return stores.setdefault(session_id, MemoryKeyValueStore())

    return SessionManager(
        settings=settings,
        gateway=SimulatedPaymentGateway(delay_seconds=0),
        storage_factory=storage_factory,
    )


@pytest.fixture()
def client(settings, session_manager):
    app = create_app(
        settings=settings,
        session_manager=session_manager,
        product_db=ProductDatabase(),
    )
    return TestClient(app)
