import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        # Every test starts from empty stores
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def user_id():
    """A registered user."""
    from ordering.account.registration import RegisterUser
    from protean import current_domain

    return current_domain.process(
        RegisterUser(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            password_hash="$2b$10$abcdefghijklmnopqrstuv",
        ),
        asynchronous=False,
    )


@pytest.fixture()
def products():
    """Two catalog products keyed by a short name."""
    from ordering.catalog.management import AddProduct
    from protean import current_domain

    widget = current_domain.process(
        AddProduct(name="Widget", price=10.0, stock=100, product_images='["widget.png"]'),
        asynchronous=False,
    )
    gadget = current_domain.process(
        AddProduct(name="Gadget", price=2.5, stock=10, product_images='["gadget.png", "gadget-2.png"]'),
        asynchronous=False,
    )
    return {"widget": widget, "gadget": gadget}
