"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from pytest_bdd import parsers, then


@pytest.fixture()
def result():
    """Container for the order under test and any refusal raised on the way."""
    return {"order": None, "exc": None}


# ---------------------------------------------------------------------------
# Shared Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(result, status):
    assert result["order"].order_status == status
