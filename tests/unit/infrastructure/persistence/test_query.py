"""Tests for the lazy Query: composition order and deferred execution."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from order_book import Customer, CustomerCard, Order
from repokit.exceptions import InvalidSortPath
from repokit.infrastructure.persistence.query import Projection, Query, as_projection, columns
from repokit.infrastructure.persistence.store import SessionStore


def _sql(stmt):
    return " ".join(str(stmt).split())


def _store():
    session = AsyncMock()
    session.info = {}
    return SessionStore(session), session


# --- laziness ---

def test_building_a_query_does_not_touch_the_store():
    store, session = _store()
    Query(store, Customer).where(Customer.is_active.is_(True)).order_by("name").offset(5).limit(5)
    session.execute.assert_not_awaited()
    session.scalar.assert_not_awaited()


def test_builders_return_new_queries():
    store, _ = _store()
    base = Query(store, Customer)
    filtered = base.where(Customer.name == "x")
    assert base.conditions == ()
    assert len(filtered.conditions) == 1


def test_where_ignores_none():
    store, _ = _store()
    assert Query(store, Customer).where(None).conditions == ()


def test_order_by_unknown_path_fails_at_build_time():
    store, session = _store()
    with pytest.raises(InvalidSortPath):
        Query(store, Customer).order_by("Bogus")
    session.execute.assert_not_awaited()


async def test_to_list_executes_once():
    store, session = _store()
    session.execute.return_value = MagicMock(
        scalars=MagicMock(return_value=MagicMock(all=MagicMock(return_value=["a", "b"])))
    )
    assert await Query(store, Customer).to_list() == ["a", "b"]
    session.execute.assert_awaited_once()


# --- statement composition ---

def test_statement_composes_in_fixed_order_regardless_of_call_order():
    store, _ = _store()
    query = (
        Query(store, Order)
        .limit(10)
        .select(columns(Order.reference))
        .order_by("customer.name", "Descending")
        .offset(20)
        .where(Order.total_cents > 100)
    )
    sql = _sql(query.statement())
    assert sql.startswith("SELECT orders.reference FROM orders LEFT OUTER JOIN customers")
    assert sql.index("WHERE") < sql.index("ORDER BY") < sql.index("LIMIT") < sql.index("OFFSET")
    assert "ORDER BY sort_0_customer.name DESC" in sql


def test_filtered_statement_ignores_order_projection_and_paging():
    store, _ = _store()
    query = Query(store, Customer).where(Customer.city == "Oslo").order_by("name").limit(3)
    sql = _sql(query.filtered_statement())
    assert "ORDER BY" not in sql
    assert "LIMIT" not in sql
    assert "WHERE customers.city = :city_1" in sql


# --- projections ---

def test_as_projection_wraps_columns():
    assert as_projection(None) is None
    assert as_projection(Customer.name).columns == (Customer.name,)
    assert len(as_projection([Customer.name, Customer.city]).columns) == 2


def test_as_projection_passes_projection_through():
    projection = columns(Customer.name)
    assert as_projection(projection) is projection


def test_single_column_projection_yields_bare_values():
    assert Projection(columns=(Customer.name,)).shape(("Ada",)) == "Ada"


def test_projection_into_builds_target_from_row_mapping():
    row = MagicMock(_mapping={"name": "Ada", "city": "Oslo"})
    card = columns(Customer.name, Customer.city, into=CustomerCard).shape(row)
    assert card == CustomerCard(name="Ada", city="Oslo")
