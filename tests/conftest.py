"""
Shared test fixtures.

Provides a chainable mock Supabase client that actually applies
eq/neq/like/order/limit over configured rows, and an in-memory
CatalogStore for the pricing and search services.
"""

import os
import re
import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Settings require Supabase credentials at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from datetime import datetime
from decimal import Decimal
from typing import Generator, Optional, Sequence

from models.catalog import CatalogMatch
from models.customer import CustomerResponse


# ===================
# MOCK SUPABASE CLIENT
# ===================

def _resolve(row: dict, column: str):
    """Read a possibly embedded column, e.g. "parts.description"."""
    value = row
    for key in column.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _like_regex(pattern: str) -> re.Pattern:
    """Case-sensitive SQL LIKE pattern as a regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("^" + "".join(parts) + "$", re.DOTALL)


class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        self.count = count if count is not None else (len(self.data) if isinstance(self.data, list) else 1)


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.

    Filters are collected and applied on execute(), so update().eq()
    only touches matching rows.
    """

    def __init__(self, table: "MockSupabaseTable", operation: str = "select", payload=None):
        self._table = table
        self._operation = operation
        self._payload = payload
        self._filters = []
        self._order = []
        self._limit: Optional[int] = None
        self._range: Optional[tuple[int, int]] = None
        self._is_single = False

    # Filters

    def eq(self, column, value):
        self._filters.append(
            lambda row: _resolve(row, column) is not None and str(_resolve(row, column)) == str(value)
        )
        return self

    def neq(self, column, value):
        self._filters.append(
            lambda row: _resolve(row, column) is not None and str(_resolve(row, column)) != str(value)
        )
        return self

    def like(self, column, pattern):
        regex = _like_regex(pattern)
        self._filters.append(
            lambda row: isinstance(_resolve(row, column), str) and bool(regex.match(_resolve(row, column)))
        )
        return self

    def in_(self, column, values):
        wanted = {str(v) for v in values}
        self._filters.append(lambda row: str(_resolve(row, column)) in wanted)
        return self

    # Modifiers

    def select(self, *args, **kwargs):
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order.append((column, desc))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def single(self):
        self._is_single = True
        return self

    def execute(self) -> MockSupabaseResponse:
        self._table.client.executed.append((self._table.name, self._operation))

        if self._table.error is not None:
            raise self._table.error

        if self._operation == "insert":
            return MockSupabaseResponse(data=self._table.record_insert(self._payload))

        rows = [row for row in self._table.rows if all(f(row) for f in self._filters)]

        if self._operation == "update":
            now = datetime.utcnow().isoformat() + "Z"
            updated = [{**row, **self._payload, "updated_at": now} for row in rows]
            self._table.updates.append(self._payload)
            return MockSupabaseResponse(data=updated)

        if self._operation == "delete":
            return MockSupabaseResponse(data=rows)

        for column, desc in reversed(self._order):
            rows.sort(
                key=lambda row: (_resolve(row, column) is None, _resolve(row, column) or 0),
                reverse=desc
            )

        total = len(rows)
        if self._range:
            rows = rows[self._range[0]:self._range[1] + 1]
        if self._limit is not None:
            rows = rows[:self._limit]

        if self._is_single:
            return MockSupabaseResponse(data=rows[0] if rows else None, count=total)

        return MockSupabaseResponse(data=rows, count=total)


class MockSupabaseTable:
    """Mock Supabase table over configured rows."""

    def __init__(self, client: "MockSupabaseClient", name: str, rows: list):
        self.client = client
        self.name = name
        self.rows = rows
        self.inserted: list[dict] = []
        self.updates: list[dict] = []
        self.error: Optional[Exception] = None

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self)

    def insert(self, data):
        return MockSupabaseQuery(self, "insert", data)

    def update(self, data):
        return MockSupabaseQuery(self, "update", data)

    def delete(self):
        return MockSupabaseQuery(self, "delete")

    def record_insert(self, data) -> list[dict]:
        items = [data] if isinstance(data, dict) else list(data)
        now = datetime.utcnow().isoformat() + "Z"
        created = []
        for item in items:
            row = {"id": len(self.rows) + len(self.inserted) + 1, "created_at": now, **item}
            self.inserted.append(row)
            created.append(row)
        return created


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables: dict[str, MockSupabaseTable] = {}
        self.executed: list[tuple[str, str]] = []

    def set_table_data(self, table_name: str, data: list):
        """Configure rows for a table (embedded relations as nested dicts)."""
        self._tables[table_name] = MockSupabaseTable(self, table_name, list(data))

    def set_table_error(self, table_name: str, error: Exception):
        """Make every query on a table raise error."""
        self.table(table_name).error = error

    def table(self, name: str) -> MockSupabaseTable:
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable(self, name, [])
        return self._tables[name]


# ===================
# IN-MEMORY CATALOG STORE
# ===================

class InMemoryCatalogStore:
    """
    CatalogStore over plain Python lists.

    Unlike the Supabase store, the internal-code lookup returns the
    mapping's override too, so tests can check callers ignore it.
    """

    def __init__(self):
        self.customers: dict[int, CustomerResponse] = {}
        self.mappings: list[tuple[int, CatalogMatch]] = []
        self.calls: list[str] = []

    def add_customer(self, customer_id: int, name: str = "Acme Corp") -> CustomerResponse:
        customer = CustomerResponse(id=customer_id, name=name, email=f"buyer{customer_id}@example.com")
        self.customers[customer_id] = customer
        return customer

    def add_mapping(
        self,
        customer_id: int,
        customer_code: str,
        internal_code: str,
        description: Optional[str],
        base_price=None,
        price_override=None
    ) -> CatalogMatch:
        match = CatalogMatch(
            internal_code=internal_code,
            customer_code=customer_code,
            description=description,
            base_price=Decimal(str(base_price)) if base_price is not None else None,
            price_override=Decimal(str(price_override)) if price_override is not None else None,
        )
        self.mappings.append((customer_id, match))
        return match

    def _for_customer(self, customer_id, exclude_code=None) -> list[CatalogMatch]:
        return [
            m for cid, m in self.mappings
            if str(cid) == str(customer_id) and (not exclude_code or m.customer_code != exclude_code)
        ]

    def get_customer(self, customer_id):
        self.calls.append("get_customer")
        try:
            return self.customers.get(int(customer_id))
        except (TypeError, ValueError):
            return None

    def get_part_mapping_by_customer_code(self, customer_id, customer_code):
        self.calls.append("get_part_mapping_by_customer_code")
        for m in self._for_customer(customer_id):
            if m.customer_code == customer_code:
                return m
        return None

    def get_part_by_internal_code_for_customer(self, internal_code, customer_id):
        self.calls.append("get_part_by_internal_code_for_customer")
        for m in self._for_customer(customer_id):
            if m.internal_code == internal_code:
                return m
        return None

    def search_mappings_by_description_tokens(
        self,
        customer_id,
        tokens: Sequence[str],
        exclude_code=None,
        limit: int = 10
    ):
        self.calls.append("search_mappings_by_description_tokens")
        found = [
            m for m in self._for_customer(customer_id, exclude_code)
            if m.description and all(token in m.description for token in tokens)
        ]
        found.sort(key=lambda m: (len(m.description), m.internal_code))
        return found[:limit]

    def search_mappings_by_size_substring(self, customer_id, size, exclude_code=None, limit: int = 5):
        self.calls.append("search_mappings_by_size_substring")
        found = [
            m for m in self._for_customer(customer_id, exclude_code)
            if m.description and size in m.description
        ]
        found.sort(key=lambda m: m.internal_code)
        return found[:limit]


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("parts", [
                {"id": 1, "internal_code": "INT-100", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Any service built inside the test gets the mock from
    get_supabase_client().
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.catalog_store.get_supabase_client", return_value=mock_supabase):
            with patch("services.part_service.get_supabase_client", return_value=mock_supabase):
                with patch("services.store_service.get_supabase_client", return_value=mock_supabase):
                    with patch("services.order_service.get_supabase_client", return_value=mock_supabase):
                        yield mock_supabase


@pytest.fixture
def catalog_store() -> InMemoryCatalogStore:
    """In-memory CatalogStore with customer 1 (Acme Corp) registered."""
    store = InMemoryCatalogStore()
    store.add_customer(1)
    return store


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Lifespan is not run, so no database connection is attempted.
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
