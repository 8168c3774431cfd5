"""
Unit tests for StoreService.

Run: pytest tests/unit/test_store_service.py -v
"""

import pytest

from services.store_service import StoreService
from models.store import StoreCreate
from exceptions import DatabaseError, InvalidRequestError


class TestStoreServiceCreate:
    """Tests for StoreService.create_store()"""

    def test_create_store_maps_form_to_columns(self, mock_db, mock_supabase):
        """Should store company name, first address line and lookup hint."""
        # Arrange
        service = StoreService()
        data = StoreCreate.model_validate({
            "customerId": 1,
            "storeNumber": 12,
            "firstName": "Ada",
            "companyName": "Acme Downtown",
            "addressLine1": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "lookupHint": "62701",
        })

        # Act
        result = service.create_store(data)

        # Assert
        inserted = mock_supabase.table("stores").inserted[0]
        assert inserted["store_name"] == "Acme Downtown"
        assert inserted["address"] == "1 Main St"
        assert inserted["zip_code"] == "62701"
        assert "first_name" not in inserted
        assert result.message == "Store created successfully"
        assert result.store_id == inserted["id"]
        assert result.model_dump(by_alias=True)["customerId"] == 1

    def test_create_store_defaults_missing_fields_to_empty(self, mock_db, mock_supabase):
        service = StoreService()

        service.create_store(StoreCreate(customer_id=1, store_number="S-1"))

        inserted = mock_supabase.table("stores").inserted[0]
        assert inserted["store_name"] == ""
        assert inserted["city"] == ""

    @pytest.mark.parametrize("payload", [
        {"storeNumber": 12},
        {"customerId": 1},
        {"customerId": 1, "storeNumber": ""},
    ])
    def test_create_store_requires_customer_and_number(self, mock_db, mock_supabase, payload):
        service = StoreService()

        with pytest.raises(InvalidRequestError) as exc_info:
            service.create_store(StoreCreate.model_validate(payload))

        assert exc_info.value.status_code == 400
        assert mock_supabase.executed == []

    def test_create_store_database_error(self, mock_db, mock_supabase):
        mock_supabase.set_table_error("stores", Exception("insert failed"))
        service = StoreService()

        with pytest.raises(DatabaseError):
            service.create_store(StoreCreate(customer_id=1, store_number=3))


class TestStoreServiceList:
    """Tests for StoreService.list_stores()"""

    def test_list_stores_for_customer(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("stores", [
            {"id": 1, "customer_id": 1, "store_name": "North", "city": "Oslo"},
            {"id": 2, "customer_id": 2, "store_name": "South", "city": "Rome"},
            {"id": 3, "customer_id": 1, "store_name": "East", "city": "Kyiv"},
        ])
        service = StoreService()

        stores = service.list_stores(1)

        assert [s.store_name for s in stores] == ["North", "East"]
