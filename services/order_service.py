"""
Order service: read-only order views for a customer.
"""

from typing import Optional, Union
import structlog

from config import get_supabase_client
from models.order import OrderDetail, OrderPartLine, OrderSummary
from exceptions import DatabaseError, OrderNotFoundError
from utils.money_utils import to_decimal

logger = structlog.get_logger(__name__)


def _status_name(row: dict, relation: str) -> Optional[str]:
    embedded = row.get(relation)
    return embedded.get("status_name") if embedded else None


class OrderService:
    """Orders with their status and part lines."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "orders"

    def list_customer_orders(self, customer_id: Union[int, str]) -> list[OrderSummary]:
        """
        A customer's orders, newest first, with their part line count.
        """
        logger.info("getting_customer_orders", customer_id=customer_id)

        try:
            result = (
                self.db.table(self.table)
                .select("id, order_number, total_amount, order_date, order_statuses(status_name), order_parts(id)")
                .eq("customer_id", customer_id)
                .order("order_date", desc=True)
                .execute()
            )

            orders = [
                OrderSummary(
                    id=row["id"],
                    order_number=row["order_number"],
                    status_name=_status_name(row, "order_statuses"),
                    total_amount=to_decimal(row.get("total_amount")),
                    order_date=row.get("order_date"),
                    total_parts=len(row.get("order_parts") or []),
                )
                for row in result.data
            ]

            logger.info("customer_orders_retrieved", customer_id=customer_id, count=len(orders))

            return orders

        except Exception as e:
            logger.error("get_customer_orders_failed", customer_id=customer_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get_order(self, order_id: int) -> OrderDetail:
        """
        Order header with customer contact and part lines.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        logger.debug("getting_order", order_id=order_id)

        try:
            result = (
                self.db.table(self.table)
                .select(
                    "id, order_number, total_amount, order_date, "
                    "order_statuses(status_name), customers(name, email)"
                )
                .eq("id", order_id)
                .limit(1)
                .execute()
            )

            if not result.data:
                raise OrderNotFoundError(order_id)

            lines_result = (
                self.db.table("order_parts")
                .select("id, quantity, unit_price, notes, parts(internal_code, description), part_statuses(status_name)")
                .eq("order_id", order_id)
                .execute()
            )

        except OrderNotFoundError:
            raise
        except Exception as e:
            logger.error("get_order_failed", order_id=order_id, error=str(e))
            raise DatabaseError("select", str(e))

        row = result.data[0]
        customer = row.get("customers") or {}

        lines = []
        for line in lines_result.data:
            part = line.get("parts") or {}
            lines.append(OrderPartLine(
                id=line["id"],
                internal_code=part.get("internal_code"),
                description=part.get("description"),
                quantity=to_decimal(line["quantity"]),
                unit_price=to_decimal(line.get("unit_price")),
                part_status=_status_name(line, "part_statuses"),
                notes=line.get("notes"),
            ))

        return OrderDetail(
            id=row["id"],
            order_number=row["order_number"],
            order_status=_status_name(row, "order_statuses"),
            total_amount=to_decimal(row.get("total_amount")),
            order_date=row.get("order_date"),
            customer_name=customer.get("name"),
            customer_email=customer.get("email"),
            parts=lines,
        )


# Singleton instance
_order_service: Optional[OrderService] = None


def get_order_service() -> OrderService:
    """Get or create OrderService instance."""
    global _order_service
    if _order_service is None:
        _order_service = OrderService()
    return _order_service
