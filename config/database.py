"""
Database connection management.

Provides the Supabase client singleton used by the catalog store and
the data-access services.
"""

from supabase import create_client, Client
from functools import lru_cache
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


class DatabaseConnectionError(Exception):
    """Failed to connect to database."""
    pass


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get cached Supabase client instance.

    Call get_supabase_client.cache_clear() to reconnect.

    Raises:
        DatabaseConnectionError: If the client cannot be created
    """
    try:
        logger.info(
            "connecting_to_supabase",
            url=settings.supabase_url[:30] + "..."  # Log partial URL only
        )

        client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )

        logger.info("supabase_connected", status="success")

        return client

    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise DatabaseConnectionError(f"Failed to connect to Supabase: {e}") from e


# Convenience alias
db = get_supabase_client


def check_connection() -> dict:
    """
    Check database connection health.

    Returns:
        dict: Connection status with catalog counts
    """
    try:
        client = get_supabase_client()

        parts = client.table("parts").select("id", count="exact").execute()
        customers = client.table("customers").select("id", count="exact").execute()

        return {
            "status": "healthy",
            "parts_count": parts.count,
            "customers_count": customers.count
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }
