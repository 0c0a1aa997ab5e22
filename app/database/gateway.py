"""
Thin query/mutation layer over the remote store.

Every method wraps the supabase call and turns any failure into a GatewayError
carrying the store's human-readable message. Nothing is retried here.
"""

from supabase import Client
from typing import Any, Dict, Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)

PROFILES = "profiles"
CARS = "cars"
VERIFICATION_REQUESTS = "verification_requests"


class GatewayError(Exception):
    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


def _error_message(exc: Exception) -> str:
    # postgrest APIError carries .message; network errors only have str()
    message = getattr(exc, "message", None)
    return str(message) if message else str(exc)


class DataGateway:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fail(self, operation: str, exc: Exception) -> GatewayError:
        message = _error_message(exc)
        logger.error(f"Gateway call failed ({operation}): {message}")
        return GatewayError(operation, message)

    def list_rows(self, table: str, order_by: str = "created_at", desc: bool = True) -> List[Dict[str, Any]]:
        """All rows of a table, ordered by order_by"""
        try:
            result = self.supabase.table(table)\
                .select("*")\
                .order(order_by, desc=desc)\
                .execute()
            return list(result.data or [])
        except Exception as e:
            raise self._fail(f"list {table}", e) from e

    def get_row(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        """Single row by primary key, None when absent"""
        try:
            result = self.supabase.table(table)\
                .select("*")\
                .eq("id", row_id)\
                .maybe_single()\
                .execute()
            # maybe_single() yields no response at all for a missing row on recent clients
            if result is None or not result.data:
                return None
            return result.data
        except Exception as e:
            raise self._fail(f"get {table}", e) from e

    def fetch_by_ids(self, table: str, ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Bulk lookup keyed by id. One call for all distinct ids; no call for an empty set."""
        distinct_ids = sorted({i for i in ids if i})
        if not distinct_ids:
            return {}
        try:
            result = self.supabase.table(table)\
                .select("*")\
                .in_("id", distinct_ids)\
                .execute()
            return {row["id"]: row for row in (result.data or [])}
        except Exception as e:
            raise self._fail(f"lookup {table}", e) from e

    def update_row(self, table: str, row_id: str, values: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            result = self.supabase.table(table)\
                .update(values)\
                .eq("id", row_id)\
                .execute()
            return list(result.data or [])
        except Exception as e:
            raise self._fail(f"update {table}", e) from e

    def delete_where(self, table: str, column: str, value: str) -> List[Dict[str, Any]]:
        """Delete rows where column == value (primary or foreign key)"""
        try:
            result = self.supabase.table(table)\
                .delete()\
                .eq(column, value)\
                .execute()
            return list(result.data or [])
        except Exception as e:
            raise self._fail(f"delete {table}", e) from e
