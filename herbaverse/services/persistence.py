import logging

from herbaverse.config import RECOMMENDATIONS_TABLE
from herbaverse.exceptions import PersistenceFailure
from herbaverse.models import QueryRecord

logger = logging.getLogger(__name__)


class RecommendationStore:
    """Append-only audit log of recommendation queries in Supabase"""

    def __init__(self, supabase_client, table: str = RECOMMENDATIONS_TABLE):
        self.supabase = supabase_client
        self.table = table

    def insert(self, record: QueryRecord):
        """Insert one row. Raises ``PersistenceFailure`` on any datastore error."""
        if not self.supabase:
            raise PersistenceFailure("Supabase not available")
        try:
            self.supabase.table(self.table).insert(record.to_row()).execute()
        except Exception as e:
            raise PersistenceFailure(f"{self.table} insert failed: {e}") from e

    def save(self, record: QueryRecord) -> bool:
        """Best-effort insert; failures are logged and never raised"""
        try:
            self.insert(record)
            logger.info(f"✓ Stored recommendation for user {record.user_id[:8]}...")
            return True
        except PersistenceFailure as e:
            logger.error(f"Failed to store recommendation: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error storing recommendation: {e}", exc_info=True)
            return False
