"""
Team-scoped CRUD over a single Supabase table.

Every read and mutation filters on the (id, team_id) pair so a caller can
only ever touch rows belonging to the team it resolved to.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from supabase import Client

from app.core.exceptions import AppError, InternalError, NotFoundError

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

PROTECTED_FIELDS = ("id", "team_id", "user_id", "created_at", "updated_at")


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TeamScopedRepository(Generic[ResponseT]):
    table: str = ""
    entity_name: str = "Resource"
    response_model: Type[ResponseT]

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _wrap(self, action: str, exc: Exception) -> InternalError:
        logger.exception("Failed to %s %s: %s", action, self.table, exc)
        return InternalError(f"Failed to {action} {self.entity_name.lower()}")

    def get(self, item_id: str, team_id: str) -> Optional[ResponseT]:
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("id", item_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return self.response_model(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("load", e) from e

    def get_or_404(self, item_id: str, team_id: str) -> ResponseT:
        item = self.get(item_id, team_id)
        if item is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return item

    def list_for_team(self, team_id: str) -> List[ResponseT]:
        """All rows for the team, newest first."""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("team_id", team_id)\
                .order("created_at", desc=True)\
                .execute()
            return [self.response_model(**row) for row in result.data or []]
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("list", e) from e

    def list_by_ids(self, ids: List[str], team_id: str) -> List[ResponseT]:
        if not ids:
            return []
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .in_("id", list(dict.fromkeys(ids)))\
                .eq("team_id", team_id)\
                .execute()
            return [self.response_model(**row) for row in result.data or []]
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("list", e) from e

    def create(self, data: Dict[str, Any]) -> ResponseT:
        if not data.get("team_id"):
            raise ValueError(f"{self.entity_name} create requires team_id")
        try:
            result = self.supabase.table(self.table).insert(data).execute()
            if not result.data:
                raise InternalError(f"Failed to create {self.entity_name.lower()}")
            return self.response_model(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("create", e) from e

    def update(self, item_id: str, team_id: str, partial: Dict[str, Any]) -> Optional[ResponseT]:
        """Apply a partial update. Ownership and identity columns are dropped."""
        update_data = {k: v for k, v in partial.items() if k not in PROTECTED_FIELDS}
        if not update_data:
            return self.get(item_id, team_id)
        update_data["updated_at"] = utcnow_iso()
        try:
            result = self.supabase.table(self.table)\
                .update(update_data)\
                .eq("id", item_id)\
                .eq("team_id", team_id)\
                .execute()
            if not result.data:
                return None
            return self.response_model(**result.data[0])
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("update", e) from e

    def delete(self, item_id: str, team_id: str) -> bool:
        try:
            result = self.supabase.table(self.table)\
                .delete()\
                .eq("id", item_id)\
                .eq("team_id", team_id)\
                .execute()
            return len(result.data or []) > 0
        except AppError:
            raise
        except Exception as e:
            raise self._wrap("delete", e) from e
