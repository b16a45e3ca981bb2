import logging

from supabase import Client, create_client

from app.config import Settings
from app.integrations.types import StoreResult

logger = logging.getLogger(__name__)


class SupabaseStore:
    _PAGE_SIZE = 1000

    def __init__(self, settings: Settings) -> None:
        self._enabled = bool(settings.supabase_url and settings.supabase_service_role_key)
        self._table = settings.supabase_workflow_table
        self._client: Client | None = None

        if self._enabled:
            self._client = create_client(settings.supabase_url, settings.supabase_service_role_key)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self, key: str) -> tuple[StoreResult, str | None]:
        if not self.enabled or not self._client:
            return StoreResult("supabase", "skipped", "not configured"), None
        try:
            data = (
                self._client.table(self._table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
                .data
                or []
            )
            if not data:
                return StoreResult("supabase", "ok", "key not found"), None
            value = data[0].get("value")
            return StoreResult("supabase", "ok", "value loaded"), str(value) if value is not None else None
        except Exception as exc:
            logger.exception("failed to load key=%s from supabase", key)
            return StoreResult("supabase", "error", str(exc)), None

    def put(self, key: str, value: str) -> StoreResult:
        if not self.enabled or not self._client:
            return StoreResult("supabase", "skipped", "not configured")
        try:
            self._client.table(self._table).upsert(
                [{"key": key, "value": value}],
                on_conflict="key",
            ).execute()
            return StoreResult("supabase", "ok", "value saved")
        except Exception as exc:
            logger.exception("failed to save key=%s to supabase", key)
            return StoreResult("supabase", "error", str(exc))

    def list(self, prefix: str) -> tuple[StoreResult, list[str]]:
        if not self.enabled or not self._client:
            return StoreResult("supabase", "skipped", "not configured"), []

        try:
            offset = 0
            values: list[str] = []

            while True:
                page = (
                    self._client.table(self._table)
                    .select("key,value")
                    .like("key", f"{prefix}%")
                    .order("key")
                    .range(offset, offset + self._PAGE_SIZE - 1)
                    .execute()
                    .data
                    or []
                )
                values.extend(str(row["value"]) for row in page if row.get("value") is not None)

                if len(page) < self._PAGE_SIZE:
                    break

                offset += self._PAGE_SIZE

            return StoreResult("supabase", "ok", f"fetched {len(values)} values"), values
        except Exception as exc:
            logger.exception("failed to list prefix=%s from supabase", prefix)
            return StoreResult("supabase", "error", str(exc)), []
