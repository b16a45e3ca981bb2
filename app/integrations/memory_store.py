from app.integrations.types import StoreResult


class InMemoryStore:
    """Process-local key/value store; contents are lost on restart."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    @property
    def enabled(self) -> bool:
        return True

    def get(self, key: str) -> tuple[StoreResult, str | None]:
        if key not in self._values:
            return StoreResult("memory", "ok", "key not found"), None
        return StoreResult("memory", "ok", "value loaded"), self._values[key]

    def put(self, key: str, value: str) -> StoreResult:
        self._values[key] = value
        return StoreResult("memory", "ok", "value saved")

    def list(self, prefix: str) -> tuple[StoreResult, list[str]]:
        values = [self._values[key] for key in sorted(self._values) if key.startswith(prefix)]
        return StoreResult("memory", "ok", f"fetched {len(values)} values"), values
