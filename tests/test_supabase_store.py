from __future__ import annotations

from app.config import Settings
from app.integrations.supabase_store import SupabaseStore


class _Result:
    def __init__(self, rows):
        self.data = rows


class _FakeQuery:
    def __init__(self, table: "_FakeTable") -> None:
        self._table = table
        self._start = 0
        self._end = 0
        self._like: str | None = None
        self._eq: tuple[str, str] | None = None

    def eq(self, column: str, value: str) -> "_FakeQuery":
        self._eq = (column, value)
        return self

    def like(self, column: str, pattern: str) -> "_FakeQuery":
        self._like = pattern
        return self

    def limit(self, count: int) -> "_FakeQuery":
        self._start, self._end = 0, count - 1
        return self

    def order(self, column: str) -> "_FakeQuery":
        return self

    def range(self, start: int, end: int) -> "_FakeQuery":
        self._start = start
        self._end = end
        return self

    def execute(self) -> _Result:
        rows = sorted(self._table.rows.items())
        if self._eq:
            rows = [(k, v) for k, v in rows if k == self._eq[1]]
        if self._like:
            prefix = self._like.rstrip("%")
            rows = [(k, v) for k, v in rows if k.startswith(prefix)]
        page = rows[self._start : self._end + 1]
        self._table.pages_served += 1
        return _Result([{"key": k, "value": v} for k, v in page])


class _FakeUpsert:
    def __init__(self, table: "_FakeTable", rows: list[dict[str, str]], on_conflict: str) -> None:
        self._table = table
        self._rows = rows
        self._table.conflicts.append(on_conflict)

    def execute(self) -> _Result:
        for row in self._rows:
            self._table.rows[row["key"]] = row["value"]
        return _Result(self._rows)


class _FakeTable:
    def __init__(self) -> None:
        self.rows: dict[str, str] = {}
        self.conflicts: list[str] = []
        self.pages_served = 0

    def select(self, columns: str) -> _FakeQuery:
        return _FakeQuery(self)

    def upsert(self, rows: list[dict[str, str]], on_conflict: str) -> _FakeUpsert:
        return _FakeUpsert(self, rows, on_conflict)


class _FakeClient:
    def __init__(self) -> None:
        self._table_impl = _FakeTable()

    def table(self, _: str) -> _FakeTable:
        return self._table_impl


class _ExplodingClient:
    def table(self, _: str):
        raise RuntimeError("network down")


def _store(client) -> SupabaseStore:
    store = SupabaseStore(Settings())
    store._enabled = True
    store._client = client  # type: ignore[assignment]
    return store


def test_put_then_get_upserts_on_key() -> None:
    client = _FakeClient()
    store = _store(client)

    assert store.put("workflow:1", '{"id": "1"}').status == "ok"
    assert store.put("workflow:1", '{"id": "1", "name": "x"}').status == "ok"
    result, value = store.get("workflow:1")

    assert result.status == "ok"
    assert value == '{"id": "1", "name": "x"}'
    assert client._table_impl.conflicts == ["key", "key"]


def test_get_missing_key_returns_none() -> None:
    result, value = _store(_FakeClient()).get("workflow:nope")

    assert result.status == "ok"
    assert value is None


def test_list_paginates_beyond_page_size_and_filters_prefix() -> None:
    client = _FakeClient()
    for i in range(1200):
        client._table_impl.rows[f"workflow:{i:05d}"] = str(i)
    client._table_impl.rows["execution:wf:1"] = "exec"
    store = _store(client)

    result, values = store.list("workflow:")

    assert result.status == "ok"
    assert len(values) == 1200
    assert values[0] == "0"
    assert values[-1] == "1199"
    assert client._table_impl.pages_served == 2


def test_not_configured_store_is_skipped() -> None:
    store = SupabaseStore(Settings())

    assert not store.enabled
    assert store.put("k", "v").status == "skipped"
    assert store.list("k")[0].status == "skipped"


def test_client_errors_are_returned_not_raised() -> None:
    store = _store(_ExplodingClient())

    assert store.put("k", "v").status == "error"
    result, values = store.list("k")
    assert result.status == "error"
    assert result.message == "network down"
    assert values == []
