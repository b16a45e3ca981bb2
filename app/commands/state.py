import time
from collections import deque
from datetime import datetime, timezone
from typing import Any

from app.models.commands import BotHistoryEntry


class BotState:
    def __init__(self, max_history: int = 1000) -> None:
        self.is_active = True
        self.started_at = time.monotonic()
        self.last_activity = datetime.now(timezone.utc)
        self.total_messages = 0
        self.active_connections: list[str] = []
        self.execution_queue: list[str] = []
        self._history: deque[BotHistoryEntry] = deque(maxlen=max(1, max_history))

    @property
    def uptime_seconds(self) -> float:
        return time.monotonic() - self.started_at

    def record_message(self, message: str, user_id: str, message_type: str) -> BotHistoryEntry:
        now = datetime.now(timezone.utc)
        entry = BotHistoryEntry(message=message, user_id=user_id, timestamp=now, type=message_type)
        self._history.append(entry)
        self.total_messages += 1
        self.last_activity = now
        return entry

    def history(self, limit: int = 50) -> list[BotHistoryEntry]:
        if limit <= 0:
            return []
        return list(self._history)[-limit:]

    def snapshot(self) -> dict[str, Any]:
        return {
            "status": "online" if self.is_active else "offline",
            "lastActivity": self.last_activity.isoformat(),
            "messageCount": self.total_messages,
            "activeConnections": len(self.active_connections),
            "queueLength": len(self.execution_queue),
            "uptime": round(self.uptime_seconds, 3),
        }
