from dataclasses import dataclass


@dataclass
class StoreResult:
    target: str
    status: str
    message: str

    @property
    def ok(self) -> bool:
        return self.status == "ok"
