# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class FakeKeyValueStore:
    """
    In-memory KeyValueStore used by unit tests.

    - Keeps values in a dict
    - Records every set_item call for assertions (like a localStorage mock)
    """

    data: dict[str, str] = field(default_factory=dict)
    set_calls: list[tuple[str, str]] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.set_calls.append((key, value))
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)

    def clear(self) -> None:
        self.data.clear()


class FailingKeyValueStore(FakeKeyValueStore):
    """Store whose writes fail once `fail_writes` is set."""

    __slots__ = ("fail_writes", "fail_reads")

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = False
        self.fail_reads = False

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("storage unavailable")
        return super().get_item(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        super().set_item(key, value)
