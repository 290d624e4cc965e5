"""ActionLog - the player-facing record of what happened and when."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass


@dataclass
class Event:
    tick: int
    kind: str
    message: str
    repeats: int = 1

    @property
    def text(self) -> str:
        """The message, with a repeat count once it has happened again."""
        if self.repeats > 1:
            return f"{self.message} (x{self.repeats})"
        return self.message

    def line(self) -> str:
        return f"[{self.tick}] {self.text}"


class ActionLog:
    """Bounded log of player events.

    An event identical to the newest entry (same kind and message) is
    folded into it: the entry's tick moves forward and its repeat count
    grows, so a task chopped fifty times in a row takes one line.
    """

    def __init__(self, max_entries: int = 0) -> None:
        self._max = max_entries
        maxlen = max_entries if max_entries > 0 else None
        self._events: deque[Event] = deque(maxlen=maxlen)

    def emit(self, tick: int, kind: str, message: str) -> Event:
        if self._events:
            newest = self._events[-1]
            if newest.kind == kind and newest.message == message:
                newest.tick = tick
                newest.repeats += 1
                return newest
        event = Event(tick=tick, kind=kind, message=message)
        self._events.append(event)
        return event

    def query(self, kind: str | None = None, after: int | None = None,
              before: int | None = None) -> list[Event]:
        result: list[Event] = list(self._events)
        if kind is not None:
            result = [e for e in result if e.kind == kind]
        if after is not None:
            result = [e for e in result if e.tick > after]
        if before is not None:
            result = [e for e in result if e.tick < before]
        return result

    def last(self, kind: str | None = None) -> Event | None:
        for e in reversed(self._events):
            if kind is None or e.kind == kind:
                return e
        return None

    def messages(self) -> list[str]:
        return [e.message for e in self._events]

    def lines(self, count: int | None = None) -> list[str]:
        """Display lines ``"[tick] message (xN)"``, newest last; *count* keeps
        only the most recent ones."""
        events = list(self._events)
        if count is not None:
            events = events[-count:] if count > 0 else []
        return [e.line() for e in events]

    def snapshot(self) -> list[dict]:
        return [
            {"tick": e.tick, "kind": e.kind, "message": e.message, "repeats": e.repeats}
            for e in self._events
        ]

    def restore(self, data: list[dict]) -> None:
        self._events.clear()
        for d in data:
            self._events.append(Event(
                tick=d["tick"], kind=d["kind"], message=d["message"],
                repeats=int(d.get("repeats", 1)),
            ))

    def __len__(self) -> int:
        return len(self._events)
