from collections import deque
from dataclasses import dataclass

from errors import EmptyHistoryError

ROLES = ("user", "assistant", "system")


@dataclass(frozen=True)
class Message:
    role: str
    content: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown message role: {self.role!r}")

    def to_dict(self):
        return {"role": self.role, "content": self.content}


class HistoryStore:
    """
    Holds the messages of one conversation in the order they happened.
    New messages go on the tail; the budget manager evicts from the head.
    Consecutive messages with the same role are allowed (an ingested document
    followed by the user's prompt, for example).
    """
    def __init__(self, messages=()):
        self._messages = deque(messages)

    def __len__(self):
        return len(self._messages)

    def __iter__(self):
        return iter(list(self._messages))

    def append(self, message: Message):
        """Adds a message to the tail."""
        self._messages.append(message)

    def peek_oldest(self):
        """Returns the oldest message without removing it, or None when empty."""
        if not self._messages:
            return None
        return self._messages[0]

    def evict_oldest(self) -> Message:
        """Removes and returns the oldest message."""
        if not self._messages:
            raise EmptyHistoryError("Cannot evict from an empty history")
        return self._messages.popleft()

    def total_estimated_cost(self, estimator) -> int:
        """Sums the estimated cost of every message currently held."""
        return sum(estimator.estimate(m.content) for m in self._messages)

    def as_payload(self):
        """Returns the history as the list of {role, content} dicts sent to the model."""
        return [m.to_dict() for m in self._messages]

    def clear(self):
        self._messages.clear()
