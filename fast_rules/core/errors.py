from typing import Dict, Optional


class ErrorBag:
    """Rendered failure messages per attribute, in the order they were recorded."""

    def __init__(self) -> None:
        self.errors: Dict[str, list[str]] = {}

    def add(self, attribute: str, message: str) -> None:
        messages = self.errors.setdefault(attribute, [])
        if message not in messages:
            messages.append(message)

    def get(self, attribute: str) -> list[str]:
        return list(self.errors.get(attribute, []))

    def first(self, attribute: str) -> Optional[str]:
        messages = self.errors.get(attribute)
        return messages[0] if messages else None

    def has(self, attribute: str) -> bool:
        return attribute in self.errors

    def all(self) -> Dict[str, list[str]]:
        return {attribute: list(messages) for attribute, messages in self.errors.items()}

    def count(self) -> int:
        return sum(len(messages) for messages in self.errors.values())

    def clear(self) -> None:
        self.errors.clear()

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ErrorBag({self.errors!r})"
