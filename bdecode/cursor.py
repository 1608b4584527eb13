from dataclasses import dataclass, replace
from typing import Self


@dataclass(frozen=True, slots=True)
class DecodeInput:
    data: str
    position: int = 0

    def __str__(self) -> str:
        return f"{{position: {self.position}, data: {self.data}}}"

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.data)

    @property
    def remaining(self) -> str:
        return self.data[self.position :]

    def clone(self) -> Self:
        return replace(self)

    def peek(self) -> str | None:
        if self.at_end:
            return None
        return self.data[self.position]

    def next(self) -> tuple[str | None, Self]:
        ch = self.peek()
        if ch is None:
            return (None, self)
        return (ch, replace(self, position=self.position + 1))

    def take(self, count: int) -> tuple[str | None, Self]:
        end = self.position + count
        if count < 0 or end > len(self.data):
            return (None, self)
        return (self.data[self.position : end], replace(self, position=end))
