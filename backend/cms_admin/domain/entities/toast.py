"""Domain entity for user-facing transient notifications."""

from dataclasses import asdict, dataclass
from enum import Enum


class ToastLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    """A transient success/failure message shown on the next rendered page."""

    level: ToastLevel
    title: str
    description: str

    @classmethod
    def success(cls, description: str) -> "Toast":
        return cls(level=ToastLevel.SUCCESS, title="Success", description=description)

    @classmethod
    def error(cls, description: str) -> "Toast":
        return cls(level=ToastLevel.ERROR, title="Error", description=description)

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["level"] = self.level.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "Toast":
        return cls(
            level=ToastLevel(data.get("level", ToastLevel.SUCCESS.value)),
            title=data.get("title", ""),
            description=data.get("description", ""),
        )
