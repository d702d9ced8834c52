from .base import Base, CreatedAtMixin, TimestampMixin


__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
]
