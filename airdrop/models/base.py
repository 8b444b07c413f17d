"""Base models and mixins for database models"""

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase, declared_attr
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Create declarative base
class Base(DeclarativeBase):
    pass


class TimestampedModel:
    """Mixin for adding a created_at timestamp"""

    @declared_attr
    def created_at(cls):
        return Column(
            DateTime(timezone=True),
            nullable=False,
            default=utcnow,
            index=True
        )


class BaseModel(Base):
    """Abstract base model with common functionality"""

    __abstract__ = True


    def __repr__(self):
        """String representation"""
        class_name = self.__class__.__name__
        attributes = []

        for column in self.__table__.columns:
            if column.primary_key:
                value = getattr(self, column.name)
                attributes.append(f"{column.name}={value!r}")

        return f"<{class_name}({', '.join(attributes)})>"


__all__ = [
    'Base',
    'BaseModel',
    'TimestampedModel',
    'utcnow',
]
