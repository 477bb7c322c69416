from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from sqlalchemy import Enum as SAEnum

EnumType = TypeVar("EnumType", bound=Enum)


def db_enum(enum_cls: type[EnumType], name: str, *, native: bool = True) -> SAEnum:
    # Stored by value so the database sees "active", not "ACTIVE".
    options: dict[str, Any] = {}
    if not native:
        options["length"] = 32
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=native,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
        **options,
    )
