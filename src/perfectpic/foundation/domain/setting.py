"""Setting entity and admin update item.

A setting is a persisted key/value row with display metadata. Values are
opaque strings; typed interpretation happens in the settings runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

MASKED_SETTING_VALUE = "**********"
"""Mask sentinel returned in place of sensitive values on admin list.

The same literal is rejected as input for sensitive keys on admin update,
so a read-edit-write round trip never overwrites a stored secret.
"""


@dataclass(frozen=True, slots=True)
class Setting:
    """A persisted setting row.

    Attributes:
        key: Unique, non-empty identifier.
        value: Opaque string value.
        category: Grouping label used only for admin ordering.
        description: Human-readable help text.
        sensitive: When True, the value is masked on admin list and
            protected from being overwritten by the mask sentinel.
        created_at: Row creation time, when the store tracks it.
        updated_at: Last modification time, when the store tracks it.
    """

    key: str
    value: str = ""
    category: str = ""
    description: str = ""
    sensitive: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class SettingUpdate:
    """A single ``{key, value}`` item of an admin batch update."""

    key: str
    value: str
