from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

BasicType: TypeAlias = str | int | float | bool | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType']

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

class SettingsType(dict[str, SettingType]):
    """
    Handler settings, e.g. the frame rate used for frame-based timecodes.

    Values may come from code or the command line, so numeric settings accept strings too.
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_float(self, key: str, default: float|None = None) -> float|None:
        """Get a float setting, e.g. a frame rate such as '29.97'"""
        value = self.get(key, default)
        if value is None:
            return None

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        elif isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to a number")

    def update(self, other=(), /, **kwds) -> None:
        """Update settings, leaving out options that were not given"""
        if hasattr(other, 'items'):
            other = {k: v for k, v in dict(other).items() if v is not None}
        kwds = {k: v for k, v in kwds.items() if v is not None}
        super().update(other, **kwds)
