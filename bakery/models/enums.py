from enum import IntEnum


class Occasion(IntEnum):
    UNKNOWN = 0
    BIRTHDAY = 100
    WEDDING = 200

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Return whether ``value`` is one of the recognized occasion codes."""

        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value in cls._value2member_map_
