"""Interpreter configuration for historical CHIP-8 quirks."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Quirks:
    """Behaviour switches where CHIP-8 interpreters historically disagree.

    Attributes:
        shift_uses_vy: 8XY6/8XYE shift VY into VX (COSMAC VIP) instead of
            shifting VX in place.
        increment_index_on_store: FX55/FX65 leave I pointing past the last
            register transferred (I += X + 1) instead of leaving it unchanged.
    """
    shift_uses_vy: bool = False
    increment_index_on_store: bool = False

    @classmethod
    def modern(cls) -> "Quirks":
        """CHIP-48 / SUPER-CHIP era behaviour."""
        return cls(shift_uses_vy=False, increment_index_on_store=False)

    @classmethod
    def legacy(cls) -> "Quirks":
        """Original COSMAC VIP behaviour."""
        return cls(shift_uses_vy=True, increment_index_on_store=True)
