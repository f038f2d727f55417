"""Button state of the joypad."""

from __future__ import annotations

from dataclasses import astuple, dataclass, fields


@dataclass
class JoypadState:
    """Pressed state of each button."""

    a: bool = False
    b: bool = False
    select: bool = False
    start: bool = False
    right: bool = False
    left: bool = False
    up: bool = False
    down: bool = False

    def as_byte(self) -> int:
        """Active-low byte with one bit per button, in field order."""
        pressed = sum(1 << index for index, down in enumerate(astuple(self)) if down)
        return ~pressed & 0xFF

    def __ior__(self, other: JoypadState) -> JoypadState:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) or getattr(other, f.name))
        return self