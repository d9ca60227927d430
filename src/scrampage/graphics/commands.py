"""Draw commands produced by the frame clock and executed by the renderer."""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from scrampage.graphics.color import Color


@dataclass(frozen=True)
class ClearCommand:
    """Fade the whole canvas toward black.

    An alpha of 1.0 is a full clear.
    """

    alpha: float = 1.0


@dataclass(frozen=True)
class TextCommand:
    """Draw text with its top-left corner at ``position``."""

    text: str
    position: Tuple[float, float]
    fill_color: Color


DrawCommand = Union[ClearCommand, TextCommand]


@dataclass
class Frame:
    """Ordered draw commands for one displayed frame."""

    index: int
    commands: List[DrawCommand] = field(default_factory=list)

    @property
    def text_commands(self) -> List[TextCommand]:
        return [c for c in self.commands if isinstance(c, TextCommand)]
