"""Menu format parsers and the default restaurant catalog."""

from __future__ import annotations

from .base import MenuParser, ParserProfile
from .block import BlockParser
from .digit_boundary import DigitBoundaryParser
from .terminator import TerminatorParser


def build_default_parsers() -> dict[str, MenuParser]:
    """Return the parser map for the known restaurant menus."""

    return {
        "bateau": DigitBoundaryParser(
            ParserProfile(
                restaurant="Bateau",
                denylist=("minutes", "chalkboard"),
                require_lowercase=True,
                require_digit=True,
                min_length=4,
            )
        ),
        "westward": TerminatorParser(
            ParserProfile(
                restaurant="Westward",
                denylist=("consumption", "parties", "employees", "manager", "Please"),
                require_lowercase=True,
            ),
            terminator=r",\swa$|mp$|[0-9]+$",
            break_after=(" mp", "inlet, wa"),
        ),
        "canlis": BlockParser(
            ParserProfile(restaurant="Canlis"),
            line_counts=(2,),
            stop_markers=("menu",),
            drop_blank_lines=True,
        ),
        "lark": BlockParser(
            ParserProfile(restaurant="Lark"),
            line_counts=(3,),
            stop_markers=("menu", "party", "Seattle"),
        ),
    }


__all__ = [
    "BlockParser",
    "DigitBoundaryParser",
    "MenuParser",
    "ParserProfile",
    "TerminatorParser",
    "build_default_parsers",
]
