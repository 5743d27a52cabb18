"""Path-data parser — ``android:pathData`` / SVG ``d`` strings → PathNode list.

Grammar: a command letter followed by a run of numbers. Extra number groups
repeat the command (after M/m they become L/l). Uppercase is absolute,
lowercase is relative. Numbers may be separated by whitespace, commas, or
nothing at all when a sign or second dot starts the next one (``1-2.5.5``).
Arc flags are single digits and may be packed (``a1 1 0 00 1 1``).
"""

from __future__ import annotations

import math
import re

from svg2code.errors import MalformedVectorError
from svg2code.vector.model import (
    ArcTo,
    Close,
    CurveTo,
    HorizontalTo,
    LineTo,
    MoveTo,
    PathNode,
    QuadTo,
    ReflectiveCurveTo,
    ReflectiveQuadTo,
    VerticalTo,
)

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_SEPARATORS = " \t\r\n\f,"

# Operand count per command letter (uppercase)
OPERAND_COUNTS: dict[str, int] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
    "Z": 0,
}

# Operand positions that are arc flags rather than numbers
_ARC_FLAG_INDICES = (3, 4)


def parse_path_data(data: str) -> list[PathNode]:
    """Tokenize path data into PathNodes, expanding implicit command repeats."""
    scanner = _Scanner(data)
    nodes: list[PathNode] = []

    scanner.skip_separators()
    while not scanner.at_end():
        letter = scanner.read_command()
        relative = letter.islower()
        upper = letter.upper()

        if upper == "Z":
            nodes.append(Close(relative=relative))
            scanner.skip_separators()
            continue

        while True:
            operands = scanner.read_operands(upper)
            nodes.append(_build_node(upper, operands, relative))
            # Implicit lineto after a moveto
            if upper == "M":
                upper = "L"
            scanner.skip_separators()
            if scanner.at_end() or scanner.at_command():
                break

    return nodes


def _build_node(upper: str, ops: list[float], relative: bool) -> PathNode:
    if upper == "M":
        return MoveTo(ops[0], ops[1], relative)
    if upper == "L":
        return LineTo(ops[0], ops[1], relative)
    if upper == "H":
        return HorizontalTo(ops[0], relative)
    if upper == "V":
        return VerticalTo(ops[0], relative)
    if upper == "C":
        return CurveTo(*ops, relative=relative)
    if upper == "S":
        return ReflectiveCurveTo(*ops, relative=relative)
    if upper == "Q":
        return QuadTo(*ops, relative=relative)
    if upper == "T":
        return ReflectiveQuadTo(ops[0], ops[1], relative)
    if upper == "A":
        return ArcTo(
            horizontal_radius=ops[0],
            vertical_radius=ops[1],
            theta=ops[2],
            large_arc=bool(ops[3]),
            sweep=bool(ops[4]),
            x=ops[5],
            y=ops[6],
            relative=relative,
        )
    raise MalformedVectorError(f"Unknown path command {upper!r}")


class _Scanner:
    """Cursor over a path-data string."""

    def __init__(self, data: str) -> None:
        self.data = data
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def at_command(self) -> bool:
        return not self.at_end() and self.data[self.pos].isalpha() and self.data[self.pos] not in "eE"

    def skip_separators(self) -> None:
        while self.pos < len(self.data) and self.data[self.pos] in _SEPARATORS:
            self.pos += 1

    def read_command(self) -> str:
        ch = self.data[self.pos]
        if ch.upper() in OPERAND_COUNTS and ch.isalpha():
            self.pos += 1
            return ch
        if ch.isalpha():
            raise MalformedVectorError(f"Unknown path command {ch!r} at position {self.pos}")
        raise MalformedVectorError(f"Expected a path command at position {self.pos}, found {ch!r}")

    def read_operands(self, upper: str) -> list[float]:
        count = OPERAND_COUNTS[upper]
        operands: list[float] = []
        for i in range(count):
            if upper == "A" and i in _ARC_FLAG_INDICES:
                operands.append(self.read_flag())
            else:
                operands.append(self.read_number())
        return operands

    def read_number(self) -> float:
        self.skip_separators()
        match = _NUMBER_RE.match(self.data, self.pos)
        if match is None:
            raise MalformedVectorError(f"Expected a number at position {self.pos} in path data")
        value = float(match.group(0))
        if not math.isfinite(value):
            raise MalformedVectorError(f"Number out of range at position {self.pos} in path data")
        self.pos = match.end()
        return value

    def read_flag(self) -> float:
        self.skip_separators()
        if self.pos < len(self.data) and self.data[self.pos] in "01":
            flag = float(self.data[self.pos] == "1")
            self.pos += 1
            return flag
        raise MalformedVectorError(f"Expected an arc flag (0 or 1) at position {self.pos}")
