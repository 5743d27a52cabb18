"""Identifier helpers — file/icon names → valid generated-source identifiers.

to_identifier("ic_arrow-back.svg") -> "IcArrowBack"
to_identifier("24px")              -> "_24px"
to_identifier("###")               -> "Unnamed"
"""

from __future__ import annotations

import re

_VECTOR_EXTENSION_RE = re.compile(r"\.(svg|xml)$", re.IGNORECASE)
_WORD_SPLIT_RE = re.compile(r"[\W_]+")

FALLBACK_IDENTIFIER = "Unnamed"

KOTLIN_KEYWORDS = frozenset({
    "as", "break", "class", "continue", "do", "else", "false", "for", "fun", "if",
    "in", "interface", "is", "null", "object", "package", "return", "super", "this",
    "throw", "true", "try", "typealias", "typeof", "val", "var", "when", "while",
})

# SwiftUI and CoreGraphics types referenced by generated Swift source
SWIFTUI_TYPE_NAMES = frozenset({
    "CGPoint", "CGRect", "Color", "Path", "PreviewProvider", "Shape", "SwiftUI", "View",
})

SWIFT_KEYWORDS = SWIFTUI_TYPE_NAMES | frozenset({
    "Any", "Protocol", "Self", "Type", "associatedtype", "class", "deinit", "enum",
    "extension", "fileprivate", "func", "import", "init", "inout", "internal", "let",
    "open", "operator", "private", "protocol", "public", "rethrows", "static",
    "struct", "subscript", "typealias", "var", "break", "case", "continue", "default",
    "defer", "do", "else", "fallthrough", "for", "guard", "if", "in", "repeat",
    "return", "switch", "where", "while", "as", "catch", "false", "is", "nil",
    "super", "self", "throw", "throws", "true", "try",
})


def to_identifier(raw_name: str, reserved: frozenset[str] = KOTLIN_KEYWORDS) -> str:
    """Convert any name to an UpperCamelCase identifier. Total and deterministic."""
    stem = _VECTOR_EXTENSION_RE.sub("", raw_name.strip())
    words = [w for w in _WORD_SPLIT_RE.split(stem) if w]
    if not words:
        return FALLBACK_IDENTIFIER

    name = "".join(w[0].upper() + w[1:] for w in words)
    if name[0].isdigit() or name in reserved or not name.isidentifier():
        name = "_" + name
    return name


class NameAllocator:
    """Hands out unique names within one group, in first-seen order.

    The first "Add" stays "Add"; later ones become "Add2", "Add3", …
    """

    def __init__(self) -> None:
        self._taken: set[str] = set()

    def allocate(self, name: str) -> str:
        candidate = name
        suffix = 2
        while candidate in self._taken:
            candidate = f"{name}{suffix}"
            suffix += 1
        self._taken.add(candidate)
        return candidate

    def __contains__(self, name: str) -> bool:
        return name in self._taken
