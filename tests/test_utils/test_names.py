"""Tests for identifier sanitization and per-group name allocation."""

import pytest

from svg2code.utils.names import SWIFT_KEYWORDS, NameAllocator, to_identifier


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ic_arrow-back.svg", "IcArrowBack"),
        ("add.xml", "Add"),
        ("Add.SVG", "Add"),
        ("home outline", "HomeOutline"),
        ("camelCase_name", "CamelCaseName"),
        ("24px", "_24px"),
        ("###", "Unnamed"),
        ("", "Unnamed"),
        ("  padded  ", "Padded"),
    ],
)
def test_to_identifier(raw, expected):
    assert to_identifier(raw) == expected


def test_to_identifier_is_deterministic():
    names = ["ic_add", "ic add", "1st", "ümlaut", "a--b__c"]
    assert [to_identifier(n) for n in names] == [to_identifier(n) for n in names]


def test_reserved_words_are_prefixed():
    assert to_identifier("Self", reserved=SWIFT_KEYWORDS) == "_Self"
    assert to_identifier("Self") == "Self"


@pytest.mark.parametrize(
    "raw, expected",
    [("path.svg", "_Path"), ("shape.xml", "_Shape"), ("color.svg", "_Color"), ("view", "_View"), ("CGRect", "_CGRect")],
)
def test_swiftui_type_names_are_prefixed(raw, expected):
    assert to_identifier(raw, reserved=SWIFT_KEYWORDS) == expected
    assert to_identifier(raw) == expected[1:]


def test_result_is_always_an_identifier():
    for raw in ["a.b.c", "x y z", "9", "---", "tab\tname", "dot.svg.xml"]:
        assert to_identifier(raw).isidentifier()


def test_allocator_suffixes_duplicates():
    names = NameAllocator()
    assert [names.allocate(n) for n in ["Add", "Add", "Remove", "Add"]] == ["Add", "Add2", "Remove", "Add3"]
    assert "Add2" in names


def test_allocator_skips_taken_suffix():
    names = NameAllocator()
    assert names.allocate("Add2") == "Add2"
    assert names.allocate("Add") == "Add"
    assert names.allocate("Add") == "Add3"
