"""Tests for the svg2code command line."""

from __future__ import annotations

from svg2code.cli import main
from tests.conftest import ADD_XML, BROKEN_XML, COLOR_REF_XML, COLORS_RESOURCES_XML


def test_prints_generated_source(tmp_path, capsys):
    add = tmp_path / "add.xml"
    add.write_text(ADD_XML)
    assert main([str(add), "--no-preview"]) == 0
    out, err = capsys.readouterr()
    assert "// Icons.Add (Add.kt)" in out
    assert "public val Icons.Add: ImageVector" in out
    assert "@Preview" not in out
    assert "Done: 1 generated, 0 failed" in err


def test_directory_writes_files(icon_tree, tmp_path, capsys):
    out_dir = tmp_path / "out"
    assert main([str(icon_tree), "-p", "org.acme", "-o", str(out_dir)]) == 0
    assert (out_dir / "org" / "acme" / "icons" / "A.kt").is_file()
    assert (out_dir / "org" / "acme" / "Icons.kt").is_file()
    out, _ = capsys.readouterr()
    assert str(out_dir / "org" / "acme" / "icons" / "sub" / "B.kt") in out


def test_swiftui_backend(tmp_path, capsys):
    add = tmp_path / "add.xml"
    add.write_text(ADD_XML)
    assert main([str(add), "-b", "swiftui"]) == 0
    assert "struct Add: Shape" in capsys.readouterr().out


def test_failures_reported(tmp_path, capsys):
    broken = tmp_path / "broken.xml"
    broken.write_text(BROKEN_XML)
    assert main([str(broken)]) == 1
    _, err = capsys.readouterr()
    assert "FAILED" in err
    assert "MalformedVectorError" in err


def test_color_resources_file(tmp_path, capsys):
    icon = tmp_path / "brand.xml"
    icon.write_text(COLOR_REF_XML)
    colors = tmp_path / "colors.xml"
    colors.write_text(COLORS_RESOURCES_XML)
    assert main([str(icon), "--colors", str(colors)]) == 0
    assert "Color(0xFF6200EE)" in capsys.readouterr().out


def test_missing_colors_file_is_fatal(tmp_path, capsys):
    add = tmp_path / "add.xml"
    add.write_text(ADD_XML)
    assert main([str(add), "--colors", str(tmp_path / "missing.xml")]) == 2
    assert "svg2code:" in capsys.readouterr().err


def test_binary_colors_file_is_fatal(tmp_path, capsys):
    add = tmp_path / "add.xml"
    add.write_text(ADD_XML)
    colors = tmp_path / "colors.xml"
    colors.write_bytes(b"\xff\xfe\x00binary")
    assert main([str(add), "--colors", str(colors)]) == 2
    assert "svg2code:" in capsys.readouterr().err
