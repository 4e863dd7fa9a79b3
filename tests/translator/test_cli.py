"""
Tests for the vba2js command line interface.

Exercises file handling, configuration loading and error reporting.
"""

import pytest

from vba2js.translator.cli import convert_file, main


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "Module1.bas"
    path.write_text("Sub Hello()\n    MsgBox \"hi\"\nEnd Sub\n", encoding="utf-8")
    return path


EXPECTED = 'function Hello() {\n  MsgBox("hi");\n}\n'


def test_prints_to_stdout(source_file, capsys):
    """Test that without -o the JavaScript goes to stdout"""
    assert main([str(source_file)]) == 0
    assert capsys.readouterr().out == EXPECTED


def test_writes_output_file(source_file, tmp_path, capsys):
    """Test writing to a file with -o"""
    output = tmp_path / "out" / "Module1.js"

    assert main([str(source_file), "-o", str(output)]) == 0

    assert output.read_text(encoding="utf-8") == EXPECTED
    assert f"Wrote {output}" in capsys.readouterr().out


def test_quiet_suppresses_wrote_message(source_file, tmp_path, capsys):
    output = tmp_path / "Module1.js"
    assert main([str(source_file), "-o", str(output), "-q"]) == 0
    assert capsys.readouterr().out == ""


def test_refuses_to_overwrite(source_file, tmp_path, capsys):
    """Test that an existing output file is kept without --overwrite"""
    output = tmp_path / "Module1.js"
    output.write_text("keep me", encoding="utf-8")

    assert main([str(source_file), "-o", str(output)]) == 1

    assert output.read_text(encoding="utf-8") == "keep me"
    assert "already exists" in capsys.readouterr().err


def test_overwrite(source_file, tmp_path):
    output = tmp_path / "Module1.js"
    output.write_text("old", encoding="utf-8")

    assert main([str(source_file), "-o", str(output), "--overwrite"]) == 0
    assert output.read_text(encoding="utf-8") == EXPECTED


def test_missing_source(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bas")]) == 1
    assert "Source file not found" in capsys.readouterr().err


def test_conversion_error_shows_source_excerpt(tmp_path, capsys):
    """Test that a conversion failure is reported with the failing line marked"""
    path = tmp_path / "bad.bas"
    path.write_text("x = 1\nEnd With\ny = 2\n", encoding="utf-8")

    assert main([str(path)]) == 1

    err = capsys.readouterr().err
    assert "WithStackUnderflowError" in err
    assert ">   2: End With" in err


def test_yaml_config(source_file, tmp_path, capsys):
    """Test that --config settings reach the translator"""
    config = tmp_path / "vba2js.yaml"
    config.write_text("indent_unit: '    '\n", encoding="utf-8")

    assert main([str(source_file), "--config", str(config)]) == 0
    assert '    MsgBox("hi");' in capsys.readouterr().out


def test_invalid_config(source_file, tmp_path, capsys):
    config = tmp_path / "vba2js.yaml"
    config.write_text("max_lookahead: 0\n", encoding="utf-8")

    assert main([str(source_file), "--config", str(config)]) == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_color_output(source_file, capsys):
    assert main([str(source_file), "--color"]) == 0
    assert "\x1b[" in capsys.readouterr().out


def test_convert_file_without_output(source_file, settings):
    written, javascript = convert_file(source_file, settings=settings)
    assert written is None
    assert javascript == EXPECTED


def test_convert_file_encoding(tmp_path, settings):
    path = tmp_path / "latin.bas"
    path.write_text('s = "café"\n', encoding="latin-1")

    _, javascript = convert_file(path, encoding="latin-1", settings=settings)
    assert javascript == 's = "café";\n'


def test_undecodable_source(tmp_path, capsys):
    """Test that a source not valid in --encoding is reported, not raised"""
    path = tmp_path / "latin.bas"
    path.write_bytes('s = "café"\n'.encode("latin-1"))

    assert main([str(path)]) == 1
    assert "cannot decode" in capsys.readouterr().err
