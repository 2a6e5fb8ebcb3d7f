# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""Tests for the command-line layout generator."""

import json

import pytest

from huecast.derive.cli import main


def _write_schema(tmp_path, types):
    path = tmp_path / "colors.json"
    path.write_text(json.dumps({"types": types}))
    return path


RGBA = {
    "name": "Rgba",
    "module": "mypkg.colors",
    "layout": ["C"],
    "fields": [{"name": n, "type": "float32"} for n in ("r", "g", "b", "a")],
}


class TestCli:

    def test_writes_module(self, tmp_path):
        out = tmp_path / "colors_cast.py"
        assert main([str(_write_schema(tmp_path, [RGBA])), "-o", str(out)]) == 0
        source = out.read_text()
        assert source.startswith("# Generated by huecast.derive")
        assert "from mypkg.colors import Rgba" in source
        assert "ArrayShape('float32', 4)" in source

    def test_stdout(self, tmp_path, capsys):
        assert main([str(_write_schema(tmp_path, [RGBA]))]) == 0
        assert "implement_array_cast(" in capsys.readouterr().out

    def test_internal(self, tmp_path, capsys):
        assert main([str(_write_schema(tmp_path, [RGBA])), "--internal"]) == 0
        assert "from huecast.cast.array_cast import" in capsys.readouterr().out

    def test_diagnostics_block_output(self, tmp_path, capsys):
        bad = {
            "name": "Bad",
            "fields": [
                {"name": "a", "type": "float32"},
                {"name": "b", "type": "float32"},
                {"name": "c", "type": "int32"},
            ],
        }
        out = tmp_path / "out.py"
        assert main([str(_write_schema(tmp_path, [RGBA, bad])), "-o", str(out)]) == 1
        err = capsys.readouterr().err
        assert "error[missing_layout_guarantee]: Bad" in err
        assert "error[mismatched_channel_type]: Bad.c: expected fields to have type `float32`" in err
        assert "2 diagnostic(s)" in err
        assert not out.exists()

    def test_enum_reported(self, tmp_path, capsys):
        assert main([str(_write_schema(tmp_path, [{"name": "Mode", "kind": "enum"}]))]) == 1
        assert "cannot be derived for enums" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 2
        assert "cannot read" in capsys.readouterr().err

    def test_bad_json(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert main([str(path)]) == 2

    def test_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "schema" in capsys.readouterr().out
