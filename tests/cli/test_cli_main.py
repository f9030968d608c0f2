"""
Integration Tests for the CLI.

Verifies:
1.  Argument dispatch to the command handlers.
2.  `transform` on single files (stdout / --out / --json-trace) and directories.
3.  `variables`, `parse` and `schema` output.
4.  Exit codes on failures.
"""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from scrap_rewrite.cli.__main__ import main
from scrap_rewrite.utils.console import reset_console, set_console


@pytest.fixture
def log_buffer():
  stream = io.StringIO()
  set_console(Console(file=stream, width=200))
  yield stream
  reset_console()


@pytest.fixture
def script(tmp_path):
  path = tmp_path / "sprite.ts"
  path.write_text("interface V { score: number }\nf();\n", encoding="utf-8")
  return path


def test_dispatch_transform():
  with patch("scrap_rewrite.cli.commands.handle_transform", return_value=0) as mock_handler:
    assert main(["transform", "in.ts", "--out", "out.ts", "--context", "ctx"]) == 0
  mock_handler.assert_called_once_with(Path("in.ts"), Path("out.ts"), "ctx", None)


def test_dispatch_schema():
  with patch("scrap_rewrite.cli.commands.handle_schema", return_value=0) as mock_handler:
    main(["schema", "in.ts", "--name", "Vars"])
  mock_handler.assert_called_once_with(Path("in.ts"), "Vars")


def test_missing_command_exits():
  with pytest.raises(SystemExit):
    main([])


def test_transform_to_stdout(script, capsys, log_buffer):
  assert main(["transform", str(script)]) == 0
  out = capsys.readouterr().out
  assert out == '{\n    self.declareVariable("score", "number");\n}\nawait f(self);\n'


def test_transform_to_file_with_context(script, tmp_path, log_buffer):
  dest = tmp_path / "out" / "sprite.js"
  assert main(["transform", str(script), "--out", str(dest), "--context", "ctx"]) == 0
  assert dest.read_text(encoding="utf-8").endswith("await f(ctx);\n")
  assert "Rewrote" in log_buffer.getvalue()


def test_transform_writes_trace(script, tmp_path, log_buffer):
  dest = tmp_path / "sprite.js"
  trace = tmp_path / "trace.json"
  assert main(["transform", str(script), "--out", str(dest), "--json-trace", str(trace)]) == 0
  events = json.loads(trace.read_text(encoding="utf-8"))
  assert events[0]["type"] == "phase_start"
  assert any(e["type"] == "ast_mutation" for e in events)


def test_transform_invalid_context(script, log_buffer):
  assert main(["transform", str(script), "--context", "class"]) == 1
  assert "Invalid configuration" in log_buffer.getvalue()


def test_transform_syntax_error(tmp_path, log_buffer):
  bad = tmp_path / "bad.ts"
  bad.write_text("let = ;", encoding="utf-8")
  assert main(["transform", str(bad)]) == 1
  assert "Parse Error" in log_buffer.getvalue()


def test_transform_missing_input(tmp_path, log_buffer):
  assert main(["transform", str(tmp_path / "nope.ts")]) == 1


def test_transform_directory(tmp_path, log_buffer):
  src = tmp_path / "src"
  (src / "sub").mkdir(parents=True)
  (src / "a.ts").write_text("a();", encoding="utf-8")
  (src / "sub" / "b.js").write_text("while (x) {}", encoding="utf-8")
  (src / "notes.txt").write_text("ignored", encoding="utf-8")
  out = tmp_path / "out"

  assert main(["transform", str(src), "--out", str(out)]) == 0
  assert (out / "a.ts").read_text(encoding="utf-8") == "await a(self);\n"
  assert (out / "sub" / "b.js").read_text(encoding="utf-8") == "while (x) {\n    await self.delay();\n}\n"
  assert not (out / "notes.txt").exists()


def test_transform_directory_reports_failures(tmp_path, log_buffer):
  src = tmp_path / "src"
  src.mkdir()
  (src / "good.ts").write_text("a();", encoding="utf-8")
  (src / "bad.ts").write_text("class A {}", encoding="utf-8")
  out = tmp_path / "out"

  assert main(["transform", str(src), "--out", str(out)]) == 1
  assert (out / "good.ts").exists()
  assert not (out / "bad.ts").exists()
  assert "Rewrite Report" in log_buffer.getvalue()


def test_transform_directory_requires_out(tmp_path, log_buffer):
  assert main(["transform", str(tmp_path)]) == 1


def test_variables_json(script, capsys, log_buffer):
  assert main(["variables", str(script), "--json"]) == 0
  assert json.loads(capsys.readouterr().out) == [["score", ["number"]]]


def test_variables_table(script, log_buffer):
  assert main(["variables", str(script)]) == 0
  output = log_buffer.getvalue()
  assert "score" in output
  assert "number" in output


def test_variables_none_declared(tmp_path, log_buffer):
  path = tmp_path / "plain.ts"
  path.write_text("f();", encoding="utf-8")
  assert main(["variables", str(path)]) == 0
  assert "No variables" in log_buffer.getvalue()


def test_parse_command(script, capsys, log_buffer):
  assert main(["parse", str(script)]) == 0
  tree = json.loads(capsys.readouterr().out)
  assert tree["type"] == "Module"
  assert tree["body"][0]["type"] == "InterfaceDeclaration"


def test_schema_command(script, capsys, log_buffer):
  assert main(["schema", str(script), "--name", "Vars"]) == 0
  assert capsys.readouterr().out == 'interface Vars {\n\t"score": number;\n}\n'


@pytest.mark.parametrize("name, interface", [("My Sprite", "My$32$Sprite"), ("class", "$class$")])
def test_schema_escapes_sprite_names(script, capsys, log_buffer, name, interface):
  assert main(["schema", str(script), "--name", name]) == 0
  assert capsys.readouterr().out.startswith(f"interface {interface} {{\n")
  assert "escaped" in log_buffer.getvalue()


def test_schema_rejects_empty_name(script, log_buffer):
  assert main(["schema", str(script), "--name", ""]) == 1
