import sys
from pathlib import Path

import pytest

from letlang.runner import main


def write(tmp_path: Path, text: str) -> str:
    path = tmp_path / "prog.let"
    path.write_text(text, encoding="utf-8")
    return str(path)


@pytest.mark.parametrize("backend", ["vm", "tree"])
def test_runs_program(tmp_path: Path, capsys: pytest.CaptureFixture[str], backend: str):
    path = write(tmp_path, "let x = 10;\nlet y = 20;\nprint(x + y);\nprint(y / 3);\n")
    assert main(["-b", backend, path]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["30", "6"]


def test_bytecode_dump(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = write(tmp_path, "let x = 10; print(x);")
    assert main(["--bytecode", path]) == 0
    assert capsys.readouterr().out == "PUSH 10\nSTORE x\nPUSH x\nPRINT\n10\n"


def test_bytecode_dump_with_tree_backend(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = write(tmp_path, "print(2 * 4);")
    assert main(["--bytecode", "--backend", "tree", path]) == 0
    assert capsys.readouterr().out == "PUSH 2\nPUSH 4\nMUL\nPRINT\n8\n"


def test_tokens_and_ast_dump(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = write(tmp_path, "let a = 1;")
    assert main(["--tokens", "--ast", path]) == 0
    out = capsys.readouterr().out
    print(out)
    assert "   1 | let a = 1;" in out
    assert "Token { kind: Ident" in out
    assert "└─ LetStmt" in out
    assert "name = Token(Ident, 'a')" in out


def test_semantic_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = write(tmp_path, "print(1);\nprint(x);\n")
    assert main([path]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "SemanticError: Undeclared identifier" in captured.err
    assert "At 2:7" in captured.err


def test_runtime_error_prints_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = write(tmp_path, "print(1);\nprint(1 / 0);\n")
    assert main([path]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "VMError: Division by zero" in captured.err


def test_lex_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    path = write(tmp_path, "let x = 1 % 2;")
    assert main(["-b", "tree", path]) == 1
    assert "LexError" in capsys.readouterr().err


def test_missing_file(tmp_path: Path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.let")])
    assert exc.value.code == 2


def test_unknown_backend_flag(tmp_path: Path):
    path = write(tmp_path, "print(1);")
    with pytest.raises(SystemExit) as exc:
        main(["-b", "jit", path])
    assert exc.value.code == 2


@pytest.mark.parametrize("backend", ["vm", "tree"])
def test_prints_large_values(tmp_path: Path, capsys: pytest.CaptureFixture[str], backend: str):
    limit = sys.get_int_max_str_digits()
    ones = "1" * 5000
    path = write(tmp_path, f"let a = {ones}; print(a * 9);")
    assert main(["-b", backend, path]) == 0
    assert capsys.readouterr().out == "9" * 5000 + "\n"
    assert sys.get_int_max_str_digits() == limit
