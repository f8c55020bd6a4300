import os
import subprocess
from pathlib import Path
from unittest import mock

import pytest

from rustlings.exercise import (
    CompilationFailed,
    CompiledExercise,
    ContextLine,
    Exercise,
    ExerciseOutput,
    Mode,
    RunFailed,
    State,
    clean,
    load_exercises,
    temp_file,
)

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def _done(args, stdout=b"", stderr=b"", code=0):
    return subprocess.CompletedProcess(args=args, returncode=code, stdout=stdout, stderr=stderr)


def test_clean(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path(temp_file()).touch()
    exercise = Exercise("example", tmp_path / "x.rs", Mode.COMPILE, "")
    with CompiledExercise(exercise) as compiled:
        assert compiled.exercise is exercise
    assert not Path(temp_file()).exists()


def test_clean_ignores_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    clean()
    assert not Path(temp_file()).exists()


def test_temp_file_name():
    name = temp_file()
    assert name.startswith("./temp_")
    assert str(os.getpid()) in name
    assert name == temp_file()


def test_pending_state(tmp_path):
    exercise = Exercise("pending_exercise", _write(tmp_path, "p.rs", PENDING), Mode.COMPILE, "")
    expected = State((
        ContextLine("// fake_exercise", 1, False),
        ContextLine("", 2, False),
        ContextLine("// I AM NOT DONE", 3, True),
        ContextLine("", 4, False),
        ContextLine("fn main() {", 5, False),
    ))
    assert exercise.state() == expected
    assert not exercise.looks_done()


def test_finished_exercise(tmp_path):
    exercise = Exercise("finished_exercise", _write(tmp_path, "f.rs", FINISHED), Mode.COMPILE, "")
    assert exercise.state() == State()
    assert exercise.state().done()
    assert exercise.looks_done()


def test_marker_on_first_line(tmp_path):
    source = "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n"
    exercise = Exercise("t", _write(tmp_path, "t.rs", source), Mode.TEST, "")
    context = exercise.state().context
    assert [line.number for line in context] == [1, 2, 3]
    assert [line.important for line in context] == [True, False, False]


def test_doc_comment_marker_counts(tmp_path):
    exercise = Exercise("d", _write(tmp_path, "d.rs", "    /// I  AM NOT   DONE\n"), Mode.COMPILE, "")
    assert not exercise.looks_done()


def test_marker_without_comment_is_done(tmp_path):
    exercise = Exercise("n", _write(tmp_path, "n.rs", "I AM NOT DONE\n"), Mode.COMPILE, "")
    assert exercise.looks_done()


def test_str_is_path():
    exercise = Exercise("a", Path("exercises/a.rs"), Mode.COMPILE, "")
    assert str(exercise) == str(Path("exercises/a.rs"))


def test_load_exercises():
    text = (
        '[[exercises]]\nname = "intro1"\npath = "exercises/intro/intro1.rs"\n'
        'mode = "compile"\nhint = "No hints this time ;)"\n\n'
        '[[exercises]]\nname = "tests1"\npath = "exercises/tests/tests1.rs"\n'
        'mode = "test"\nhint = "Hello!"\n'
    )
    exercises = load_exercises(text)
    assert [e.name for e in exercises] == ["intro1", "tests1"]
    assert [e.mode for e in exercises] == [Mode.COMPILE, Mode.TEST]
    assert exercises[1].hint == "Hello!"
    assert exercises[0].path == Path("exercises/intro/intro1.rs")


def test_load_exercises_rejects_unknown_mode():
    text = '[[exercises]]\nname = "a"\npath = "a.rs"\nmode = "bogus"\nhint = ""\n'
    with pytest.raises(ValueError):
        load_exercises(text)


def test_from_dict_missing_field():
    with pytest.raises(ValueError, match="hint"):
        Exercise.from_dict({"name": "a", "path": "a.rs", "mode": "test"})


def test_compile_failure_raises_with_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path(temp_file()).touch()
    exercise = Exercise("c", Path("c.rs"), Mode.COMPILE, "")
    with mock.patch("subprocess.run", return_value=_done([], stderr=b"error[E0425]", code=1)):
        with pytest.raises(CompilationFailed) as info:
            exercise.compile()
    assert info.value.output == ExerciseOutput(stdout="", stderr="error[E0425]")
    assert not Path(temp_file()).exists()


def test_compile_test_mode_and_run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = Exercise("exercise_with_output", Path("t.rs"), Mode.TEST, "")
    results = [_done([]), _done([], stdout=b"THIS TEST TOO SHALL PASS\n")]
    with mock.patch("subprocess.run", side_effect=results) as run:
        out = exercise.compile().run()
    assert "THIS TEST TOO SHALL PASS" in out.stdout
    compile_args = run.call_args_list[0].args[0]
    assert compile_args[:3] == ["rustc", "--test", "t.rs"]
    assert run.call_args_list[1].args[0] == [temp_file(), "--show-output"]


def test_run_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = Exercise("c", Path("c.rs"), Mode.COMPILE, "")
    results = [_done([]), _done([], stdout=b"out", stderr=b"panicked", code=101)]
    with mock.patch("subprocess.run", side_effect=results):
        with pytest.raises(RunFailed) as info:
            exercise.compile().run()
    assert info.value.output.stderr == "panicked"


def test_clippy_writes_manifest(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "exercises" / "clippy").mkdir(parents=True)
    exercise = Exercise("clippy1", Path("exercises/clippy/clippy1.rs"), Mode.CLIPPY, "")
    with mock.patch("subprocess.run", return_value=_done([])) as run:
        compiled = exercise.compile()
    assert compiled.exercise is exercise
    manifest = (tmp_path / "exercises" / "clippy" / "Cargo.toml").read_text()
    assert 'name = "clippy1"' in manifest
    assert 'path = "clippy1.rs"' in manifest
    last = run.call_args_list[-1].args[0]
    assert last[:2] == ["cargo", "clippy"]
    assert last[-4:] == ["-D", "warnings", "-D", "clippy::float_cmp"]