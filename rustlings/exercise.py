"""Exercises: loading, compiling, running and checking their progress marker."""

from __future__ import annotations

import contextlib
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping

from rustlings.ui import no_emoji

RUSTC_COLOR_ARGS = ("--color", "always")
RUSTC_EDITION_ARGS = ("--edition", "2021")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = Path("./exercises/clippy/Cargo.toml")


def temp_file() -> str:
    """Return a temporary file name unique to this process and thread."""
    return f"./temp_{os.getpid()}_ThreadId{threading.get_ident()}"


def clean() -> None:
    """Remove the temporary binary, ignoring errors."""
    with contextlib.suppress(OSError):
        os.remove(temp_file())


class Mode(Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class State:
    """Progress of an exercise; an empty context means it is done."""

    context: tuple[ContextLine, ...] = ()

    def done(self) -> bool:
        return not self.context


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a finished process."""

    stdout: str
    stderr: str


class CompilationFailed(Exception):
    """The exercise did not compile."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__("compilation failed")
        self.output = output


class RunFailed(Exception):
    """The compiled exercise exited with an error."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__("run failed")
        self.output = output


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _output_of(result: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(stdout=_decode(result.stdout), stderr=_decode(result.stderr))


def _source_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class CompiledExercise:
    """A successfully compiled exercise; removes its binary when closed."""

    def __init__(self, exercise: "Exercise") -> None:
        self.exercise = exercise

    def run(self) -> ExerciseOutput:
        """Run the binary; raise RunFailed if it exits with an error."""
        return self.exercise._run()

    def close(self) -> None:
        clean()

    def __enter__(self) -> "CompiledExercise":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


@dataclass
class Exercise:
    """One exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Exercise":
        try:
            return cls(
                name=str(data["name"]),
                path=Path(data["path"]),
                mode=Mode(data["mode"]),
                hint=str(data["hint"]),
            )
        except KeyError as exc:
            raise ValueError(f"missing field `{exc.args[0]}`") from exc

    def compile(self) -> CompiledExercise:
        """Compile the exercise; raise CompilationFailed on failure."""
        path = str(self.path)
        binary = ["rustc", path, "-o", temp_file(), *RUSTC_COLOR_ARGS, *RUSTC_EDITION_ARGS]
        if self.mode is Mode.COMPILE:
            command = binary
        elif self.mode is Mode.TEST:
            command = ["rustc", "--test", path, "-o", temp_file(),
                       *RUSTC_COLOR_ARGS, *RUSTC_EDITION_ARGS]
        else:
            self._write_clippy_manifest()
            # Build a binary too so the exercise can be run afterwards.
            subprocess.run(binary, capture_output=True)
            manifest = str(CLIPPY_CARGO_TOML_PATH)
            subprocess.run(
                ["cargo", "clean", "--manifest-path", manifest, *RUSTC_COLOR_ARGS],
                capture_output=True,
            )
            command = ["cargo", "clippy", "--manifest-path", manifest, *RUSTC_COLOR_ARGS,
                       "--", "-D", "warnings", "-D", "clippy::float_cmp"]

        result = subprocess.run(command, capture_output=True)
        if result.returncode == 0:
            return CompiledExercise(self)
        clean()
        raise CompilationFailed(_output_of(result))

    def _write_clippy_manifest(self) -> None:
        manifest = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2021"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        try:
            CLIPPY_CARGO_TOML_PATH.write_text(manifest, encoding="utf-8")
        except OSError as exc:
            message = ("Failed to write Clippy Cargo.toml file." if no_emoji()
                       else "Failed to write 📎 Clippy 📎 Cargo.toml file.")
            raise OSError(message) from exc

    def _run(self) -> ExerciseOutput:
        arg = "--show-output" if self.mode is Mode.TEST else ""
        result = subprocess.run([temp_file(), arg], capture_output=True)
        output = _output_of(result)
        if result.returncode != 0:
            raise RunFailed(output)
        return output

    def state(self) -> State:
        """Find the pending marker and the lines around it."""
        source = Path(self.path).read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return State()

        lines = _source_lines(source)
        matched = next(
            (i for i, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)), None
        )
        if matched is None:
            raise RuntimeError("pending marker spans several lines")

        first = max(matched - CONTEXT, 0)
        last = matched + CONTEXT
        return State(tuple(
            ContextLine(line=line, number=i + 1, important=i == matched)
            for i, line in enumerate(lines)
            if first <= i <= last
        ))

    def looks_done(self) -> bool:
        """Whether the marker comment has been removed."""
        return self.state().done()

    def __str__(self) -> str:
        return str(self.path)


def load_exercises(text: str) -> list[Exercise]:
    """Parse the exercise list from the text of info.toml."""
    data = tomllib.loads(text)
    entries: Iterable[Mapping[str, Any]] = data.get("exercises")
    if entries is None:
        raise ValueError("missing field `exercises`")
    return [Exercise.from_dict(entry) for entry in entries]