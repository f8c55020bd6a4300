"""Checking exercises in order and reporting how far along the learner is."""

from __future__ import annotations

import contextlib
from typing import Callable, Iterable, Iterator

from rich.console import Console
from rich.text import Text

from rustlings.exercise import (
    CompilationFailed,
    Exercise,
    ExerciseOutput,
    Mode,
    RunFailed,
)
from rustlings.ui import no_emoji, success, warn

_BAR_WIDTH = 60


class ExerciseFailed(Exception):
    """An exercise failed to compile, to run, or is still marked as pending."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"{exercise} failed")
        self.exercise = exercise


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True, emoji=False)


@contextlib.contextmanager
def _spinner(message: str) -> Iterator[Callable[[str], None]]:
    """Show a spinner on a terminal; yield a function that changes its text."""
    console = _console()
    if not console.is_terminal:
        yield lambda _text: None
        return
    with console.status(message) as status:
        yield lambda text: status.update(text)


def _progress_line(position: int, total: int, percentage: float) -> str:
    filled = min(_BAR_WIDTH, _BAR_WIDTH * position // total) if total else _BAR_WIDTH
    bar = "#" * filled
    if filled < _BAR_WIDTH:
        bar += ">" + "-" * (_BAR_WIDTH - filled - 1)
    return f"Progress: [{bar}] {position}/{total} ({percentage:.1f} %)"


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int],
    verbose: bool = False,
) -> None:
    """Check the exercises in order; raise ExerciseFailed at the first one not passing."""
    num_done, total = progress
    percentage = num_done / total * 100.0 if total else 0.0
    position = num_done
    print(_progress_line(position, total, percentage))

    for exercise in exercises:
        if exercise.mode is Mode.TEST:
            passed = _compile_and_test(exercise, interactive=True, verbose=verbose)
        elif exercise.mode is Mode.COMPILE:
            passed = _compile_and_run_interactively(exercise)
        else:
            passed = _compile_only(exercise)
        if not passed:
            raise ExerciseFailed(exercise)
        percentage += 100.0 / total if total else 0.0
        position += 1
        print(_progress_line(position, total, percentage))


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run the exercise's tests; raise ExerciseFailed if they fail."""
    _compile_and_test(exercise, interactive=False, verbose=verbose)


def _report_compile_failure(exercise: Exercise, output: ExerciseOutput) -> None:
    warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
    print(output.stderr)
    raise ExerciseFailed(exercise)


def _compile_only(exercise: Exercise) -> bool:
    try:
        with _spinner(f"Compiling {exercise}..."):
            exercise.compile().close()
    except CompilationFailed as exc:
        _report_compile_failure(exercise, exc.output)
    return prompt_for_completion(exercise, None)


def _compile_and_run_interactively(exercise: Exercise) -> bool:
    try:
        with _spinner(f"Compiling {exercise}...") as update:
            with exercise.compile() as compiled:
                update(f"Running {exercise}...")
                output = compiled.run()
    except CompilationFailed as exc:
        _report_compile_failure(exercise, exc.output)
    except RunFailed as exc:
        warn(f"Ran {exercise} with errors")
        print(exc.output.stdout)
        print(exc.output.stderr)
        raise ExerciseFailed(exercise) from exc
    return prompt_for_completion(exercise, output.stdout)


def _compile_and_test(exercise: Exercise, interactive: bool, verbose: bool) -> bool:
    try:
        with _spinner(f"Testing {exercise}..."):
            with exercise.compile() as compiled:
                output = compiled.run()
    except CompilationFailed as exc:
        _report_compile_failure(exercise, exc.output)
    except RunFailed as exc:
        warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
        print(exc.output.stdout)
        raise ExerciseFailed(exercise) from exc

    if verbose:
        print(output.stdout)
    if interactive:
        return prompt_for_completion(exercise, None)
    return True


def _separator() -> Text:
    return Text("====================", style="bold")


def prompt_for_completion(exercise: Exercise, prompt_output: str | None = None) -> bool:
    """Return True if the exercise is done; otherwise show where its marker is."""
    state = exercise.state()
    if state.done():
        return True

    verb = {Mode.COMPILE: "ran", Mode.TEST: "tested", Mode.CLIPPY: "compiled"}[exercise.mode]
    success(f"Successfully {verb} {exercise}!")

    plain = no_emoji()
    clippy_message = (
        "The code is compiling, and Clippy is happy!"
        if plain
        else "The code is compiling, and 📎 Clippy 📎 is happy!"
    )
    message = {
        Mode.COMPILE: "The code is compiling!",
        Mode.TEST: "The code is compiling, and the tests pass!",
        Mode.CLIPPY: clippy_message,
    }[exercise.mode]

    print()
    print(f"~*~ {message} ~*~" if plain else f"🎉 🎉  {message} 🎉 🎉")
    print()

    console = _console()
    if prompt_output is not None:
        print("Output:")
        console.print(_separator())
        print(prompt_output)
        console.print(_separator())
        print()

    print("You can keep working on this exercise,")
    console.print(Text.assemble(
        "or jump into the next one by removing the ",
        ("`I AM NOT DONE`", "bold"),
        " comment:",
    ))
    print()
    for context_line in state.context:
        line = (context_line.line, "bold") if context_line.important else context_line.line
        console.print(Text.assemble(
            (f"{context_line.number:>2}", "bold blue"),
            " ",
            ("|", "blue"),
            "  ",
            line,
        ))
    return False