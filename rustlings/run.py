"""Running a single exercise and resetting it."""

from __future__ import annotations

import subprocess

from rustlings.exercise import CompilationFailed, Exercise, Mode, RunFailed
from rustlings.ui import success, warn
from rustlings.verify import ExerciseFailed, _spinner, test


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run (or test) one exercise; raise ExerciseFailed on failure."""
    if exercise.mode is Mode.TEST:
        test(exercise, verbose)
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Stash the changes made to the exercise file with git."""
    try:
        return subprocess.Popen(["git", "stash", "--", str(exercise.path)])
    except OSError as exc:
        raise ExerciseFailed(exercise) from exc


def _compile_and_run(exercise: Exercise) -> None:
    try:
        with _spinner(f"Compiling {exercise}...") as update:
            with exercise.compile() as compiled:
                update(f"Running {exercise}...")
                output = compiled.run()
    except CompilationFailed as exc:
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(exc.output.stderr)
        raise ExerciseFailed(exercise) from exc
    except RunFailed as exc:
        print(exc.output.stdout)
        print(exc.output.stderr)
        warn(f"Ran {exercise} with errors")
        raise ExerciseFailed(exercise) from exc

    print(output.stdout)
    success(f"Successfully ran {exercise}")