"""Command-line entry point: list, run, verify, reset and watch exercises."""

from __future__ import annotations

import argparse
import queue
import subprocess
import sys
import threading
from enum import Enum
from pathlib import Path
from typing import IO, Iterable, Sequence

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from rustlings.exercise import Exercise, load_exercises
from rustlings.project import RustAnalyzerProject
from rustlings.run import reset
from rustlings.run import run as run_exercise
from rustlings.ui import no_emoji
from rustlings.verify import ExerciseFailed, verify

VERSION = "5.4.1"

WELCOME = r"""       welcome to...
                 _   _ _
  _ __ _   _ ___| |_| (_)_ __   __ _ ___
 | '__| | | / __| __| | | '_ \ / _` / __|
 | |  | |_| \__ \ |_| | | | | | (_| \__ \
 |_|   \__,_|___/\__|_|_|_| |_|\__, |___/
                               |___/"""

DEFAULT_OUT = """Thanks for installing Rustlings!

Is this your first time? Don't worry, Rustlings was made for beginners! We are
going to teach you a lot of things about Rust, but before we can get
started, here's a couple of notes about how Rustlings operates:

1. The central concept behind Rustlings is that you solve exercises. These
   exercises usually have some sort of syntax error in them, which will cause
   them to fail compilation or testing. Sometimes there's a logic error instead
   of a syntax error. No matter what error, it's your job to find it and fix it!
   You'll know when you fixed it because then, the exercise will compile and
   Rustlings will be able to move on to the next exercise.
2. If you run Rustlings in watch mode (which we recommend), it'll automatically
   start with the first exercise. Don't get confused by an error message popping
   up as soon as you run Rustlings! This is part of the exercise that you're
   supposed to solve, so open the exercise file in an editor and start your
   detective work!
3. If you're stuck on an exercise, there is a helpful hint you can view by typing
   'hint' (in watch mode), or running `rustlings hint exercise_name`.
4. If an exercise doesn't make sense to you, feel free to open an issue!
   We look at every issue, and sometimes, other learners do too so you can
   help each other out!
5. If you want to use `rust-analyzer` with exercises, which provides features like
   autocompletion, run the command `rustlings lsp`.

Got all that? Great! To get started, run `rustlings watch` in order to get the first
exercise. Make sure to have your editor open!"""

FENISH_LINE = r"""+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
+--------------------------  ------------------------+
                          \\/
     ▒▒          ▒▒▒▒▒▒▒▒      ▒▒▒▒▒▒▒▒          ▒▒
   ▒▒▒▒  ▒▒    ▒▒        ▒▒  ▒▒        ▒▒    ▒▒  ▒▒▒▒
   ▒▒▒▒  ▒▒  ▒▒            ▒▒            ▒▒  ▒▒  ▒▒▒▒
 ░░▒▒▒▒░░▒▒  ▒▒            ▒▒            ▒▒  ▒▒░░▒▒▒▒
   ▓▓▓▓▓▓▓▓  ▓▓      ▓▓██  ▓▓  ▓▓██      ▓▓  ▓▓▓▓▓▓▓▓
     ▒▒▒▒    ▒▒      ████  ▒▒  ████      ▒▒░░  ▒▒▒▒
       ▒▒  ▒▒▒▒▒▒        ▒▒▒▒▒▒        ▒▒▒▒▒▒  ▒▒
         ▒▒▒▒▒▒▒▒▒▒▓▓▓▓▓▓▒▒▒▒▒▒▒▒▓▓▒▒▓▓▒▒▒▒▒▒▒▒
           ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒
             ▒▒▒▒▒▒▒▒▒▒██▒▒▒▒▒▒██▒▒▒▒▒▒▒▒▒▒
           ▒▒  ▒▒▒▒▒▒▒▒▒▒██████▒▒▒▒▒▒▒▒▒▒  ▒▒
         ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒
       ▒▒    ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒    ▒▒
       ▒▒  ▒▒    ▒▒                  ▒▒    ▒▒  ▒▒
           ▒▒  ▒▒                      ▒▒  ▒▒

We hope you enjoyed learning about the various aspects of Rust!
If you noticed any issues, please don't hesitate to report them.
You can also contribute your own exercises to help the greater community!

Before reporting an issue or contributing, please read the contributing guidelines."""

_HELP_TEXT = (
    "Commands available to you in watch mode:",
    "  hint   - prints the current exercise's hint",
    "  clear  - clears the screen",
    "  quit   - quits watch mode",
    "  !<cmd> - executes a command, like `!rustc --explain E0381`",
    "  help   - displays this help message",
    "",
    "Watch mode automatically re-evaluates the current exercise",
    "when you edit a file's contents.",
)


class ExerciseNotFound(LookupError):
    """No exercise matches the requested name."""


class WatchStatus(Enum):
    """How watch mode ended."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        prefix = "the following arguments are required:"
        if message.startswith(prefix):
            missing = message[len(prefix):].strip()
            message = f"Required positional arguments not provided:\n    {missing}"
        self.print_usage(sys.stderr)
        self.exit(1, f"{message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser with all subcommands."""
    parser = _ArgumentParser(
        prog="rustlings",
        description="Rustlings is a collection of small exercises to get you used "
        "to writing and reading Rust code",
    )
    parser.add_argument("--nocapture", action="store_true",
                        help="show outputs from the test exercises")
    parser.add_argument("-v", "--version", action="store_true",
                        help="show the executable version")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("verify", help="Verifies all exercises according to the recommended order")
    commands.add_parser("watch", help="Reruns `verify` when files were edited")
    for name, text in (
        ("run", "Runs/Tests a single exercise"),
        ("reset", 'Resets a single exercise using "git stash -- <filename>"'),
        ("hint", "Returns a hint for the given exercise"),
    ):
        sub = commands.add_parser(name, help=text)
        sub.add_argument("name", help="the name of the exercise")
    commands.add_parser("lsp", help="Enable rust-analyzer for exercises")

    listing = commands.add_parser("list", help="Lists the exercises available in Rustlings")
    listing.add_argument("-p", "--paths", action="store_true",
                         help="show only the paths of the exercises")
    listing.add_argument("-n", "--names", action="store_true",
                         help="show only the names of the exercises")
    listing.add_argument("-f", "--filter", default=None,
                         help="provide a string to match exercise names; "
                         "comma separated patterns are acceptable")
    listing.add_argument("-u", "--unsolved", action="store_true",
                         help="display only exercises not yet solved")
    listing.add_argument("-s", "--solved", action="store_true",
                         help="display only exercises that have been solved")
    return parser


def find_exercise(name: str, exercises: Sequence[Exercise]) -> Exercise:
    """Find an exercise by name; "next" picks the first one not yet done."""
    if name == "next":
        for exercise in exercises:
            if not exercise.looks_done():
                return exercise
        raise ExerciseNotFound(
            "🎉 Congratulations! You have done all the exercises!\n"
            "🔚 There are no more exercises to do next!"
        )
    for exercise in exercises:
        if exercise.name == name:
            return exercise
    raise ExerciseNotFound(f"No exercise found for '{name}'!")


def rustc_exists() -> bool:
    """Whether `rustc --version` can be run successfully."""
    try:
        result = subprocess.run(["rustc", "--version"], stdout=subprocess.DEVNULL)
    except OSError:
        return False
    return result.returncode == 0


def list_exercises(
    exercises: Iterable[Exercise],
    paths: bool = False,
    names: bool = False,
    filter: str | None = None,
    unsolved: bool = False,
    solved: bool = False,
    out: IO[str] | None = None,
) -> int:
    """Write the exercise table and progress line; return how many are done."""
    out = sys.stdout if out is None else out
    exercises = list(exercises)
    if not paths and not names:
        out.write(f"{'Name':<17}\t{'Path':<46}\t{'Status':<7}\n")

    patterns = [p for p in (filter or "").lower().split(",") if p.strip()]
    done_count = 0
    for exercise in exercises:
        fname = str(exercise.path)
        done = exercise.looks_done()
        if done:
            done_count += 1
        status = "Done" if done else "Pending"
        matches = any(p in exercise.name or p in fname for p in patterns)
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if wanted and (matches or filter is None):
            if paths:
                out.write(f"{fname}\n")
            elif names:
                out.write(f"{exercise.name}\n")
            else:
                out.write(f"{exercise.name:<17}\t{fname:<46}\t{status:<7}\n")

    total = len(exercises)
    percentage = f"{done_count / total * 100.0:.1f}" if total else "NaN"
    out.write(f"Progress: You completed {done_count} / {total} exercises ({percentage} %).\n")
    return done_count


def handle_shell_command(line: str, hint: str | None = None,
                         out: IO[str] | None = None) -> bool:
    """Carry out one watch-mode command; return True when the user asked to quit."""
    out = sys.stdout if out is None else out
    command = line.strip()

    def say(text: str = "") -> None:
        print(text, file=out)

    if command == "hint":
        if hint is not None:
            say(hint)
    elif command == "clear":
        say("\x1b[2J\x1b[1;1H")
    elif command == "quit":
        say("Bye!")
        return True
    elif command == "help":
        for text in _HELP_TEXT:
            say(text)
    elif command.startswith("!"):
        cmd = command[1:]
        parts = cmd.split()
        if not parts:
            say("no command provided")
        else:
            try:
                subprocess.run(parts)
            except OSError as exc:
                say(f"failed to execute command `{cmd}`: {exc}")
    else:
        say(f"unknown command: {command}")
    return False


class _SharedHint:
    """The hint of the exercise currently failing, shared with the shell thread."""

    def __init__(self, hint: str | None) -> None:
        self._lock = threading.Lock()
        self._hint = hint

    def get(self) -> str | None:
        with self._lock:
            return self._hint

    def set(self, hint: str | None) -> None:
        with self._lock:
            self._hint = hint


class _ChangeHandler(FileSystemEventHandler):
    """Queue the paths of created and modified files."""

    def __init__(self, events: "queue.Queue[str]") -> None:
        super().__init__()
        self._events = events

    def _queue(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            path = event.src_path
            self._events.put(path.decode() if isinstance(path, bytes) else path)

    def on_created(self, event: FileSystemEvent) -> None:
        self._queue(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._queue(event)


def _clear_screen() -> None:
    print("\x1bc")


def _spawn_watch_shell(hint: _SharedHint, quit_event: threading.Event) -> None:
    print("Welcome to watch mode! You can type 'help' to get an overview "
          "of the commands you can use here.")

    def loop() -> None:
        while True:
            try:
                line = sys.stdin.readline()
            except (OSError, ValueError) as exc:
                print(f"error reading command: {exc}")
                return
            if not line:
                return
            if handle_shell_command(line, hint.get()):
                quit_event.set()

    threading.Thread(target=loop, daemon=True).start()


def _ends_with(path: Path, suffix: Path) -> bool:
    tail = suffix.parts
    return bool(tail) and path.parts[-len(tail):] == tail


def _drain(events: "queue.Queue[str]", first: str) -> list[str]:
    changed = [first]
    while True:
        try:
            item = events.get_nowait()
        except queue.Empty:
            break
        if item not in changed:
            changed.append(item)
    return changed


def watch(exercises: Iterable[Exercise], verbose: bool = False) -> WatchStatus:
    """Verify the exercises, then re-verify whenever an exercise file changes."""
    exercises = list(exercises)
    events: queue.Queue[str] = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeHandler(events), "./exercises", recursive=True)
    observer.start()
    try:
        return _watch_loop(exercises, verbose, events)
    finally:
        observer.stop()
        observer.join()


def _watch_loop(exercises: list[Exercise], verbose: bool,
                events: "queue.Queue[str]") -> WatchStatus:
    _clear_screen()
    total = len(exercises)
    try:
        verify(exercises, (0, total), verbose)
        return WatchStatus.FINISHED
    except ExerciseFailed as exc:
        hint = _SharedHint(exc.exercise.hint)

    quit_event = threading.Event()
    _spawn_watch_shell(hint, quit_event)
    while True:
        try:
            first = events.get(timeout=1)
        except queue.Empty:
            changed: list[str] = []
        else:
            changed = _drain(events, first)

        for name in changed:
            path = Path(name)
            if path.suffix != ".rs" or not path.exists():
                continue
            filepath = path.resolve()
            current = [e for e in exercises if _ends_with(filepath, e.path)][:1]
            others = [e for e in exercises
                      if not e.looks_done() and not _ends_with(filepath, e.path)]
            num_done = sum(1 for e in exercises if e.looks_done())
            _clear_screen()
            try:
                verify(current + others, (num_done, total), verbose)
                return WatchStatus.FINISHED
            except ExerciseFailed as exc:
                hint.set(exc.exercise.hint)

        if quit_event.is_set():
            return WatchStatus.UNFINISHED


def _exit_code(exc: SystemExit) -> int:
    if exc.code is None:
        return 0
    return exc.code if isinstance(exc.code, int) else 1


def _lsp() -> int:
    project = RustAnalyzerProject()
    try:
        project.get_sysroot_src()
    except OSError:
        print("Couldn't find toolchain path, do you have `rustc` installed?", file=sys.stderr)
        return 1
    try:
        project.exercises_to_json()
    except OSError:
        print("Couldn't parse rustlings exercises files", file=sys.stderr)
        return 1

    if not project.crates:
        print("Failed find any exercises, make sure you're in the `rustlings` folder")
        return 0
    try:
        project.write_to_disk()
    except OSError:
        print("Failed to write rust-project.json to disk for rust-analyzer")
        return 0
    print("Successfully generated rust-project.json")
    print("rust-analyzer will now parse exercises, restart your language server or editor")
    return 0


def _watch_command(exercises: list[Exercise], verbose: bool) -> int:
    try:
        status = watch(exercises, verbose)
    except OSError as exc:
        print(f"Error: Could not watch your progress. Error message was {exc!r}.")
        print("Most likely you've run out of disk space or your 'inotify limit' "
              "has been reached.")
        return 1
    if status is WatchStatus.FINISHED:
        emoji = "★" if no_emoji() else "🎉"
        print(f"{emoji} All exercises completed! {emoji}")
        print(f"\n{FENISH_LINE}\n")
    else:
        print("We hope you're enjoying learning about Rust!")
        print("If you want to continue working on the exercises at a later point, "
              "you can simply run `rustlings watch` again")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit code."""
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        return _exit_code(exc)

    if args.version:
        print(f"v{VERSION}")
        return 0

    if args.command is None:
        print(f"\n{WELCOME}\n")

    if not Path("info.toml").exists():
        print(f"{sys.argv[0]} must be run from the rustlings directory")
        print("Try `cd rustlings/`!")
        return 1

    if not rustc_exists():
        print("We cannot find `rustc`.")
        print("Try running `rustc --version` to diagnose your problem.")
        print("For instructions on how to install Rust, check the README.")
        return 1

    exercises = load_exercises(Path("info.toml").read_text(encoding="utf-8"))
    verbose = args.nocapture

    if args.command is None:
        print(f"{DEFAULT_OUT}\n")
        return 0

    try:
        if args.command == "list":
            try:
                list_exercises(exercises, args.paths, args.names, args.filter,
                               args.unsolved, args.solved, sys.stdout)
                sys.stdout.flush()
            except BrokenPipeError:
                return 0
            except OSError:
                return 1
            return 0
        if args.command == "run":
            run_exercise(find_exercise(args.name, exercises), verbose)
            return 0
        if args.command == "reset":
            reset(find_exercise(args.name, exercises))
            return 0
        if args.command == "hint":
            print(find_exercise(args.name, exercises).hint)
            return 0
        if args.command == "verify":
            verify(exercises, (0, len(exercises)), verbose)
            return 0
        if args.command == "lsp":
            return _lsp()
        return _watch_command(exercises, verbose)
    except ExerciseNotFound as exc:
        print(exc)
        return 1
    except ExerciseFailed:
        return 1


if __name__ == "__main__":
    sys.exit(main())