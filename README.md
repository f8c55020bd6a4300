# rustlings

A small command-line companion for working through a collection of
compiler exercises. Each exercise is a source file that fails to build, fails
its tests or fails the linter until you fix it. `rustlings` calls `rustc`
(and `cargo clippy` for lint exercises) on the exercises, shows the errors,
keeps track of what you have done and gives you a hint when you are stuck.

## Getting started

Run the command from the exercises directory, the one that holds
`info.toml`:

```
rustlings
```

Without a subcommand it prints a welcome message and a short introduction.
It exits with status 1 when `info.toml` is missing from the current
directory or when `rustc --version` cannot be run.

The recommended way to work is watch mode:

```
rustlings watch
```

It verifies the exercises in order and stops at the first one that is not
solved. It then re-checks whenever a `.rs` file under `./exercises` is
created or modified: the changed exercise first, then the others still
pending.

## Commands

| Command | What it does |
| --- | --- |
| `rustlings verify` | Verify every exercise in the order of `info.toml`; exit 1 at the first failure. |
| `rustlings watch` | Like `verify`, then keep re-verifying as you edit files. |
| `rustlings run NAME` | Compile and run (or test) a single exercise. `NAME` may be `next` for the first unsolved one. |
| `rustlings reset NAME` | Reset an exercise by running `git stash -- <path>` on its file. |
| `rustlings hint NAME` | Print the hint for an exercise. |
| `rustlings list` | List the exercises with their path and status, followed by your progress. |
| `rustlings lsp` | Write `rust-project.json` with one crate per `.rs` file under `exercises/`, for rust-analyzer. |

An unknown exercise name prints a message and exits with status 1.

Global options:

* `--nocapture` shows the output of test exercises.
* `-v`, `--version` prints the version and exits.

Options of `rustlings list`:

* `-p`, `--paths` shows only the paths.
* `-n`, `--names` shows only the names.
* `-f`, `--filter PATTERNS` keeps exercises whose name or path contains one of
  the comma-separated patterns (the patterns are lower-cased).
* `-u`, `--unsolved` shows only the exercises not yet solved.
* `-s`, `--solved` shows only the solved exercises.

For example:

```
rustlings list --unsolved --filter iterators,traits
rustlings run next
rustlings hint quiz1
```

## Watch mode shell

While `rustlings watch` is running you can type:

* `hint` – print the hint for the exercise that failed last
* `clear` – clear the screen
* `quit` – leave watch mode
* `!<cmd>` – run a command, such as `!rustc --explain E0381`
* `help` – show this list

## Marking an exercise as done

An exercise that builds and passes still counts as pending while its source
has a line like

```
// I AM NOT DONE
```

When such an exercise passes, `rustlings` shows the lines around the marker.
Once you are happy with your solution, delete that line and `rustlings`
moves on to the next exercise.

## The exercise list

`info.toml` lists the exercises in the order they should be done:

```toml
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"
hint = "Remove the I AM NOT DONE comment to move on."
```

`mode` is one of:

* `compile` – build the file with `rustc` and run the program,
* `test` – build it with `rustc --test` and run the tests,
* `clippy` – build it, then run `cargo clippy` with warnings denied, using a
  manifest written to `exercises/clippy/Cargo.toml`.

## Environment

Set `NO_EMOJI` to any value to replace the emoji in the output with plain
characters. Set `RUST_SRC_PATH` to tell `rustlings lsp` where the standard
library sources live instead of asking `rustc --print sysroot`.

## Using it as a library

The command line is built from importable pieces:

* `rustlings.exercise` – `Exercise`, `Mode`, `State`, `load_exercises` and the
  `CompilationFailed` / `RunFailed` exceptions.
* `rustlings.verify` – `verify`, `test`, `prompt_for_completion` and
  `ExerciseFailed`.
* `rustlings.run` – `run` and `reset`.
* `rustlings.project` – `RustAnalyzerProject` and `Crate`.
* `rustlings.cli` – `main`, `build_parser`, `find_exercise`, `list_exercises`,
  `handle_shell_command` and `watch`.

## Reference solutions

The `rustlings.exercises` package holds worked solutions of several exercise
topics as plain, importable functions and classes:

* `quizzes` – `calculate_price_of_apples`, `transformer` with `Command`, and
  `ReportCard`.
* `basics` – `sale_price`, `is_even`, `square`, `bigger`, `foo_if_fizz`,
  `maybe_icecream`.
* `strings` – `current_favorite_color`, `is_a_color_word`, `trim_me`,
  `compose_me`, `replace_me`.
* `structs` – `ColorClassicStruct`, `ColorTupleStruct`, `UnitLikeStruct`,
  `Order`, `create_order_template`, `Package`.
* `messages` – a `State` changed by `Move`, `Echo`, `ChangeColor` and `Quit`.
* `errors` – `generate_nametag_text`, `total_cost`, `purchase`,
  `PositiveNonzeroInteger`, `parse_pos_nonzero`.
* `hashmaps` – `fruit_basket`, `fill_fruit_basket`, `build_scores_table`.
* `iterators` – `capitalize_first`, `divide`, `factorial`, `count_iterator`
  and friends.
* `traits` – `append_bar`, `Licensed`, `compare_license_types`, `some_func`.
* `containers` – `vec_loop`, `vec_map`, `Wrapper`, `Cons` / `Nil`, `Cow` with
  `abs_all`, and `longest`.

## What it does not do

The reference solutions do not cover the type-conversion exercises (parsing a
person from text, converting tuples or lists into colours). The exercise
runner itself does not ship any exercises: it works on the `info.toml` and
`exercises/` directory you run it in.