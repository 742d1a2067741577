# minishex

Building blocks for a small POSIX-style shell, usable as a library. It works
on command lines that have already been split into classified tokens. It
provides:

- an ordered environment of shell variables,
- the `cd`, `env`, `exit` and `pwd` builtins and an `export` helper,
- heredoc reading,
- command resolution through `PATH` or the current directory,
- running one command or builtin,
- tracking, signalling and reaping child processes.

## Installation

```
pip install .
```

Install the test extra to run the test suite:

```
pip install .[test]
pytest
```

## Modules

### `minishex.tokens`

- `TokenType` lists the token kinds: `COMMAND`, `BUILTIN`, `ARGUMENT`,
  `PIPE`, `INPUT`, `HEREDOC`, `OUTPUT_TRUNCATE`, `OUTPUT_APPEND`, `FILE`,
  `DELIMITER`, `DELIMITER_QUOTED` and `CONTENT`.
  - `is_redirection` tells whether a kind is a redirection operator.
  - `operand_type` gives the kind that must follow a redirection operator.
- `Token(type, text)` is one token.
- `find_first(tokens, token_type)` returns the index of the first token of a
  kind, or `None`.

### `minishex.env`

- `Variable(name, value)` is one variable. A value of `None` means the
  variable is declared but not assigned.
- `Environment` is an ordered collection of variables. Its methods are:
  - `from_mapping`, `get`, `append`, `prepend`, `remove` and `clear`,
  - `len()`, iteration and `in`,
  - `assigned_lines()` and `print_assigned(file)`, which cover only the
    variables that have a value,
  - `to_envp()`, which gives `NAME=value` entries, or just `NAME` for an
    unassigned variable.

### `minishex.processes`

- `ProcessGroup` is an ordered set of child pids. Its methods are:
  - `add`, `add_front`, `remove` and `clear`,
  - `kill(sig)`, which signals every process and forgets each one once it has
    been signalled,
  - `wait(stderr)`, which waits for every process in order and returns the
    exit code of the last one.
- `status_to_exit_code(status, stderr)` turns a raw wait status into a shell
  exit code. A process killed by a signal gives 128 plus the signal number.
  For SIGQUIT it writes `Quit (core dumped)` on stderr, for SIGSEGV it writes
  `Segmentation fault (core dumped)`, and for SIGINT it writes an empty line.

### `minishex.heredoc`

- `read_heredoc(delimiter, read_line, stderr)` reads lines with the prompt
  `> ` until it meets the delimiter or the end of input. It returns the body
  and whether the delimiter was reached. At the end of input it writes
  `Unexpected eof` on stderr. A `KeyboardInterrupt` while reading becomes
  `HeredocInterrupted`, whose `exit_code` is 130.
- `collect_heredocs(tokens, env, read_line, expand, stderr)` reads the body
  for every `DELIMITER` and `DELIMITER_QUOTED` token, then turns the token
  into `CONTENT` holding that body. Variable expansion is up to the caller.
  When an `expand(env, text)` callable is given, it is applied to bodies that
  were ended by an unquoted delimiter and that contain `$`.
- `append_line(buffer, line)` appends a line and a newline to a body.

### `minishex.cd`

- `builtin_cd(env, args, stderr)` changes the working directory. It uses
  `CDPATH` for relative paths and `HOME` when no argument is given, and it
  updates `PWD` and `OLDPWD`.
- `raw_curpath(env, directory)` builds the destination path before
  canonicalization.
- `canonicalize(curpath)` removes `.` and `..` components and redundant
  slashes. It checks that each component removed by a `..` is an existing
  directory, and raises `CdError` if one is not.

### `minishex.builtins`

- `builtin_env`, `builtin_exit` and `builtin_pwd` take an environment and the
  argument list, and return an exit status.
  - `builtin_exit` leaves by raising `ShellExit`, which carries the status.
    It writes `exit` on stderr unless a `QUIET_EXIT` variable exists.
- `export_one(env, text, stderr)` adds or modifies one `NAME` or
  `NAME=value`.
- `surprise(stdout)` prints a small drawing.
- `run_builtin(name, env, args, status, stdout, stderr)` runs `cd`, `env`,
  `exit` or `pwd`. `is_builtin(name)` tells whether a name is one of those.

### `minishex.run`

- `search_in_path(command, env)`, `search_from_cwd(command)` and
  `resolve_command(command, env)` find the executable for a command.
  - `resolve_command` raises `CommandError` for a command that is not found,
    is missing, is a directory, or is not executable. The error carries an
    `exit_code` of 127 or 126.
- `run(tokens, env, status, stdout, stderr)` runs one command or builtin and
  returns its exit status.
  - A builtin runs in the current process, after a `QUIET_EXIT` variable has
    been appended to the environment.
  - Any other command runs as a child process. The child inherits the
    standard file descriptors and receives the assigned variables as its
    environment.

## Example

```python
from minishex.env import Environment
from minishex.run import run
from minishex.tokens import Token, TokenType

env = Environment.from_mapping({"PATH": "/usr/bin:/bin"})
tokens = [
    Token(TokenType.COMMAND, "echo"),
    Token(TokenType.ARGUMENT, "hello"),
]
status = run(tokens, env)
print(status)
```

## Exit codes

| Code | Meaning |
| --- | --- |
| 1 | Ordinary failures |
| 2 | `exit` given a non-numeric argument, or `pwd` given an option |
| 125 | An option given to `env` |
| 126 | A command that cannot be executed |
| 127 | A command that is not found |
| 128 + n | A child killed by signal n |
| 130 | A heredoc interrupted by Ctrl-C |

## What the package does not do

- It has no tokenizer or parser. Tokens must be built by the caller.
- It does not apply `<`, `<<`, `>` or `>>` redirections.
- It does not connect commands with pipes, so it cannot run a command line
  that holds several commands.
- It has no interactive prompt and no command-line entry point.
- `export` has no dispatching entry of its own in `run_builtin`. `unset` and
  `echo` are not provided.