# minishell

The pieces of a small command shell, usable from Python:

- `minishell.lexer`: `tokenize(line)` splits a command line into `Token`
  objects (`text` and a `TokenType` such as `WORD`, `PIPE`, `HEREDOC`).
- `minishell.syntax`: `check_syntax(tokens, line, env, reader)` raises
  `ShellSyntaxError` for bad lines such as a trailing `|`, two operators in a
  row or an unclosed quote. Here-documents that come before the error are
  still read.
- `minishell.expansion`: `expand_word(text, env)` removes quotes, substitutes
  `$NAME` and `$?`, and splits unquoted expansions on spaces.
- `minishell.redirect_expansion`: `expand_redirect_target(text, env)` gives
  the file name of a redirection, or `None` when it is ambiguous.
- `minishell.heredoc`: reading here-document bodies (`read_heredoc`,
  `open_heredoc`, which returns a file descriptor on an already removed
  temporary file).
- `minishell.parser`: `parse_pipeline(line, env, reader)` returns a list of
  `Command` objects, each with `args` and `redirections`
  (`Redirection` of type `RedirType.OUT`, `APPEND`, `IN` or `HEREDOC`).
- `minishell.builtins`: `echo` (with `-n`), `cd`, `pwd`, `export`, `unset`,
  `env` and `exit`, run through `run_builtin(args, env, out)`. `exit` raises
  `ShellExit` carrying the exit code.
- `minishell.environment`: the `Environment` of variables, and
  `resolve_command(paths, name)` to find an executable through `PATH`.
- `minishell.signals`: signal handlers for a prompt, for running children and
  for here-document input.
- `minishell.state`: `record_status` and `current_status`, the last exit
  status that `$?` expands to.

## Installation

```
pip install .
```

## Example

```python
import sys

from minishell.builtins import run_builtin
from minishell.environment import Environment
from minishell.expansion import expand_word
from minishell.lexer import tokenize
from minishell.parser import parse_pipeline
from minishell.syntax import ShellSyntaxError, check_syntax

env = Environment.from_strings(["HOME=/tmp", "USER=alice"])

print(expand_word('"$USER" said  hi', env))   # ['alice', 'said', 'hi']

line = "echo hi > out.txt | wc -l"
check_syntax(tokenize(line), line, env)
for command in parse_pipeline(line, env):
    print(command.args, [r.type for r in command.redirections])

try:
    check_syntax(tokenize("ls |"), "ls |", env)
except ShellSyntaxError as error:
    print(error)   # bash: syntax error near unexpected token `|'

run_builtin(["echo", "-n", "hi"], env, sys.stdout)
```

The `reader` argument of the parsing functions is a callable that takes a
prompt and returns the next line of here-document input, or `None` at end of
input; by default it reads from standard input.

## What it does not do

The package has no interactive prompt and installs no command. It does not
start external programs, connect commands with pipes, or attach redirections
to standard input and output: it parses lines and runs the built-in commands,
and leaves running the resulting `Command` list to the caller.

## Running the tests

```
pip install ".[test]"
pytest
```