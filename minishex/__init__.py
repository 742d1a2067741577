"""Building blocks of a small POSIX-style shell: environment, builtins, heredocs, command running."""

__version__ = "0.1.0"

__all__ = ["builtins", "cd", "env", "heredoc", "processes", "run", "tokens"]