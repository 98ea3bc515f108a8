"""
Terminal and JSON output shared by `stackpolicy render` and
`stackpolicy validate`.

The rendered StackPolicyBody always goes to stdout uncolored so it can be
piped into `aws cloudformation set-stack-policy`. Color is only applied to
the validate report and to error lines on stderr.
"""

import json
import sys

import click


class _Color:
    """
    ANSI styling for the validate report and error lines.
    Off when stdout is not a TTY or --no-color is given.
    """
    _on: bool = True

    @classmethod
    def configure(cls, enabled: bool) -> None:
        cls._on = enabled and sys.stdout.isatty()

    @classmethod
    def green(cls, s: str) -> str:
        return f"\033[32m{s}\033[0m" if cls._on else s

    @classmethod
    def red(cls, s: str) -> str:
        return f"\033[31m{s}\033[0m" if cls._on else s

    @classmethod
    def bold(cls, s: str) -> str:
        return f"\033[1m{s}\033[0m" if cls._on else s

    @classmethod
    def dim(cls, s: str) -> str:
        return f"\033[2m{s}\033[0m" if cls._on else s


def row_ok(label: str, value: str) -> str:
    """Report row with a check mark, e.g. the final 'Result  valid'."""
    label_col = _Color.dim(f"{label:<16}")
    return f"  {label_col}  {_Color.green('✅')}  {value}"


def row_info(label: str, value: str) -> str:
    label_col = _Color.dim(f"{label:<16}")
    return f"  {label_col}     {value}"


def emit_error(command: str, msg: str, fmt: str, quiet: bool) -> None:
    """
    Report a StackPolicyError before the command exits with code 2.

    fmt="json" prints {"stackpolicy_<command>": {"error": msg, "valid": false}}
    on stdout, so scripts reading `validate --format json` always get one
    JSON object. Any other fmt prints a red line on stderr. quiet prints
    nothing; the exit code alone reports the failure.
    """
    if quiet:
        return
    if fmt == "json":
        click.echo(json.dumps({
            f"stackpolicy_{command}": {
                "error": msg,
                "valid": False,
            }
        }))
    else:
        click.echo(
            _Color.red(f"\n  ❌  ERROR: {msg}\n"),
            err=True,
        )
