"""
stackpolicy/cli/render.py

stackpolicy render — print the CloudFormation wire form of a policy
===================================================================

Usage:
    stackpolicy render <policy>                     Pretty JSON (default)
    stackpolicy render <policy> --format compact    RFC 8785 canonical JSON
    stackpolicy render <policy> --hash              SHA-256 of canonical form
    stackpolicy render <policy> --export body.json  Also write to a file
    stackpolicy render <policy> --strict            Unknown keys are errors

Exit codes:
    0  Rendered
    2  Error  (file missing, parse failure, invalid document)
"""

import sys
from pathlib import Path
from typing import Optional

import click

from stackpolicy.core.exceptions import StackPolicyError
from stackpolicy.core.modes import init_mode_from_env, init_strict_mode
from stackpolicy.core.scope import Scope
from stackpolicy.policy.stack_policy import StackPolicy
from stackpolicy.cli._output import _Color, emit_error


@click.command(name="render")
@click.argument("policy", type=click.Path(exists=False))
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "compact"], case_sensitive=False),
    default="json",
    show_default=True,
    help="Output format: json (pretty, document order) or compact (RFC 8785 canonical).",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="Indent width for --format json.",
)
@click.option(
    "--hash", "show_hash",
    is_flag=True,
    default=False,
    help="Print the SHA-256 of the canonical document instead of the document.",
)
@click.option(
    "--export",
    "export_path",
    type=click.Path(),
    default=None,
    metavar="PATH",
    help="Also write the rendered document to PATH.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat unknown keys as errors (overrides STACKPOLICY_MODE).",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress output. Use exit code only (0=rendered, 2=error).",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable ANSI color output.",
)
def render_command(
    policy:      str,
    fmt:         str,
    indent:      int,
    show_hash:   bool,
    export_path: Optional[str],
    strict:      bool,
    quiet:       bool,
    no_color:    bool,
) -> None:
    """
    Render a stack policy file to CloudFormation JSON.

    POLICY is a JSON or YAML stack policy document. Keys may be
    PascalCase, camelCase or snake_case.

    \b
    Examples:
      stackpolicy render policy.yaml
      stackpolicy render policy.yaml --format compact > body.json
      stackpolicy render policy.json --hash
    """
    _Color.configure(not no_color)
    mode = init_strict_mode() if strict else init_mode_from_env()

    root = Scope(None, "Cli")
    try:
        stack_policy = StackPolicy.from_file(root, "StackPolicy", Path(policy), mode)
    except StackPolicyError as e:
        emit_error("render", str(e), "text", quiet)
        sys.exit(2)

    if fmt == "compact":
        body = stack_policy.to_json()
    else:
        body = stack_policy.to_json(indent=indent)

    if export_path:
        try:
            Path(export_path).write_text(body + "\n", encoding="utf-8")
        except OSError as e:
            emit_error("render", f"Export failed: {e}", "text", quiet)
            sys.exit(2)

    if quiet:
        sys.exit(0)

    if show_hash:
        click.echo(stack_policy.policy_hash)
    else:
        click.echo(body)
