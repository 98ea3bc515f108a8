"""
stackpolicy/cli/validate.py

stackpolicy validate — check that a policy file builds a valid document
=======================================================================

Usage:
    stackpolicy validate <policy>                   Human output (default)
    stackpolicy validate <policy> --format json     Machine-readable JSON
    stackpolicy validate <policy> --quiet           Exit code only
    stackpolicy validate <policy> --strict          Unknown keys are errors

Exit codes:
    0  Document is valid
    2  Error  (file missing, parse failure, invalid document)
"""

import json
import sys
from collections import Counter
from pathlib import Path
from typing import Dict

import click

from stackpolicy.core.exceptions import StackPolicyError
from stackpolicy.core.modes import init_mode_from_env, init_strict_mode
from stackpolicy.core.scope import Scope
from stackpolicy.policy.stack_policy import StackPolicy
from stackpolicy.cli._output import _Color, emit_error, row_info, row_ok


def summarize(stack_policy: StackPolicy) -> Dict[str, object]:
    """Counts per statement shape and effect, plus the canonical hash."""
    statements = stack_policy.document.statement
    shapes = Counter(type(s).__name__ for s in statements)
    effects = Counter(s.effect.value for s in statements)
    return {
        "statement_count": len(statements),
        "shapes":          dict(sorted(shapes.items())),
        "effects":         dict(sorted(effects.items())),
        "conditions":      sum(1 for s in statements if s.condition is not None),
        "policy_hash":     stack_policy.policy_hash,
    }


@click.command(name="validate")
@click.argument("policy", type=click.Path(exists=False))
@click.option(
    "--format", "fmt",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format: human (default) or json (CI/automation).",
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
    help="Suppress all output. Use exit code only (0=valid, 2=error).",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable ANSI color output.",
)
def validate_command(
    policy:   str,
    fmt:      str,
    strict:   bool,
    quiet:    bool,
    no_color: bool,
) -> None:
    """
    Validate a stack policy file.

    POLICY is a JSON or YAML stack policy document.

    \b
    Examples:
      stackpolicy validate policy.yaml
      stackpolicy validate policy.json --format json
      stackpolicy validate policy.yaml --strict --quiet && echo "clean"
    """
    _Color.configure(not no_color)
    mode = init_strict_mode() if strict else init_mode_from_env()

    root = Scope(None, "Cli")
    try:
        stack_policy = StackPolicy.from_file(root, "StackPolicy", Path(policy), mode)
        summary = summarize(stack_policy)
    except StackPolicyError as e:
        emit_error("validate", str(e), fmt, quiet)
        sys.exit(2)

    if quiet:
        sys.exit(0)

    if fmt == "json":
        click.echo(json.dumps({
            "stackpolicy_validate": {
                "policy": str(policy),
                "valid":  True,
                "mode":   mode.mode.value,
                **summary,
            }
        }, indent=2))
        return

    bar = "═" * 68
    click.echo()
    click.echo(_Color.bold(f"  {bar}"))
    click.echo(_Color.bold("  stackpolicy  ·  Stack Policy Validation"))
    click.echo(_Color.bold(f"  {bar}"))
    click.echo()
    click.echo(row_info("Policy", str(policy)))
    click.echo(row_info("Mode", mode.mode.value))
    click.echo(row_info("Statements", str(summary["statement_count"])))
    for name, count in summary["shapes"].items():
        click.echo(row_info("  " + name, str(count)))
    for effect, count in summary["effects"].items():
        click.echo(row_info(effect, str(count)))
    click.echo(row_info("Conditions", str(summary["conditions"])))
    click.echo(row_info("Policy hash", summary["policy_hash"]))
    click.echo()
    click.echo(row_ok("Result", "valid"))
    click.echo()
