"""
stackpolicy/cli/__init__.py

stackpolicy CLI — root Click command group.

This file is the sole entry point for the `stackpolicy` terminal command.
It is registered in pyproject.toml as:

    [project.scripts]
    stackpolicy = "stackpolicy.cli:cli"

Adding a new command:
    1. Create stackpolicy/cli/your_command.py with a @click.command()
    2. Import it here
    3. cli.add_command(your_command)
"""

import click

from stackpolicy.cli.render import render_command
from stackpolicy.cli.validate import validate_command


@click.group()
@click.version_option(package_name="stackpolicy")
def cli() -> None:
    """
    stackpolicy — CloudFormation stack policy tooling.

    \b
    Commands:
      render    Print the CloudFormation JSON body of a policy file.
      validate  Check a policy file and summarize its statements.

    \b
    Quick start:
      stackpolicy validate policy.yaml
      stackpolicy render policy.yaml --format compact
      STACKPOLICY_MODE=strict stackpolicy render policy.yaml
    """
    pass


cli.add_command(render_command)
cli.add_command(validate_command)
