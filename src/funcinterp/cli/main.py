"""funcinterp CLI entry point."""

import json
import logging
import sys
from pathlib import Path

import click

from funcinterp.config import InterpreterConfig
from funcinterp.expressions.errors import ExpressionError
from funcinterp.interpreter import Interpreter


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with interpreter settings.",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured log level.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None):
    """Evaluate function-call expressions like ADD(1,MULTIPLY(2,3))."""
    try:
        if config_path is not None:
            config = InterpreterConfig.from_yaml(config_path)
        else:
            config = InterpreterConfig.from_env()
        if log_level is not None:
            config = InterpreterConfig.from_mapping({"log_level": log_level}, base=config)
    except (OSError, ValueError) as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        raise SystemExit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Interpreter(config)


@cli.command()
@click.option("--prompt", default="> ", show_default=True, help="Prompt shown before each line.")
@click.pass_obj
def repl(interpreter: Interpreter, prompt: str):
    """Read expressions line by line and print each result.

    Errors are reported and the loop continues with the next line.
    Stops at end of input.
    """
    while True:
        click.echo(prompt, nl=False)
        line = sys.stdin.readline()
        if not line:
            click.echo()
            break

        source = line.strip()
        if not source:
            continue

        try:
            click.echo(interpreter.interpret(source))
        except ExpressionError as e:
            click.echo(f"Error: {e}")


@cli.command("eval")
@click.argument("expression")
@click.pass_obj
def eval_expression(interpreter: Interpreter, expression: str):
    """Evaluate a single EXPRESSION and print the result."""
    try:
        result = interpreter.interpret(expression)
    except ExpressionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    click.echo(result)


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON.")
@click.pass_obj
def functions(interpreter: Interpreter, as_json: bool):
    """List the functions expressions can call."""
    registry = interpreter.registry

    if as_json:
        click.echo(json.dumps(registry.export_documentation(), indent=2))
        return

    for func_def in registry.list_all():
        params = ", ".join(p.name for p in func_def.parameters)
        click.echo(f"{func_def.name}({params})")
        if func_def.description:
            click.echo(f"    {func_def.description}")
        for example in func_def.examples:
            click.echo(f"    e.g. {example}")


def main():
    cli(prog_name="funcinterp")
