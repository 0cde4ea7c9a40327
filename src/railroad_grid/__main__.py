"""CLI entry point for railroad-grid."""

import logging
import sys

import click

from railroad_grid import render_grammar
from railroad_grid.config import RenderConfig
from railroad_grid.ir.graph import GrammarIR
from railroad_grid.parsers import DEFAULT_RULE_NAME, parse
from railroad_grid.types import DEFAULT_GRID_SIZE, OutputFormat

logger = logging.getLogger("railroad_grid")


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _report(gir: GrammarIR) -> bool:
    """Print reference problems to stderr; True when a reference is undefined."""
    missing = gir.undefined_references()
    for rule, name in missing:
        click.echo(f"warning: rule '{rule}' references undefined rule '{name}'", err=True)
    for name in gir.unreachable_rules():
        click.echo(f"warning: rule '{name}' is unreachable from '{gir.rule_names[0]}'", err=True)
    return bool(missing)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--expr", "-e", "expr", type=str, default=None, help="Render this expression instead of a file")
@click.option("--rule", "-r", "rule_name", type=str, default=DEFAULT_RULE_NAME, help="Name for a bare expression")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.default().value,
    help="Output format",
)
@click.option("--ascii", "-a", "use_ascii", is_flag=True, help="Plain ASCII instead of Unicode for text output")
@click.option("--grid-size", "-g", "grid_size", type=click.IntRange(min=1), default=DEFAULT_GRID_SIZE,
              help="Pixels per grid unit for SVG output")
@click.option("--check", "check", is_flag=True, help="Report undefined and unreachable rules")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", count=True, help="Log more (repeat for debug output)")
def main(
    input: str | None,
    expr: str | None,
    rule_name: str,
    fmt: str,
    use_ascii: bool,
    grid_size: int,
    check: bool,
    output: str | None,
    verbose: int,
) -> None:
    """Grammar expressions to railroad diagrams (SVG or text)."""
    _configure_logging(verbose)

    if expr is not None:
        text = expr
    elif input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        grammar = parse(text, rule_name)
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)
    logger.info("parsed %d rule(s)", len(grammar.rules))

    if check and grammar.rules and _report(GrammarIR.from_ast(grammar)):
        sys.exit(1)

    config = RenderConfig(grid_size=grid_size, unicode=not use_ascii)
    rendered = render_grammar(grammar, fmt, config)

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
        logger.info("wrote %s", output)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
