"""Catalog listing command."""

import click
from moodcapsule.domain.catalog import CATALOG


@click.command("shop")
def list_catalog():
    """List the purchasable diamond packs."""
    click.echo("\nDiamond packs:")
    click.echo("-" * 50)
    for unit in CATALOG:
        line = f"💎 {unit.credited_amount:>5}   ¥{unit.effective_price:>6}"
        if unit.discount_percent:
            line += f"  (-{unit.discount_percent}%, was ¥{unit.price})"
        if unit.is_popular:
            line += "  [popular]"
        click.echo(line)


def register_commands(cli):
    """Register catalog command with main CLI."""
    cli.add_command(list_catalog)
