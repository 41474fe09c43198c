"""``tenantcat names``: check names against the catalog's naming rules."""

import click
import click_extra as clickx

from tenantcat.domain import names as name_rules
from tenantcat.domain.errors import NameValidationError
from tenantcat.domain.tenant_key import derive_key, raw_key_encoding

from .helpers import error, success


@click.group(cls=clickx.ExtraGroup)
def names() -> None:
    """Naming rules for tenants and venue types."""


@names.command()
@click.argument("name")
@click.option(
    "--kind",
    "-k",
    type=click.Choice([kind.value for kind in name_rules.NameKind]),
    default=name_rules.NameKind.LEGAL_NAME.value,
    show_default=True,
    help="Which rule to check NAME against.",
)
@click.pass_context
def check(ctx: click.Context, name: str, kind: str) -> None:
    """Check NAME; exit with status 1 if it is not allowed.

    For legal tenant names the derived tenant key is printed as well.
    """
    rule = name_rules.NameKind(kind)
    try:
        name_rules.validate(name, rule)
    except NameValidationError as e:
        error(str(e))
        ctx.exit(1)
    success(f"'{name}' is a valid {rule.label}.")
    if rule is name_rules.NameKind.LEGAL_NAME:
        key = derive_key(name)
        click.echo(f"{key}\t{raw_key_encoding(key)}")
