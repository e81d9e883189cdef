from __future__ import annotations

import logging

import click

from visgate import __version__
from visgate.commands.assert_image import assert_image_cmd
from visgate.commands.compare_dir import compare_dir_cmd


def _configure_logging(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Send visgate log records to stderr, at DEBUG level with --verbose."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("visgate").setLevel(logging.DEBUG if value else logging.WARNING)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="visgate")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_configure_logging,
    help="Log debug details to stderr.",
)
def main() -> None:
    """visgate: visual-regression image comparison and gating."""


main.add_command(assert_image_cmd, name="assert-image")
main.add_command(compare_dir_cmd, name="compare-dir")


if __name__ == "__main__":
    main()
