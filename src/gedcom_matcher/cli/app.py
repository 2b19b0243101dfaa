
from __future__ import annotations

import typer

from gedcom_matcher.cli.commands.merge import merge_command

# A single registered command, so Typer runs it directly:
#   gedcom-matcher OLD NEW [--out FILE]
app = typer.Typer(
    name="gedcom-matcher",
    help="Reconcile a re-imported GEDCOM file with its original",
    add_completion=False,
)

app.command("merge")(merge_command)


def main():
    app()


if __name__ == "__main__":
    main()
