"""CLI entrypoint: Typer app definition and command registration"""

import typer

from semdoc.cli.commands import build_cmd, parse_cmd, sequence_cmd


app = typer.Typer(name="semdoc", no_args_is_help=True, help="Rich-document tree to semantic content parser")

app.command(name="parse")(parse_cmd)
app.command(name="sequence")(sequence_cmd)
app.command(name="build")(build_cmd)
