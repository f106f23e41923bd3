"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsync.cli.commands import rules_cmd, run_cmd, run_rule_cmd, show_cmd, update_cmd


app = typer.Typer(name="mdsync", no_args_is_help=True, help="Update Markdown notes from their templates")

app.command(name="update")(update_cmd)
app.command(name="run-rule")(run_rule_cmd)
app.command(name="run")(run_cmd)
app.command(name="rules")(rules_cmd)
app.command(name="show")(show_cmd)
