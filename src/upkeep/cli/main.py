import typer

from upkeep.cli.base_branches_cmd import base_branches as base_branches_command
from upkeep.cli.run import run as run_command
from upkeep.cli.sort_cmd import sort as sort_command

app = typer.Typer(name="upkeep", help="Dependency update branch orchestration")
app.command(name="run")(run_command)
app.command(name="base-branches")(base_branches_command)
app.command(name="sort")(sort_command)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


if __name__ == "__main__":
    app()
