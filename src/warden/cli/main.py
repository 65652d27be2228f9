from pathlib import Path
from typing import NoReturn, Optional

import typer

from warden.config import load_config_from_path
from warden.exceptions import WardenError
from warden.loaders import load_store
from warden.pointer import SEPARATOR, split_path
from warden.store import Store
from warden.values import MISSING, to_plain
from .rendering import CliRenderer, LogLevel, OutputFormat, format_value, install

app = typer.Typer(
    name="warden",
    help="Inspect permission-aware configuration documents.",
    no_args_is_help=True,
)


class _State:
    renderer = CliRenderer()
    config_root: Optional[Path] = None


state = _State()


@app.callback()
def main(
    loglevel: LogLevel = typer.Option(
        LogLevel.INFO,
        "--loglevel",
        "-L",
        help="Minimum level of messages to show.",
        case_sensitive=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Directory to search upwards for pyproject.toml [tool.warden].",
    ),
):
    # The CLI is the composition root: it owns logging and message rendering.
    state.renderer = CliRenderer(loglevel=loglevel)
    state.config_root = config
    install(state.renderer)


def _open(document: Path) -> Store:
    config = load_config_from_path(state.config_root or Path.cwd())
    return load_store(document, config)


def _fail(message: str) -> NoReturn:
    state.renderer.render(message, "error")
    raise typer.Exit(code=1)


@app.command(help="Print the value stored at PATH.")
def read(
    document: Path = typer.Argument(..., help="JSON or YAML document."),
    path: str = typer.Argument(..., help="Colon-delimited field path."),
    output: OutputFormat = typer.Option(OutputFormat.JSON, "--format", "-f"),
):
    try:
        value = _open(document).read(path)
    except WardenError as e:
        _fail(str(e))

    if value is MISSING:
        state.renderer.render(f"Nothing stored at '{path}'.", "warning")
        raise typer.Exit(code=1)

    typer.echo(format_value(to_plain(value), output))


@app.command(help="Print the visible entries of the document, or of the node at PATH.")
def entries(
    document: Path = typer.Argument(..., help="JSON or YAML document."),
    path: Optional[str] = typer.Argument(None, help="Colon-delimited node path."),
    output: OutputFormat = typer.Option(OutputFormat.JSON, "--format", "-f"),
):
    try:
        node = _open(document)
        if path:
            node = node.read(path)
    except WardenError as e:
        _fail(str(e))

    if not isinstance(node, Store):
        _fail(f"'{path}' is not a store node.")

    typer.echo(format_value(to_plain(node), output))


@app.command(help="Show the resolved permission of the field at PATH.")
def access(
    document: Path = typer.Argument(..., help="JSON or YAML document."),
    path: str = typer.Argument(..., help="Colon-delimited field path."),
):
    *parents, key = split_path(path)
    try:
        node = _open(document)
        if parents:
            node = node.read(SEPARATOR.join(parents))
    except WardenError as e:
        _fail(str(e))

    if not isinstance(node, Store):
        _fail(f"'{SEPARATOR.join(parents)}' is not a store node.")

    permission = node.permission_for(key)
    typer.echo(
        f"{path}: {permission.value} "
        f"(read={'yes' if permission.readable else 'no'}, "
        f"write={'yes' if permission.writable else 'no'})"
    )


if __name__ == "__main__":
    app()
