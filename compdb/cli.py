"""CLI entry point for compdb."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from compdb.core.database import JSONCompilationDatabase
from compdb.core.exceptions import CompDBError
from compdb.core.models import CompileCommand
from compdb.core.plugins import CompilationDatabase, create_default_registry
from compdb.core.tokenizer import CommandLineParser, unescape_command_line

app = typer.Typer(
    name="compdb",
    help="Query JSON compilation databases (compile_commands.json).",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

BuildDirOption = Annotated[
    Path,
    typer.Option(
        "--build-dir", "-p", help="Build directory; parent directories are searched too"
    ),
]
DatabaseOption = Annotated[
    Path | None, typer.Option("--database", "-d", help="Path to a compile_commands.json file")
]
JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]
StrictOption = Annotated[
    bool, typer.Option("--strict", help="Reject commands with unterminated quotes or escapes")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
) -> None:
    """Query JSON compilation databases."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def load_database(
    build_dir: Path, database: Path | None, strict: bool = False
) -> CompilationDatabase:
    """Load the database file, or auto-detect one from the build directory."""
    try:
        if database is not None:
            return JSONCompilationDatabase.load_from_file(database, strict_commands=strict)
        return create_default_registry(strict_commands=strict).autodetect_from_directory(
            build_dir
        )
    except CompDBError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def format_command(command: CompileCommand) -> str:
    """Format a compile command as a single display line."""
    return " ".join(_quote_argument(arg) for arg in command.invocation)


def _quote_argument(argument: str) -> str:
    if argument and not any(c in argument for c in " \"'\\"):
        return argument
    return '"' + argument.replace("\\", "\\\\").replace('"', '\\"') + '"'


@app.command()
def files(
    build_dir: BuildDirOption = Path("."),
    database: DatabaseOption = None,
    output_json: JsonOption = False,
) -> None:
    """List every file in the compilation database."""
    db = load_database(build_dir, database)
    all_files = db.get_all_files()

    if output_json:
        print(json.dumps(all_files))
        return

    if not all_files:
        console.print("[dim]No files in the compilation database[/]")
        return
    for file in all_files:
        console.print(f"[cyan]{escape(file)}[/cyan]")


@app.command()
def commands(
    file: Annotated[str, typer.Argument(help="Source file to look up")],
    build_dir: BuildDirOption = Path("."),
    database: DatabaseOption = None,
    output_json: JsonOption = False,
) -> None:
    """Show the compile commands for a source file."""
    db = load_database(build_dir, database)
    results = db.get_compile_commands(str(Path(file).absolute()))

    if output_json:
        print(json.dumps([c.to_dict() for c in results]))
        return

    if not results:
        console.print(f"No compile commands for '[cyan]{escape(file)}[/cyan]'")
        raise typer.Exit(code=1)

    for command in results:
        console.print(f"[dim]{escape(command.directory)}[/]")
        console.print(f"  {escape(format_command(command))}")


@app.command()
def dump(
    build_dir: BuildDirOption = Path("."),
    database: DatabaseOption = None,
    output_json: JsonOption = False,
) -> None:
    """Print every compile command in the database."""
    db = load_database(build_dir, database)
    all_commands = db.get_all_compile_commands()

    if output_json:
        print(json.dumps([c.to_dict() for c in all_commands]))
        return

    table = Table("Directory", "Command")
    for command in all_commands:
        table.add_row(escape(command.directory), escape(format_command(command)))
    console.print(table)


@app.command()
def check(
    build_dir: BuildDirOption = Path("."),
    database: DatabaseOption = None,
    strict: StrictOption = False,
    output_json: JsonOption = False,
) -> None:
    """Validate a compilation database and show its size."""
    db = load_database(build_dir, database, strict=strict)
    if isinstance(db, JSONCompilationDatabase):
        stats = db.stats().to_dict()
    else:
        stats = {"files": len(db.get_all_files()), "commands": len(db.get_all_compile_commands())}

    if output_json:
        print(json.dumps({"valid": True, **stats}))
        return

    console.print("[green]Valid compilation database[/green]")
    console.print(f"  Files: {stats['files']}")
    console.print(f"  Commands: {stats['commands']}")


@app.command()
def tokenize(
    command: Annotated[str, typer.Argument(help="Escaped command string")],
    strict: StrictOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show how a "command" string splits into arguments."""
    if strict:
        try:
            arguments = unescape_command_line(command, strict=True)
        except CompDBError as e:
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(code=1) from e
        truncated = False
    else:
        parser = CommandLineParser(command)
        arguments = parser.parse()
        truncated = parser.truncated

    if output_json:
        print(json.dumps({"arguments": arguments, "truncated": truncated}))
        return

    for i, argument in enumerate(arguments):
        console.print(f"[dim]{i:>3}[/] {escape(argument)}")
    if truncated:
        console.print("[yellow]Command ends inside a quote or escape; last argument truncated[/]")


if __name__ == "__main__":
    app()
