"""Main CLI entry point."""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import get_settings
from ..core.exceptions import PrenError
from ..core.log import configure_logging
from ..core.types import PromptRecord
from ..storage import FilePromptStorage
from ..templates import TemplateEngine

console = Console()
err_console = Console(stderr=True, soft_wrap=True)


def parse_key_value(ctx, param, values):
    """Parse repeated/comma-separated KEY=value options into a dict."""
    arguments = {}
    for value in values:
        for item in value.split(","):
            if "=" not in item:
                raise click.BadParameter(f"invalid KEY=value: no `=` found in `{item}`")
            key, _, val = item.partition("=")
            arguments[key] = val
    return arguments


def split_tags(ctx, param, values):
    """Flatten repeated/comma-separated tag options."""
    return [t.strip() for value in values for t in value.split(",") if t.strip()]


def fail(error: PrenError) -> None:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise click.exceptions.Exit(1)


@click.group()
@click.version_option(version="0.2.0", prog_name="pren")
@click.option("-p", "--storage-path", default=None, help="Directory holding prompt files")
@click.pass_context
def cli(ctx, storage_path):
    """pren - a simple and ergonomic prompt engine.

    Store prompts once, then reuse and compose them.

    \b
    Examples:
        pren add -n greeting -c "Hello, {{name}}!"
        pren add -n formal -c "{{prompt:greeting}} Please enjoy your stay."
        pren get -n formal -a name=Bob
    """
    settings = get_settings()
    configure_logging(settings.logging)
    ctx.obj = FilePromptStorage(storage_path or settings.storage.base_path)


@cli.command()
@click.option("-n", "--name", required=True, help="Prompt name")
@click.option("-c", "--content", required=True, help="Template text")
@click.option("-d", "--description", default=None, help="Short description")
@click.option("-t", "--tags", multiple=True, callback=split_tags, help="Comma-separated tags")
@click.option("-o", "--overwrite", is_flag=True, help="Replace an existing prompt")
@click.pass_obj
def add(storage, name, content, description, tags, overwrite):
    """Add a prompt.

    Example:

        pren add -n greeting -c "Hello, {{name}}!" -t example,demo
    """
    record = PromptRecord(name=name, content=content, description=description, tags=tags)
    try:
        storage.save_prompt(record, overwrite=overwrite)
    except PrenError as e:
        fail(e)
    console.print(f"[green]Saved:[/green] {name}")


@cli.command()
@click.option("-n", "--name", required=True, help="Prompt name")
@click.option("-a", "--args", "arguments", multiple=True, callback=parse_key_value,
              help="Template arguments as KEY=value (comma-separated or repeated)")
@click.pass_obj
def get(storage, name, arguments):
    """Render a prompt and print it.

    Example:

        pren get -n formal -a name=Bob
    """
    engine = TemplateEngine(lookup=storage)
    try:
        rendered = engine.render(name, arguments)
    except PrenError as e:
        fail(e)
    click.echo(rendered)


@cli.command(name="list")
@click.option("-t", "--tag", "tags", multiple=True, callback=split_tags, help="Only prompts with any of these tags")
@click.pass_obj
def list_prompts(storage, tags):
    """List stored prompts."""
    try:
        records = storage.get_prompts_by_tag(tags) if tags else storage.list_prompts()
    except PrenError as e:
        fail(e)

    if not records:
        console.print("[yellow]No prompts found.[/yellow]")
        return

    table = Table(title="Prompts")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Tags", style="green")

    for record in records:
        table.add_row(record.name, record.description or "", ", ".join(record.tags))

    console.print(table)


@cli.command()
@click.option("-n", "--name", required=True, help="Prompt name")
@click.option("-f", "--force", is_flag=True, help="Skip confirmation")
@click.pass_obj
def delete(storage, name, force):
    """Delete a prompt."""
    try:
        if not storage.exists(name):
            fail(PrenError(f"Prompt not found: {name}"))

        if not force and not click.confirm(f"Are you sure you want to delete prompt '{name}'?"):
            console.print("Delete operation cancelled.")
            return

        storage.delete_prompt(name)
    except PrenError as e:
        fail(e)
    console.print(f"[green]Deleted:[/green] {name}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
