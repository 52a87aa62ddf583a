import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from nextclient import __version__
from nextclient.codegen.codegen import Codegen
from nextclient.config import CodegenConfig, TargetConfig, get_config
from nextclient.exceptions import NextClientError
from nextclient.schema.loader import SchemaLoader
from nextclient.schema.scanner import ServiceProtocolScanner

console = Console()
app = typer.Typer(
    name='nextclient',
    help='Generate TypeScript RPC clients from service declaration files',
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option('--config', '-c', help='Path to configuration file (YAML or JSON)'),
    ] = None,
    source: Annotated[
        str | None,
        typer.Option('--source', '-s', help='Declaration directory (overrides config)'),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help='Output directory (overrides config)'),
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug logging')
    ] = False,
) -> None:
    """Generate TypeScript client code.

    If no config file is specified, will look for default config files
    in the current directory or the [tool.nextclient] table of pyproject.toml.
    Passing both --source and --output skips configuration entirely.

    Examples:
        nextclient generate
        nextclient generate --config my-config.yaml
        nextclient generate -s ./api -o ./web/src/Gen
    """
    _configure_logging(verbose)

    try:
        if source and output:
            codegen_config = CodegenConfig(targets=[TargetConfig(source=source, output=output)])
        elif source or output:
            console.print('[red]Error:[/red] --source and --output must be given together')
            raise typer.Exit(1)
        else:
            codegen_config = get_config(config)

        for target in codegen_config.targets:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating clients for {target.source} in {target.output}...',
                    total=None,
                )

                codegen = Codegen(target)
                written = codegen.generate()

                progress.update(
                    task, description=f'Code generation completed for {target.source}!'
                )
            console.print('[dim]Generated files:[/dim]')
            for path in written:
                console.print(f'  - {path}')

        console.print('[green]Successfully generated code[/green]')

    except NextClientError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)


@app.command()
def check(
    path: Annotated[str, typer.Argument(help='Declaration file to validate')],
) -> None:
    """Validate one declaration file and list what it declares."""
    try:
        input_file = SchemaLoader().load(path)
    except NextClientError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    scanner = ServiceProtocolScanner()
    for decl in input_file.types:
        service = scanner.scan(decl)
        if service is not None:
            console.print(f'service [bold]{service.name}[/bold] ({len(service.functions)} functions)')
            continue
        console.print(f'{decl.kind} [bold]{decl.name}[/bold]')
        for nested in decl.types:
            console.print(f'  {nested.kind} {nested.qualified_name}')
    console.print(f'[green]{input_file.name} is valid[/green]')


@app.command()
def version() -> None:
    """Show the version of nextclient."""
    console.print(f'nextclient version: {__version__}')


if __name__ == '__main__':
    app()
