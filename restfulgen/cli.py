import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from restfulgen.codegen.codegen import Codegen
from restfulgen.config import CodegenConfig, DocumentConfig, get_config
from restfulgen.exceptions import RestfulGenError

console = Console()
app = typer.Typer(
    name='restfulgen',
    help='Generate typed restful-react components from OpenAPI specifications',
    no_args_is_help=True,
)


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    file: Annotated[
        str | None,
        typer.Option(
            '--file', '-f', help='OpenAPI document to convert (path or URL)'
        ),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help='File to write the components to'),
    ] = None,
    hooks: Annotated[
        bool,
        typer.Option('--hooks/--no-hooks', help='Emit useGet and useMutate hooks (with --file)'),
    ] = True,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug logging')
    ] = False,
) -> None:
    """Generate restful-react components from an OpenAPI document.

    Either pass a document with --file and --output, or let the command read
    a configuration file (restfulgen.yaml or [tool.restfulgen] in
    pyproject.toml).

    Examples:
        restfulgen generate
        restfulgen generate --config my-config.yaml
        restfulgen generate -f petstore.yaml -o src/petstore.tsx
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        if file or output:
            if not (file and output):
                raise typer.BadParameter('--file and --output must be used together')
            settings = CodegenConfig(
                documents=[DocumentConfig(source=file, output=output, hooks=hooks)]
            )
        else:
            settings = get_config(config)

        for document_config in settings.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating components for {document_config.source}...',
                    total=None,
                )

                codegen = Codegen(document_config)
                codegen.generate()

                progress.update(
                    task, description=f'Code generation completed for {document_config.source}!'
                )
            console.print(
                f'[green]Successfully generated code for {document_config.source}[/green]'
            )
            console.print(f'  - {document_config.output}')

    except typer.BadParameter:
        raise
    except RestfulGenError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of restfulgen."""
    from restfulgen._version import version

    console.print(f'restfulgen version: {version}')


if __name__ == '__main__':
    app()
