import json
import logging

import click

from .pipeline import PipelineResolver, ResolutionError, ResolverConfig, load_schema_document
from .pipeline.backends import BACKENDS
from .pipeline.config import ANNOTATION_STYLES


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="java", type=click.Choice(sorted(BACKENDS)))
@click.option(
    "--annotations",
    "-a",
    default="",
    type=click.Choice(["", *ANNOTATION_STYLES], case_sensitive=False),
    help="Serialization annotation style; enables polymorphic deserializers",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution progress")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, required=False, type=click.Path(resolve_path=True))
def raml_to_code(config, language, annotations, verbose, path, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = ResolverConfig.from_dict(json.load(f))
    else:
        config = ResolverConfig()

    try:
        document = load_schema_document(path)
        model = PipelineResolver(document, config, language, annotations).resolve()
    except ResolutionError as e:
        raise click.ClickException(str(e)) from e

    out = json.dumps(model.to_dict(), indent=2)
    if output is None:
        click.echo(out)
    else:
        with open(output, "w") as f:
            f.write(out + "\n")
