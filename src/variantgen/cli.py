from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
import json

from pydantic import ValidationError
import typer

from variantgen.config import GeneratorConfig, generator_config, is_dotted_name
from variantgen.exceptions import GenerationError
from variantgen.ingest import load_definition
from variantgen.json_types import JSONObject
from variantgen.model import RecordDefinition, SumTypeDefinition
from variantgen.schema import GenerationPlanDTO
from variantgen.synthesis.declarations import plan_to_payload
from variantgen.synthesis.emission import render_declarations
from variantgen.synthesis.naming import is_identifier
from variantgen.synthesis.pipeline import generate

app = typer.Typer(add_completion=False)

GENERATION_ERROR_EXIT = 2


def _read_payload(input_path: Path) -> JSONObject:
    try:
        loaded = json.loads(input_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read payload {input_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON payload: {exc}") from exc
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Definition payload must be a JSON object.")
    return loaded


def _load(input_path: Path) -> SumTypeDefinition | RecordDefinition:
    payload = _read_payload(input_path)
    try:
        return load_definition(payload)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid definition payload: {exc}") from exc


def _config(
    config_path: Optional[Path],
    directive_tag: Optional[str],
    runtime_module: Optional[str],
) -> GeneratorConfig:
    if directive_tag is not None and not is_identifier(directive_tag):
        raise typer.BadParameter(
            f"--directive-tag {directive_tag!r} is not a Python identifier."
        )
    if runtime_module is not None and not is_dotted_name(runtime_module):
        raise typer.BadParameter(
            f"--runtime-module {runtime_module!r} is not a dotted module name."
        )
    return generator_config(
        config_path=config_path,
        overrides={"directive_tag": directive_tag, "runtime_module": runtime_module},
    )


def _write_output(output_path: Optional[Path], text: str) -> None:
    if output_path is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")


def _run(
    *,
    input_path: Path,
    output_path: Optional[Path],
    config: GeneratorConfig,
    produce: Callable[[SumTypeDefinition | RecordDefinition, GeneratorConfig], str],
) -> None:
    try:
        definition = _load(input_path)
        text = produce(definition, config)
    except GenerationError as exc:
        typer.echo(f"error [{exc.code}]: {exc}", err=True)
        raise typer.Exit(code=GENERATION_ERROR_EXIT)
    _write_output(output_path, text)


def _render_source(
    definition: SumTypeDefinition | RecordDefinition, config: GeneratorConfig
) -> str:
    return render_declarations(generate(definition, config), config)


def _render_plan(
    definition: SumTypeDefinition | RecordDefinition, config: GeneratorConfig
) -> str:
    payload = plan_to_payload(definition.name, generate(definition, config))
    normalized = GenerationPlanDTO.model_validate(payload).model_dump()
    return json.dumps(normalized, indent=2, sort_keys=True)


@app.command("generate")
def generate_command(
    input_path: Path = typer.Option(
        ..., "--input", help="JSON payload describing the tagged union."
    ),
    output_path: Optional[Path] = typer.Option(
        None, "--output", help="Write generated Python source to this path."
    ),
    config_path: Optional[Path] = typer.Option(None, "--config"),
    directive_tag: Optional[str] = typer.Option(None, "--directive-tag"),
    runtime_module: Optional[str] = typer.Option(None, "--runtime-module"),
) -> None:
    """Generate one dataclass per variant, with conversions to and from the union."""
    _run(
        input_path=input_path,
        output_path=output_path,
        config=_config(config_path, directive_tag, runtime_module),
        produce=_render_source,
    )


@app.command("plan")
def plan_command(
    input_path: Path = typer.Option(
        ..., "--input", help="JSON payload describing the tagged union."
    ),
    output_path: Optional[Path] = typer.Option(
        None, "--output", help="Write the declaration plan JSON to this path."
    ),
    config_path: Optional[Path] = typer.Option(None, "--config"),
    directive_tag: Optional[str] = typer.Option(None, "--directive-tag"),
    runtime_module: Optional[str] = typer.Option(None, "--runtime-module"),
) -> None:
    """Print the declarations that would be generated, as JSON."""
    _run(
        input_path=input_path,
        output_path=output_path,
        config=_config(config_path, directive_tag, runtime_module),
        produce=_render_plan,
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
