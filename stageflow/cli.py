"""Command line interface for inspecting and running stageflow workflows."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from stageflow import WorkflowController, load_config
from stageflow.content.console import ConsoleContentDispatcher
from stageflow.errors import InvocationSyntaxError, StageflowError
from stageflow.parsing import parse_bindings, parse_definition
from stageflow.registry import WorkflowRegistry, load_registry
from stageflow.values import coerce_text

app = typer.Typer(help="CLI for stageflow workflows")

workflow_app = typer.Typer(help="Commands for inspecting workflow definitions")

app.add_typer(workflow_app, name="workflow")


@app.callback()
def main() -> None:
    """Stageflow CLI entry point."""
    pass


def _format_tokens(tokens) -> str:
    if tokens is None:
        return ""
    return "(" + ", ".join(tokens) + ")"


def _open_registry(registry_file: Optional[Path]) -> WorkflowRegistry:
    path = registry_file or load_config().registry_file
    if not path:
        typer.secho(
            "No registry file given (use --registry or STAGEFLOW_REGISTRY)",
            fg=typer.colors.RED,
        )
        raise typer.Exit(code=1)
    if not Path(path).exists():
        typer.secho(f"Registry file not found: {path}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    try:
        return load_registry(path)
    except StageflowError as exc:
        typer.secho(f"Invalid registry: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


@workflow_app.command("parse")
def workflow_parse(definition: str) -> None:
    """
    Show how a definition string is split into stages.

    Example:
        stageflow workflow parse "Intro;Form(name, :Title);Confirm(!name)"
        # Output: 0  Intro
        #         1  Form(name, :Title)
        #         2  Confirm(!name)
    """
    parsed = parse_definition(definition)
    if not parsed.stages:
        typer.secho("Definition has no stages", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    for index, (name, tokens) in enumerate(zip(parsed.stages, parsed.arguments)):
        typer.echo(f"{index}\t{name}{_format_tokens(tokens)}")


@workflow_app.command("list")
def workflow_list(
    registry: Optional[Path] = typer.Option(None, help="YAML registry file"),
) -> None:
    """List the workflows declared in a registry file with their stages."""
    workflows = list(_open_registry(registry))
    if not workflows:
        typer.echo("No workflows found")
        return
    for wf in workflows:
        typer.echo(f"{wf.name}\t{';'.join(wf.stages)}")


@workflow_app.command("show")
def workflow_show(
    name: str,
    registry: Optional[Path] = typer.Option(None, help="YAML registry file"),
) -> None:
    """
    Show one workflow's stages, arguments and hooks.

    Example:
        stageflow workflow show Signup --registry workflows.yaml
    """
    reg = _open_registry(registry)
    if name not in reg:
        typer.echo("Workflow not found")
        raise typer.Exit(code=1)
    wf = reg.get(name)
    typer.echo(f"Workflow {wf.name}: {wf.stage_count} stages")
    for index, (stage, tokens) in enumerate(zip(wf.stages, wf.arguments)):
        typer.echo(f"- {index} {stage}{_format_tokens(tokens)}")
    typer.echo(f"Acceptor: {getattr(wf.acceptor, '__name__', wf.acceptor)}")
    if wf.redirector is not None:
        typer.echo(f"Redirector: {getattr(wf.redirector, '__name__', wf.redirector)}")


@app.command("run")
def run(
    invocation: str,
    registry: Optional[Path] = typer.Option(None, help="YAML registry file"),
    log_level: Optional[str] = typer.Option(None, help="Logging level"),
) -> None:
    """
    Run a workflow interactively on the terminal.

    Each stage is printed with its resolved arguments, then its output is read
    as ``key=value, key=value``. ``true``/``false`` and numbers are converted.

    Example:
        stageflow run "Signup(name=Bob)" --registry workflows.yaml
        # [Intro]
        # Intro output:
        # [Form] Bob
        # Form output: name=Bob, age=42
    """
    config = load_config()
    logging.basicConfig(level=(log_level or config.log_level).upper())

    dispatcher = ConsoleContentDispatcher()
    try:
        controller = WorkflowController(
            dispatcher, registry=_open_registry(registry), config=config
        )
        controller.invoke(invocation)
        while controller.is_active:
            stage = dispatcher.current
            raw = typer.prompt(f"{stage.stage_name} output", default="", show_default=False)
            try:
                bindings = parse_bindings(raw)
            except InvocationSyntaxError as exc:
                typer.secho(str(exc), fg=typer.colors.YELLOW)
                continue
            dispatcher.complete({k: coerce_text(v) for k, v in bindings.items()})
    except StageflowError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo("Workflow finished")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
