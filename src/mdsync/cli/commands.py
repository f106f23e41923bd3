"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsync.config import Settings, load_config
from mdsync.core.pipeline import (
    UpdateResult,
    count_statuses,
    run_all_rules,
    run_rule,
    update_document_from_template,
)
from mdsync.core.sections import sectionize
from mdsync.core.utils.diff import diff_summary, unified_diff
from mdsync.errors import MdsyncError
from mdsync.store import FileSystemStore


VaultOption = Annotated[Optional[str], typer.Option("--vault", help="Vault root directory")]
ConfigOption = Annotated[Optional[Path], typer.Option("--config", help="Path to mdsync.yaml")]
DryRunOption = Annotated[bool, typer.Option("--dry-run", help="Compute changes without writing")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _settings(overrides: dict = None, path: Optional[Path] = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides, path=path)
    except ValueError as e:
        _fail(str(e))


def _store(settings: Settings) -> FileSystemStore:
    vault = Path(settings.vault_dir)
    if not vault.is_dir():
        _fail(f"Vault directory not found: {vault}")
    return FileSystemStore(vault, settings.extensions)


def _echo_summary(results: list[UpdateResult]) -> None:
    """Print the summary line and exit 1 if any document failed."""
    counts = count_statuses(results)
    typer.echo(
        f"Done - "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['error']} failed"
    )
    if counts['error']:
        raise typer.Exit(1)


def update_cmd(
    template: Annotated[str, typer.Argument(help="Template document path, relative to the vault")],
    target: Annotated[str, typer.Argument(help="Target document path, relative to the vault")],
    vault: VaultOption = None,
    dry_run: DryRunOption = False,
    diff: Annotated[bool, typer.Option("--diff", help="Print a unified diff of the change")] = False,
    verbose: VerboseOption = False,
    ):
    """Merge TEMPLATE into TARGET and write TARGET if it changed."""
    _configure_logging(verbose)
    store = _store(_settings(overrides={"vault_dir": vault}))
    try:
        result = update_document_from_template(store, template, target, dry_run=dry_run, notify=typer.echo)
    except MdsyncError as e:
        _fail(str(e))
    if diff and result.before != result.after:
        typer.echo("".join(unified_diff(result.before, result.after, f"a/{target}", f"b/{target}")), nl=False)
        counts = diff_summary(result.before, result.after)
        typer.echo(f"{counts['added']} line(s) added, {counts['deleted']} removed")


def run_rule_cmd(
    template: Annotated[str, typer.Argument(help="Template document path, relative to the vault")],
    folder: Annotated[str, typer.Argument(help="Folder whose documents are updated")],
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Include subfolders")] = False,
    vault: VaultOption = None,
    dry_run: DryRunOption = False,
    verbose: VerboseOption = False,
    ):
    """Apply TEMPLATE to every document in FOLDER."""
    _configure_logging(verbose)
    store = _store(_settings(overrides={"vault_dir": vault}))
    results = run_rule(store, template, folder, recursive, dry_run=dry_run, notify=typer.echo)
    _echo_summary(results)


def run_cmd(
    vault: VaultOption = None,
    config: ConfigOption = None,
    dry_run: DryRunOption = False,
    verbose: VerboseOption = False,
    ):
    """Run every configured rule in order."""
    _configure_logging(verbose)
    settings = _settings(overrides={"vault_dir": vault}, path=config)
    if not settings.rules:
        typer.echo("No rules configured.")
        raise typer.Exit(1)
    store = _store(settings)
    results = run_all_rules(store, settings.rules, dry_run=dry_run, notify=typer.echo)
    _echo_summary(results)


def rules_cmd(config: ConfigOption = None):
    """List configured rules."""
    settings = _settings(path=config)
    if not settings.rules:
        typer.echo("No rules configured.")
        raise typer.Exit(1)
    for i, rule in enumerate(settings.rules):
        scope = "recursive" if rule.include_subfolders else "flat"
        typer.echo(f"{i}: {rule.template} -> {rule.folder or '.'} ({scope})")


def show_cmd(
    path: Annotated[str, typer.Argument(help="Document path, relative to the vault")],
    vault: VaultOption = None,
    ):
    """Print the parsed section tree of a document as JSON."""
    store = _store(_settings(overrides={"vault_dir": vault}))
    handle = store.resolve(path)
    if handle is None:
        _fail(f"Document not found: {path}")
    try:
        text = store.read(handle)
    except MdsyncError as e:
        _fail(str(e))
    typer.echo(sectionize(text).model_dump_json(indent=2))
