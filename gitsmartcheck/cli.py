#!/usr/bin/env python3
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
import pyperclip
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .commit_message import generate_conventional_commit, parse_conventional_commit, validate_commit_message
from .config import DEFAULT_CONFIG_FILENAME, Config, ConfigError
from .models import ValidationResult
from .names import (
    sanitize_branch_name,
    validate_branch_name,
    validate_file_path,
    validate_remote_name,
    validate_remote_url,
    validate_stash_message,
    validate_tag_name,
)
from .observers import ConsoleLogObserver, FileLogObserver

console = Console()

OPERATIONS = ("create", "delete", "force-push", "push")


def _report(ctx: click.Context, kind: str, value: str, result: ValidationResult) -> None:
    """Notify every observer of a validation result."""
    for observer in ctx.obj["observers"]:
        observer.on_validation_completed(kind, value, result)


def _finish(ctx: click.Context, result: ValidationResult) -> None:
    if not result.valid:
        ctx.exit(1)


def _with_overrides(options: BaseModel, overrides: Dict[str, Any]) -> BaseModel:
    """Return a copy of ``options`` with command line overrides, validated again."""
    try:
        return type(options).model_validate({**options.model_dump(), **overrides})
    except ValidationError as e:
        raise click.UsageError(str(e))


def _read_message(message: Optional[str], message_file) -> str:
    if message is not None:
        return message
    if message_file is not None:
        return message_file.read()
    return click.get_text_stream("stdin").read()


def _parse_values(pairs: Tuple[str, ...]) -> Dict[str, str]:
    values = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--value")
        values[key] = value
    return values


def _copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        console.print(f"[yellow]Could not copy to clipboard: {escape(str(e))}[/yellow]")
        return
    console.print("[green]Copied to clipboard![/green]")


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Display version information and exit")
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository whose configuration is used (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log validation results (overrides config setting)",
)
@click.pass_context
def main(ctx: click.Context, version: bool, path: Path, log_file: Optional[Path]):
    """
    Validate git names and commit messages before handing them to git.

    Branch, tag and remote names follow git's ref-name rules, commit messages
    are checked for layout and, optionally, the Conventional Commits format.

    Configuration can be set in .gitsmartcheck.toml in the repository root.
    Command line options override configuration file settings.
    """
    if version:
        from .version import display_version_info

        display_version_info()
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    repo_path = path.absolute()
    try:
        config = Config.load(repo_path)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    observers = [ConsoleLogObserver(console)]

    # Set up logging based on configuration
    log_file_path = log_file or config.get_log_file()
    if log_file_path:
        observers.append(FileLogObserver(str(log_file_path)))

    ctx.obj = {"config": config, "repo_path": repo_path, "observers": observers}


@main.command()
@click.argument("name")
@click.option("--no-slash", is_flag=True, help="Reject hierarchical names such as feature/login")
@click.option("--max-length", type=click.IntRange(min=0), help="Maximum name length (overrides config setting)")
@click.option("--prefix", "prefixes", multiple=True, help="Required prefix, may be repeated (e.g. --prefix feature)")
@click.option("--pattern", help="Regex the name must match (overrides config setting)")
@click.pass_context
def branch(ctx: click.Context, name: str, no_slash: bool, max_length: Optional[int],
           prefixes: Tuple[str, ...], pattern: Optional[str]):
    """Validate a branch name."""
    overrides: Dict[str, Any] = {}
    if no_slash:
        overrides["allow_slash"] = False
    if max_length is not None:
        overrides["max_length"] = max_length
    if prefixes:
        overrides["enforce_prefix"] = list(prefixes)
    if pattern is not None:
        overrides["pattern"] = pattern
    options = _with_overrides(ctx.obj["config"].branch, overrides)

    result = validate_branch_name(name, options)
    _report(ctx, "branch name", name, result)

    if not result.valid:
        suggestion = sanitize_branch_name(name)
        if suggestion and validate_branch_name(suggestion, options).valid:
            console.print(f"Did you mean: [bold]{escape(suggestion)}[/bold]")
    _finish(ctx, result)


@main.command()
@click.argument("text")
@click.option("--copy", is_flag=True, help="Copy the sanitized name to the clipboard")
@click.pass_context
def sanitize(ctx: click.Context, text: str, copy: bool):
    """Turn free text into a valid branch name."""
    name = sanitize_branch_name(text)
    if not name:
        console.print("[red]Nothing usable is left after sanitizing[/red]")
        ctx.exit(1)

    click.echo(name)
    if copy:
        _copy_to_clipboard(name)


@main.command()
@click.argument("name")
@click.pass_context
def tag(ctx: click.Context, name: str):
    """Validate a tag name."""
    result = validate_tag_name(name)
    _report(ctx, "tag name", name, result)
    _finish(ctx, result)


@main.command("remote-name")
@click.argument("name")
@click.pass_context
def remote_name(ctx: click.Context, name: str):
    """Validate a remote name."""
    result = validate_remote_name(name)
    _report(ctx, "remote name", name, result)
    _finish(ctx, result)


@main.command("remote-url")
@click.argument("url")
@click.pass_context
def remote_url(ctx: click.Context, url: str):
    """Validate a remote URL."""
    result = validate_remote_url(url)
    _report(ctx, "remote URL", url, result)
    _finish(ctx, result)


@main.command("path")
@click.argument("file_path")
@click.pass_context
def path_command(ctx: click.Context, file_path: str):
    """Validate a repository file path."""
    result = validate_file_path(file_path)
    _report(ctx, "file path", file_path, result)
    _finish(ctx, result)


@main.command()
@click.argument("message", required=False, default="")
@click.pass_context
def stash(ctx: click.Context, message: str):
    """Validate a stash message."""
    result = validate_stash_message(message)
    _report(ctx, "stash message", message, result)
    _finish(ctx, result)


@main.command()
@click.argument("message", required=False)
@click.option(
    "-F",
    "--file",
    "message_file",
    type=click.File("r"),
    help="Read the message from a file (e.g. .git/COMMIT_EDITMSG in a commit-msg hook)",
)
@click.option(
    "--require-type/--no-require-type",
    default=None,
    help="Require the Conventional Commits format (overrides config setting)",
)
@click.option(
    "--require-scope/--no-require-scope",
    default=None,
    help="Require a scope in Conventional Commits messages (overrides config setting)",
)
@click.option(
    "--max-subject-length",
    type=click.IntRange(min=0),
    help="Maximum subject line length (overrides config setting)",
)
@click.pass_context
def commit(ctx: click.Context, message: Optional[str], message_file, require_type: Optional[bool],
           require_scope: Optional[bool], max_subject_length: Optional[int]):
    """Validate a commit message given as argument, file or on stdin."""
    text = _read_message(message, message_file)
    overrides = {
        key: value
        for key, value in {
            "require_type": require_type,
            "require_scope": require_scope,
            "max_subject_length": max_subject_length,
        }.items()
        if value is not None
    }
    options = _with_overrides(ctx.obj["config"].commit, overrides)

    result = validate_commit_message(text, options)
    _report(ctx, "commit message", text.split("\n")[0], result)
    _finish(ctx, result)


@main.command()
@click.argument("message", required=False)
@click.option("-F", "--file", "message_file", type=click.File("r"), help="Read the message from a file")
@click.option("--json", "as_json", is_flag=True, help="Print the parsed fields as JSON")
@click.pass_context
def parse(ctx: click.Context, message: Optional[str], message_file, as_json: bool):
    """Split a Conventional Commits message into its fields."""
    parsed = parse_conventional_commit(_read_message(message, message_file))
    if parsed is None:
        console.print("[yellow]Not a Conventional Commits message[/yellow]")
        ctx.exit(1)

    if as_json:
        click.echo(parsed.model_dump_json(indent=2))
        return

    table = Table(title="Conventional Commit")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field_name, value in parsed.model_dump().items():
        table.add_row(field_name, escape("" if value is None else str(value)))
    console.print(table)


@main.command()
@click.option("-t", "--type", "commit_type", required=True, help="Commit type, e.g. feat or fix")
@click.option("-s", "--scope", help="Component or area affected")
@click.option("-d", "--description", required=True, help="Short description of the change")
@click.option("-b", "--body", help="Detailed description of the change")
@click.option("--breaking", is_flag=True, help="Mark the change as breaking")
@click.option("-f", "--footer", help="Footer, e.g. 'Fixes #123'")
@click.option("--check", is_flag=True, help="Validate the generated message against the configured rules")
@click.pass_context
def generate(ctx: click.Context, commit_type: str, scope: Optional[str], description: str,
             body: Optional[str], breaking: bool, footer: Optional[str], check: bool):
    """Build a Conventional Commits message."""
    message = generate_conventional_commit(commit_type, scope, description, body, breaking, footer)
    click.echo(message)

    if check:
        result = validate_commit_message(message, ctx.obj["config"].commit)
        _report(ctx, "commit message", message.split("\n")[0], result)
        _finish(ctx, result)


@main.command()
@click.argument("branch_name")
@click.option(
    "-o",
    "--operation",
    type=click.Choice(OPERATIONS),
    default="push",
    show_default=True,
    help="Operation to check against the protection rules",
)
@click.pass_context
def protect(ctx: click.Context, branch_name: str, operation: str):
    """Check whether an operation on a branch is allowed."""
    protection = ctx.obj["config"].create_protection()
    checks = {
        "create": protection.validate_branch_name,
        "delete": protection.validate_delete,
        "force-push": protection.validate_force_push,
        "push": protection.validate_direct_push,
    }
    validation = checks[operation](branch_name)

    for observer in ctx.obj["observers"]:
        observer.on_operation_checked(operation, branch_name, validation)

    if not validation.allowed:
        if operation == "create":
            suggestion = protection.suggest_branch_name(branch_name)
            if suggestion and protection.validate_branch_name(suggestion).allowed:
                console.print(f"Did you mean: [bold]{escape(suggestion)}[/bold]")
        ctx.exit(1)


@main.command()
@click.pass_context
def rules(ctx: click.Context):
    """List the branch protection rules."""
    protection = ctx.obj["config"].create_protection()

    table = Table(title="Branch Protection Rules")
    for column in ("Pattern", "Regex", "No delete", "No force push", "Pull request"):
        table.add_column(column)
    for rule in protection.rules:
        table.add_row(
            escape(rule.pattern),
            "yes" if rule.is_regex else "",
            "yes" if rule.prevent_delete else "",
            "yes" if rule.prevent_force_push else "",
            "yes" if rule.require_pull_request else "",
        )
    console.print(table)


@main.group()
def templates():
    """Work with commit message templates."""


@templates.command("list")
@click.pass_context
def list_templates(ctx: click.Context):
    """List available templates by category."""
    manager = ctx.obj["config"].create_template_manager()
    for category, category_templates in manager.templates_by_category().items():
        table = Table(title=category)
        table.add_column("ID", style="bold", no_wrap=True)
        table.add_column("Name")
        table.add_column("Subject line")
        for template in category_templates:
            name = template.name + (" (default)" if template.is_default else "")
            table.add_row(escape(template.id), escape(name), escape(template.template.split("\n")[0]))
        console.print(table)


@templates.command("fill")
@click.argument("template_id")
@click.option("-v", "--value", "values", multiple=True, metavar="KEY=VALUE", help="Placeholder value, may be repeated")
@click.pass_context
def fill_template(ctx: click.Context, template_id: str, values: Tuple[str, ...]):
    """Fill a template and validate the resulting message."""
    manager = ctx.obj["config"].create_template_manager()
    template = manager.get_template(template_id)
    if template is None:
        raise click.BadParameter(f"Unknown template '{template_id}'", param_hint="TEMPLATE_ID")

    defaults = {p.key: p.default_value for p in template.placeholders if p.default_value}
    filled_values = {**defaults, **_parse_values(values)}

    check = manager.validate_values(template, filled_values)
    if not check.valid:
        _report(ctx, "template values", template_id, check)
        ctx.exit(1)

    message = manager.fill_template(template, filled_values)
    click.echo(message)

    result = manager.validate_message(message)
    _report(ctx, "commit message", message.split("\n")[0], result)
    _finish(ctx, result)


@main.command("config")
@click.option("--list", "show_list", is_flag=True, help="Display current configuration settings")
@click.option("--copy/--no-copy", default=True, help="Copy the config file location to the clipboard")
@click.pass_context
def config_command(ctx: click.Context, show_list: bool, copy: bool):
    """Show the configuration file location or its settings."""
    config: Config = ctx.obj["config"]
    repo_path: Path = ctx.obj["repo_path"]
    config_path = repo_path / DEFAULT_CONFIG_FILENAME

    if show_list:
        source = "config" if config_path.exists() else "default"
        console.print("\n[bold]Current Configuration Settings:[/bold]")
        if config_path.exists():
            console.print(f"[dim]Config file: {escape(config_path.as_posix())}[/dim]")
        else:
            console.print("[dim]Using default values (no config file found)[/dim]")

        table = Table()
        for column in ("Setting", "Value", "Source"):
            table.add_column(column)

        settings = config.model_dump(mode="json")
        for section in ("branch", "commit", "naming"):
            for key, value in settings[section].items():
                table.add_row(f"{section}.{key}", escape(str(value)), source)
        table.add_row("protection_rules", f"{len(config.protection_rules)} rules", source)
        table.add_row("templates", f"{len(config.templates)} custom", source)
        table.add_row("always_log", str(config.always_log), source)
        table.add_row("log_file", escape(config.log_file or "None"), source)
        console.print(table)

        console.print(
            f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
        )
        return

    # Create default config file if it doesn't exist
    if not config_path.exists():
        Config().save(repo_path)
        console.print("[yellow]Created new config file with default values[/yellow]")

    console.print(f"[green]Config file location:[/green] {escape(str(config_path))}")
    if copy:
        _copy_to_clipboard(str(config_path))


if __name__ == "__main__":
    main()
