# azlogic CLI — main entry point
"""azlogic CLI — manage Logic App Workflows from the terminal."""

from __future__ import annotations

import json
from functools import wraps
from pathlib import Path
from typing import Any

import click

from ..config import settings
from ..errors import AzLogicError

WORKFLOW_TYPE = "azurerm_logic_app_workflow"


def _registry():
    from ..services.registry import default_registry
    return default_registry()


def _load_config(path: str) -> dict[str, Any]:
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path} is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a JSON object")
    return data


def _handle_errors(func):
    """Turn azlogic errors into a red message and exit status 1."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        from ..common import die
        try:
            return func(*args, **kwargs)
        except AzLogicError as e:
            die(str(e))
    return wrapper


def _show(d, as_json: bool) -> None:
    from ..common import console, print_state

    if as_json:
        console.print_json(json.dumps({"id": d.id, "attributes": d.to_dict()}))
    else:
        print_state(d.id, d.to_dict())


@click.group()
@click.version_option(version=settings.app_version, prog_name="azlogic")
@click.option("--log-file/--no-log-file", default=False, help="Write a debug log under the log directory")
def cli(log_file: bool):
    """azlogic — declarative Azure Logic App Workflows."""
    if log_file:
        from ..common import init_logging
        init_logging(level="DEBUG")


@cli.command()
def status():
    """Show configuration and supported resource types."""
    from ..common import console

    registry = _registry()
    console.print(f"[bold blue]azlogic[/] v{settings.app_version}")
    console.print(f"Environment: {settings.environment}")
    console.print(f"Subscription: {settings.subscription_id or '[dim]not set[/dim]'}")
    auth = "service principal" if settings.has_service_principal else "default credential chain"
    console.print(f"Authentication: {auth}")
    console.print(f"Resource types: {', '.join(registry.supported_types)}")


# ---------------------------------------------------------------------------
# Workflow commands
# ---------------------------------------------------------------------------


@cli.group()
def workflow():
    """Manage Logic App Workflows."""
    pass


@workflow.command("create")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print state as JSON")
@_handle_errors
def workflow_create(config_file: str, as_json: bool):
    """Create a workflow from a JSON attribute file."""
    from ..common import print_success

    adapter = _registry().get_adapter(WORKFLOW_TYPE)
    d = adapter.new_data(_load_config(config_file))
    adapter.create(d)
    print_success(f"Created {d.id}")
    _show(d, as_json)


@workflow.command("show")
@click.argument("resource_id")
@click.option("--json", "as_json", is_flag=True, help="Print state as JSON")
@_handle_errors
def workflow_show(resource_id: str, as_json: bool):
    """Read a workflow's current state."""
    from ..common import print_warning

    adapter = _registry().get_adapter(WORKFLOW_TYPE)
    d = adapter.new_data(resource_id=resource_id)
    adapter.read(d)
    if d.is_absent:
        print_warning(f"Workflow not found: {resource_id}")
        raise SystemExit(2)
    _show(d, as_json)


@workflow.command("import")
@click.argument("resource_id")
@click.option("--json", "as_json", is_flag=True, help="Print state as JSON")
@_handle_errors
def workflow_import(resource_id: str, as_json: bool):
    """Import an existing workflow by resource ID and print its state."""
    from ..common import print_success, print_warning

    adapter = _registry().get_adapter(WORKFLOW_TYPE)
    for d in adapter.import_state(adapter.new_data(resource_id=resource_id)):
        adapter.read(d)
        if d.is_absent:
            print_warning(f"Cannot import non-existent workflow: {resource_id}")
            raise SystemExit(2)
        print_success(f"Imported {d.id}")
        _show(d, as_json)


@workflow.command("update")
@click.argument("resource_id")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print state as JSON")
@_handle_errors
def workflow_update(resource_id: str, config_file: str, as_json: bool):
    """Update location, parameters and tags of an existing workflow."""
    from ..common import print_success, print_warning
    from ..providers.base import force_new_changes

    adapter = _registry().get_adapter(WORKFLOW_TYPE)
    current = adapter.new_data(resource_id=resource_id)
    adapter.read(current)
    if current.is_absent:
        print_warning(f"Workflow not found: {resource_id}")
        raise SystemExit(2)

    d = adapter.new_data(_load_config(config_file), resource_id=resource_id)
    changed = force_new_changes(adapter.schema, current.to_dict(), d.to_dict())
    if changed:
        raise click.UsageError(
            f"Changing {', '.join(changed)} requires replacing the workflow; "
            "delete it and create it again"
        )

    adapter.update(d)
    if d.is_absent:
        print_warning(f"Workflow disappeared during update: {resource_id}")
        raise SystemExit(2)
    print_success(f"Updated {d.id}")
    _show(d, as_json)


@workflow.command("delete")
@click.argument("resource_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@_handle_errors
def workflow_delete(resource_id: str, yes: bool):
    """Delete a workflow. Deleting a missing workflow succeeds."""
    from ..common import print_success, print_warning

    adapter = _registry().get_adapter(WORKFLOW_TYPE)
    d = adapter.new_data(resource_id=resource_id)
    if not adapter.exists(d):
        print_warning(f"Workflow already absent: {resource_id}")
        return
    if not yes:
        click.confirm(f"Delete {resource_id}?", abort=True)
    adapter.delete(d)
    print_success(f"Deleted {resource_id}")


if __name__ == "__main__":
    cli()
