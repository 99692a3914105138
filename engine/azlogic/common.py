"""Shared utilities — console output and file-based logging.

Used by the CLI and services; adapters log through the standard
``logging`` hierarchy rooted at ``azlogic``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

# ---------------------------------------------------------------------------
# Console singleton
# ---------------------------------------------------------------------------
console = Console()

# ---------------------------------------------------------------------------
# Timestamp for log file naming
# ---------------------------------------------------------------------------
TIMESTAMP = datetime.now().strftime("%Y-%m-%d-%H%M%S")

# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def print_success(msg: str) -> None:
    console.print(f"[bold green]✔ {msg}[/bold green]")


def print_warning(msg: str) -> None:
    console.print(f"[bold yellow]⚠ {msg}[/bold yellow]")


def print_error(msg: str) -> None:
    console.print(f"[bold red]✖ {msg}[/bold red]")


def die(msg: str, code: int = 1) -> None:
    print_error(msg)
    sys.exit(code)


def print_state(resource_id: str, attributes: dict[str, Any]) -> None:
    """Render a resource's attributes as a two-column table."""
    table = Table(title=resource_id or "(absent)", show_header=False)
    table.add_column("Attribute", style="cyan")
    table.add_column("Value")
    for key in sorted(attributes):
        value = attributes[key]
        if isinstance(value, (dict, list)):
            value = json.dumps(value, sort_keys=True)
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


# ---------------------------------------------------------------------------
# File-based logging
# ---------------------------------------------------------------------------

_log_file: Optional[Path] = None
_logger: Optional[logging.Logger] = None


def init_logging(
    prefix: str = "azlogic",
    log_dir: Optional[Path] = None,
    level: Optional[str] = None,
) -> Path:
    """Initialise file-based logging for the ``azlogic`` logger tree. Returns the log file path."""
    global _log_file, _logger

    from .config import settings

    if log_dir is None:
        log_dir = settings.effective_log_dir

    log_dir.mkdir(parents=True, exist_ok=True)
    _log_file = log_dir / f"{prefix}-{TIMESTAMP}.log"

    _logger = logging.getLogger("azlogic")
    _logger.setLevel(level or settings.log_level)
    fh = logging.FileHandler(_log_file)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    _logger.addHandler(fh)
    return _log_file
