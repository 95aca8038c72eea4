"""Shared utilities for CLI commands."""

from rich.console import Console

console = Console()
