"""Observer pattern for validation reporting."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .models import ValidationResult
from .protection import BranchOperationValidation


class ValidationObserver(ABC):
    """Abstract base class for validation observers."""

    @abstractmethod
    def on_validation_completed(self, kind: str, value: str, result: ValidationResult) -> None:
        """Called when a value has been validated."""
        pass

    @abstractmethod
    def on_operation_checked(
        self, operation: str, branch: str, validation: BranchOperationValidation
    ) -> None:
        """Called when a branch operation has been checked against protection rules."""
        pass


class ConsoleLogObserver(ValidationObserver):
    """Observer that reports validation results to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_validation_completed(self, kind: str, value: str, result: ValidationResult) -> None:
        if result.valid:
            self.console.print(f"[green]Valid {kind}: {escape(value)}[/green]")
        else:
            self.console.print(f"[red]Invalid {kind}: {escape(result.error or '')}[/red]")

        for warning in result.warnings:
            self.console.print(f"[yellow]Warning: {escape(warning)}[/yellow]")
        for suggestion in result.suggestions:
            self.console.print(f"[cyan]Suggestion: {escape(suggestion)}[/cyan]")

    def on_operation_checked(
        self, operation: str, branch: str, validation: BranchOperationValidation
    ) -> None:
        if validation.allowed:
            self.console.print(f"[green]Allowed: {operation} on {escape(branch)}[/green]")
        else:
            self.console.print(f"[red]Blocked: {escape(validation.reason or '')}[/red]")

        for warning in validation.warnings:
            self.console.print(f"[yellow]Warning: {escape(warning)}[/yellow]")


class FileLogObserver(ValidationObserver):
    """Observer that logs validation results to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_validation_completed(self, kind: str, value: str, result: ValidationResult) -> None:
        if result.valid:
            self._log(f"Valid {kind} {value!r} ({len(result.warnings)} warnings)")
        else:
            self._log(f"Invalid {kind} {value!r}: {result.error}")

    def on_operation_checked(
        self, operation: str, branch: str, validation: BranchOperationValidation
    ) -> None:
        status = "Allowed" if validation.allowed else "Blocked"
        self._log(f"{status} {operation} on {branch!r}" + (f": {validation.reason}" if validation.reason else ""))
