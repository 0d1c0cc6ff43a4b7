"""Errors raised while loading cleaner configuration."""

from pathlib import Path
from typing import Iterable, List, Optional


class ConfigurationError(Exception):
    """Invalid configuration file, schema violation or bad environment variable.

    The rendered message lists every problem found, numbered, followed by
    hints for fixing them, so the CLI can print it as is.

    Attributes:
        message: One-line summary
        errors: Individual problems, in the order they were found
        suggestions: Hints for fixing them
        source: Configuration file involved, if any
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Iterable[str]] = None,
        suggestions: Optional[Iterable[str]] = None,
        source: Optional[Path] = None,
    ):
        self.message = message
        self.errors: List[str] = list(errors or [])
        self.suggestions: List[str] = list(suggestions or [])
        self.source = source
        super().__init__(self.render())

    def render(self) -> str:
        headline = self.message if self.source is None else f"{self.message} ({self.source})"
        lines = [headline]
        if self.errors:
            lines += ["", "Validation Errors:"]
            lines += [f"  {number}. {error}" for number, error in enumerate(self.errors, 1)]
        if self.suggestions:
            lines += ["", "Suggestions:"]
            lines += [f"  - {hint}" for hint in self.suggestions]
        return "\n".join(lines)
