"""
Output - Console output and result renderers.

Renderers turn a TypeResults into bytes-ready text (JSON, YAML or a
colored table). Colors are passed in as a ColorScheme so the same
renderer works for terminals, pipes and files.
"""

import json
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, TextIO

import yaml

from ..core.domain.entities import Pair, TypeResults


@dataclass(frozen=True)
class ColorScheme:
    """ANSI color codes used by the renderers."""

    match: str = ""
    mismatch: str = ""
    name: str = ""
    error: str = ""
    bold: str = ""
    reset: str = ""

    @classmethod
    def ansi(cls) -> "ColorScheme":
        return cls(
            match="\033[32m",
            mismatch="\033[31m",
            name="\033[33m",
            error="\033[31m",
            bold="\033[1m",
            reset="\033[0m",
        )

    @classmethod
    def plain(cls) -> "ColorScheme":
        return cls()

    @classmethod
    def for_stream(cls, stream: TextIO, enabled: bool = True) -> "ColorScheme":
        """ANSI colors if enabled and the stream is a terminal."""
        isatty = getattr(stream, "isatty", None)
        if enabled and isatty is not None and isatty():
            return cls.ansi()
        return cls.plain()


class Symbols:
    """Unicode symbols for output."""

    CROSS = "✗"


# =============================================================================
# Renderers
# =============================================================================

Renderer = Callable[..., str]


def _serializable(data: Any) -> Any:
    if isinstance(data, TypeResults):
        return data.to_dict()
    return data


def render_json(data: Any, colors: Optional[ColorScheme] = None) -> str:
    """Indented JSON."""
    return json.dumps(_serializable(data), indent=2) + "\n"


def render_yaml(data: Any, colors: Optional[ColorScheme] = None) -> str:
    """YAML document prefixed with '---'."""
    body = yaml.safe_dump(
        _serializable(data),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    return "---\n" + body


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _render_pair(pair: Pair, result: str, result_color: str, colors: ColorScheme) -> str:
    return (
        f"{colors.name}{pair.jira.name}|({pair.git.name}){colors.reset}\n"
        f"\tstatus ({_quote(pair.jira.status)}\t| {_quote(pair.git.status)})"
        f"\t{result_color}{result}{colors.reset}"
        f" assignees({_quote(pair.jira.assignee)}\t| {_quote(pair.git.assignee)})\n"
    )


def render_table(data: Any, colors: Optional[ColorScheme] = None) -> str:
    """
    Human readable report: a count line, then mismatches, then matches.

    Raises:
        TypeError: If data is not a TypeResults.
    """
    if not isinstance(data, TypeResults):
        raise TypeError(f"expected TypeResults, got {type(data).__name__}")

    colors = colors or ColorScheme.plain()
    lines = []

    if data.is_empty:
        lines.append("no issues found\n")
    else:
        lines.append(f"found {len(data.mismatches)} mismatch / {len(data.matches)} match issues\n")

    for pair in data.mismatches:
        lines.append(_render_pair(pair, "MISMATCH", colors.mismatch, colors))
    for pair in data.matches:
        lines.append(_render_pair(pair, "MATCH", colors.match, colors))

    return "".join(lines)


RENDERERS: dict[str, Renderer] = {
    "json": render_json,
    "yaml": render_yaml,
    "table": render_table,
}

OUTPUT_FORMATS = tuple(RENDERERS)


def get_renderer(output: str) -> Renderer:
    """
    Look up a renderer by format name.

    Raises:
        ValueError: For formats other than json, yaml and table.
    """
    try:
        return RENDERERS[output]
    except KeyError:
        accepted = ", ".join(repr(name) for name in OUTPUT_FORMATS)
        raise ValueError(f"invalid output format {output!r} (accepted formats are {accepted})") from None


# =============================================================================
# Console
# =============================================================================


class Console:
    """
    Console output helper with colors and formatting.

    Results go to stdout; status messages go to stderr so piping
    JSON or YAML output stays clean.
    """

    def __init__(
        self,
        color: bool = True,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.colors = ColorScheme.for_stream(self.stdout, enabled=color)
        self._status_colors = ColorScheme.for_stream(self.stderr, enabled=color)

    @property
    def color(self) -> bool:
        return self.colors != ColorScheme.plain()

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self._status_colors.reset:
            return text
        return "".join(codes) + text + self._status_colors.reset

    def write(self, text: str) -> None:
        """Write text to stdout unchanged."""
        self.stdout.write(text)
        self.stdout.flush()

    def print(self, text: str = "") -> None:
        """Print a line to stdout."""
        print(text, file=self.stdout)

    def _status(self, text: str) -> None:
        print(text, file=self.stderr)

    def error(self, text: str) -> None:
        """Print error message."""
        self._status(self._c(f"{Symbols.CROSS} {text}", self._status_colors.error))

    def config_errors(self, errors: list[str]) -> None:
        """Print configuration problems."""
        self.error("Configuration errors:")
        for e in errors:
            self._status(f"    {e}")

    def render(self, data: Any, output: str) -> None:
        """Render data in the given format to stdout."""
        renderer = get_renderer(output)
        self.write(renderer(data, self.colors))

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        bold = self.colors.bold
        reset = self.colors.reset
        header_line = "  ".join(
            f"{bold}{h.ljust(widths[i])}{reset}"
            for i, h in enumerate(headers)
        )
        self.print(header_line.rstrip())
        self.print("  ".join("-" * w for w in widths))

        for row in rows:
            row_line = "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line.rstrip())
