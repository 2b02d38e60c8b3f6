"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exposed: :data:`console` (stderr, status and errors)
and :data:`output` (stdout, command results).
"""

from __future__ import annotations

import json
import sys
from typing import Any

from yt_shaper.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr or stdout."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def _stream(self) -> Any:
		return sys.stderr if self._stderr else sys.stdout

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*objects, file=self._stream())
			return
		rich_console.print(*objects)

	def print_text(self, text: str) -> None:
		"""Print *text* verbatim (no markup, no highlighting)."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(text, file=self._stream())
			return
		rich_console.print(text, markup=False, highlight=False, soft_wrap=True)

	def print_error(self, message: str) -> None:
		"""Print an ``Error:`` line; *message* is never parsed as markup."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(f"Error: {message}", file=self._stream())
			return
		from rich.markup import escape

		rich_console.print(f"[bold red]Error:[/bold red] {escape(message)}")

	def print_json(self, data: Any) -> None:
		"""Pretty-print *data* as JSON."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(json.dumps(data, indent=2, ensure_ascii=False), file=self._stream())
			return
		rich_console.print_json(data=data, ensure_ascii=False)


console = _ConsoleProxy(stderr=True)
output = _ConsoleProxy(stderr=False)
