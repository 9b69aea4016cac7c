"""Subprocess formatter bridge.

Drives a formatter that lives outside the Python process (for example a
Node.js formatter and its plugins) through a small JSON protocol. One process
is spawned per call:

- request on stdin: ``{"action": "format" | "parse", "source": ..., "options": {...}}``
- reply on stdout: ``{"result": ...}`` or ``{"error": "message"}``

Configuration:
    command: Command line, as a list or a shell-style string (required)
    cwd: Working directory for the command (optional)
    env: Extra environment variables (optional)
"""

import json
import os
import shlex
import subprocess
from typing import Any

from ..core.errors import ConfigError, FormatterError
from ..core.logging import get_logger
from .abc import Formatter
from .registry import register_formatter

logger = get_logger(__name__)


class CommandFormatter(Formatter):
    """Formatter reached through a JSON-over-stdio command."""

    def __init__(self, config: dict | None = None):
        super().__init__(config)

        command = self.config.get("command")
        if not command:
            raise ConfigError("Command formatter requires a 'command' setting")
        self.command: list[str] = (
            shlex.split(command) if isinstance(command, str) else list(command)
        )
        self.cwd: str | None = self.config.get("cwd")
        self.env: dict[str, str] = {
            key: str(value) for key, value in self.config.get("env", {}).items()
        }

    def _call(self, action: str, source: str, options: dict[str, Any]) -> Any:
        request = json.dumps({"action": action, "source": source, "options": options})
        env = {**os.environ, **self.env} if self.env else None

        logger.debug(f"{self.command[0]} {action} (parser={options.get('parser')})")
        try:
            proc = subprocess.run(
                self.command,
                input=request,
                capture_output=True,
                text=True,
                encoding="utf-8",
                cwd=self.cwd,
                env=env,
            )
        except OSError as e:
            raise FormatterError(f"Cannot run formatter {self.command[0]!r}: {e}") from e

        if proc.returncode != 0:
            detail = proc.stderr.strip() or f"exit status {proc.returncode}"
            raise FormatterError(f"Formatter {action} failed: {detail}")

        try:
            reply = json.loads(proc.stdout)
        except json.JSONDecodeError as e:
            raise FormatterError(f"Formatter returned invalid JSON: {e}") from e

        if not isinstance(reply, dict):
            raise FormatterError(
                f"Formatter reply must be an object, got {type(reply).__name__}"
            )
        if reply.get("error"):
            raise FormatterError(str(reply["error"]))
        return reply.get("result")

    def format(self, source: str, options: dict[str, Any]) -> str:
        result = self._call("format", source, options)
        if not isinstance(result, str):
            raise FormatterError(
                f"Formatter returned {type(result).__name__} instead of text"
            )
        return result

    def parse(self, source: str, options: dict[str, Any]) -> Any:
        return self._call("parse", source, options)

    def __repr__(self) -> str:
        return f"CommandFormatter(command={self.command!r})"


register_formatter("command", CommandFormatter)
