"""JSONL logging for observability."""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

_diagnostics = logging.getLogger(__name__)


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    login: str | None = None
    argv: list[str] | None = None
    duration_ms: float | None = None
    exit_code: int | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class JSONLLogger:
    """Logger that writes structured logs in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "logs.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".kudos" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file. I/O errors are reported, not raised."""
        try:
            self._rotate_if_needed()

            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry.to_dict()) + "\n")
        except OSError as e:
            _diagnostics.warning("Failed to write event log %s: %s", self.log_path, e)

    def log(
        self,
        event: str,
        *,
        login: str | None = None,
        argv: list[str] | None = None,
        duration_ms: float | None = None,
        exit_code: int | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            login=login,
            argv=argv,
            duration_ms=duration_ms,
            exit_code=exit_code,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_tool_call(self, tool_name: str, args: dict[str, Any]) -> None:
        """Log a tool call."""
        self.log(
            "tool_call",
            login=args.get("login"),
            tool_name=tool_name,
            tool_args=args,
        )

    def log_tool_result(
        self,
        tool_name: str,
        success: bool,
        *,
        login: str | None = None,
        duration_ms: float | None = None,
        error: str | None = None,
    ) -> None:
        """Log a tool result."""
        self.log(
            "tool_result",
            login=login,
            duration_ms=duration_ms,
            error=error if not success else None,
            success=success,
            tool_name=tool_name,
        )

    def log_command(
        self,
        argv: list[str],
        exit_code: int,
        duration_ms: float,
        *,
        login: str | None = None,
    ) -> None:
        """Log an external command execution."""
        self.log(
            "command",
            login=login,
            argv=argv,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )


# Global logger instance
_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger


def safe_emit(log_call: Callable[..., None], *args: Any, **kwargs: Any) -> None:
    """Run an event-log call; a failed write never reaches the caller."""
    try:
        log_call(*args, **kwargs)
    except OSError as e:
        _diagnostics.warning("Failed to write event log: %s", e)
