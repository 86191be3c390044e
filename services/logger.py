# services/logger.py - Terminal session logging.
"""
Every print() during a CLI run is also written to a session file,
data/logs/terminal_YYYYMMDD_HHMMSS.txt

Tool calls print short tagged lines ([Binance], [Tools]). Query strings,
keys and secrets are never printed; use models.mask_secret for diagnostics.
"""

import sys
import threading
from pathlib import Path
from typing import TextIO

from services.time_utils import get_utc_now


# === PATHS ===

LOG_DIR = Path(__file__).parent.parent / "data" / "logs"


class TeeWriter:
    """Writes to a console stream and a log file, stamping each new line with [HH:MM:SS] UTC."""

    def __init__(self, stream: TextIO, log_file: TextIO):
        self.stream = stream
        self.log_file = log_file
        self._lock = threading.Lock()
        self._mid_line = False

    def write(self, message: str) -> int:
        stamp = f"[{get_utc_now().strftime('%H:%M:%S')}] "
        chunks = []
        for line in message.splitlines(keepends=True):
            if not self._mid_line:
                chunks.append(stamp)
            chunks.append(line)
            self._mid_line = not line.endswith("\n")
        stamped = "".join(chunks)

        self.stream.write(stamped)
        with self._lock:
            self.log_file.write(stamped)
            self.log_file.flush()
        return len(message)

    def flush(self) -> None:
        self.stream.flush()
        with self._lock:
            self.log_file.flush()

    def fileno(self) -> int:
        return self.stream.fileno()

    def isatty(self) -> bool:
        return self.stream.isatty()


class TerminalLogger:
    """Tees stdout/stderr into one session file per CLI run."""

    def __init__(self, log_dir: Path = LOG_DIR):
        self.log_dir = log_dir
        self._session_file: Path | None = None
        self._log_file: TextIO | None = None
        self._saved_streams: tuple[TextIO, TextIO] | None = None

    def start(self) -> Path:
        """Begin teeing. Returns the session file; calling again is a no-op."""
        if self._saved_streams is not None:
            return self._session_file

        self.log_dir.mkdir(parents=True, exist_ok=True)
        started = get_utc_now()
        self._session_file = self.log_dir / f"terminal_{started.strftime('%Y%m%d_%H%M%S')}.txt"
        self._log_file = open(self._session_file, "w", encoding="utf-8")
        self._log_file.write(f"=== Binance tools session, started {started.isoformat()} ===\n\n")
        self._log_file.flush()

        self._saved_streams = (sys.stdout, sys.stderr)
        sys.stdout = TeeWriter(sys.stdout, self._log_file)
        sys.stderr = TeeWriter(sys.stderr, self._log_file)
        return self._session_file

    def stop(self) -> None:
        if self._saved_streams is None:
            return

        sys.stdout, sys.stderr = self._saved_streams
        self._saved_streams = None

        self._log_file.write(f"\nSession ended: {get_utc_now().isoformat()}\n")
        self._log_file.close()
        self._log_file = None


# Process-wide instance used by main.py
terminal_logger = TerminalLogger()
