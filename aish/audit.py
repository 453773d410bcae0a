from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Optional[str] = None, level: str = "INFO") -> None:
    """Route log records at ``level`` to ``log_file``, or to stderr without one.

    A log file that cannot be opened is reported and logging falls back to
    stderr; it never ends the session.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    root.setLevel(numeric_level)
    if not log_file:
        root.addHandler(stderr_handler)
        return

    try:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        root.addHandler(stderr_handler)
        logger.error("cannot open log file %s: %s", log_file, exc)
        return
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def detect_alert(command: str) -> Tuple[Optional[str], Optional[str]]:
    lowered = command.lower().strip()
    if "rm -rf /" in lowered:
        return ("Destructive wipe attempt detected", "high")
    if "cat /etc/passwd" in lowered or "cat /etc/shadow" in lowered:
        return ("Credential file access attempt", "high")
    if lowered.startswith("sudo"):
        return ("Privilege escalation attempt", "medium")
    if lowered.startswith("ls") or lowered.startswith("dir"):
        return ("Directory enumeration detected", "low")
    if "curl" in lowered or "wget" in lowered:
        return ("External fetch attempt", "low")
    return (None, None)


def build_log_entry(
    *,
    username: str,
    hostname: str,
    command: str,
    mode: str,
) -> Dict[str, Any]:
    alert, severity = detect_alert(command)
    return {
        "user": username,
        "host": hostname,
        "command": command,
        "mode": mode,
        "alert": alert,
        "severity": severity,
    }


def record_command(entry: Dict[str, Any]) -> None:
    if entry["alert"]:
        logger.info(
            "User command=%r mode=%s alert=%r severity=%s",
            entry["command"],
            entry["mode"],
            entry["alert"],
            entry["severity"],
        )
    else:
        logger.info("User command=%r mode=%s", entry["command"], entry["mode"])


def record_output(output: str) -> None:
    logger.info("AI output=%r", output)
