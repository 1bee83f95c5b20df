"""Where the log file lives."""

import re
from datetime import datetime, timezone

from footprints.config.settings import Settings


def normalize_path(path: str) -> str:
    """Normalize a vault path.

    Backslashes become forward slashes, repeated separators collapse and
    leading/trailing slashes are dropped. An empty result is the vault root "/".
    """
    path = path.replace("\\", "/")
    path = re.sub(r"/+", "/", path)
    path = path.strip("/")
    return path or "/"


def log_extension(log_format: str) -> str:
    if log_format == "csv":
        return "csv"
    if log_format == "json":
        return "jsonl"
    return "txt"  # plain or custom


def resolve_log_path(settings: Settings, now: datetime) -> str:
    """Return the vault path of the log file that receives records at ``now``."""
    base = normalize_path(settings.log_path)
    ext = log_extension(settings.format)

    if settings.derive_name_from_date:
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        name = f"log-{now.strftime('%Y-%m-%d')}.{ext}"
    else:
        name = f"activity.{ext}"

    if base == "/":
        return name
    return f"{base}/{name}"


def parent_dir(path: str) -> str:
    """Directory part of a vault path, "/" for top-level files."""
    head, _, _ = normalize_path(path).rpartition("/")
    return head or "/"
