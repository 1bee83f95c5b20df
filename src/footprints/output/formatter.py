"""Serialize activity records into log lines."""

import json

from footprints.config.settings import Settings
from footprints.events import ActivityRecord


def format_plain(record: ActivityRecord) -> str:
    return f"{record.ts} | {record.event} | {record.file}"


def format_csv(record: ActivityRecord) -> str:
    # Quotes inside values are not escaped.
    return f'"{record.ts}","{record.event}","{record.file}"'


def format_json(record: ActivityRecord) -> str:
    return json.dumps(record.to_dict())


def format_custom(record: ActivityRecord, template: str) -> str:
    """Expand %t, %e, %f, %d and %% in a template.

    Unknown placeholders are copied through, and expanded values are
    never expanded again.
    """
    values = {
        "t": record.ts,
        "e": record.event,
        "f": record.file,
        "d": record.details or "",
        "%": "%",
    }

    out = []
    i = 0
    while i < len(template):
        ch = template[i]
        if ch == "%" and i + 1 < len(template) and template[i + 1] in values:
            out.append(values[template[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def format_record(record: ActivityRecord, settings: Settings) -> str:
    """Format a record in the configured layout, plain for unknown formats."""
    if settings.format == "csv":
        return format_csv(record)
    if settings.format == "json":
        return format_json(record)
    if settings.format == "custom":
        return format_custom(record, settings.custom_format)
    return format_plain(record)


def parse_json_line(line: str) -> ActivityRecord:
    """Read back a line written in the json format."""
    return ActivityRecord.from_dict(json.loads(line))
