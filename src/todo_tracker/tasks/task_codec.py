# src/todo_tracker/tasks/task_codec.py

"""
Text codec for the tasks file.

The file is a pretty-printed array of flat records, one per line:

    [
      { "id": 1, "title": "buy milk", "description": "", "status": "NEW" },
      { "id": 2, "title": "call \\"mom\\"", "description": "a\\nb", "status": "DONE" }
    ]

The reader is deliberately lenient (hand-edited files are expected):
- unknown keys and unparsable values are skipped field by field
- a record survives only if it has a positive id or a non-empty title
- nothing here raises on malformed content

No general-purpose parser is used; the splitting rules are quote-aware
scanners so commas and braces inside string values are never treated as
separators.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

EMPTY_ARRAY = "[]"

_RECORD_TEMPLATE = '  {{ "id": {id}, "title": "{title}", "description": "{description}", "status": "{status}" }}'

# Whitespace allowed between "}" and "," and "{" at a record boundary.
_WS = re.compile(r"\s*")

_UNESCAPES = {'"': '"', "n": "\n", "\\": "\\"}


# ---- escaping ----


def escape(raw: str | None) -> str:
    if raw is None:
        return ""
    return raw.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "")


def unescape(escaped: str | None) -> str:
    """
    Reverse of escape(): \\" -> ", \\n -> newline, \\\\ -> \\.

    Single left-to-right pass, so an escaped backslash followed by a literal
    "n" stays a backslash and an "n". Unknown escapes are kept verbatim.
    """
    if not escaped:
        return ""
    out: list[str] = []
    i = 0
    n = len(escaped)
    while i < n:
        ch = escaped[i]
        if ch == "\\" and i + 1 < n and escaped[i + 1] in _UNESCAPES:
            out.append(_UNESCAPES[escaped[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


# ---- writer ----


def encode_task(task: Task) -> str:
    return _RECORD_TEMPLATE.format(
        id=int(task.id),
        title=escape(task.title),
        description=escape(task.description),
        status=task.status.value,
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks in the given order. An empty collection is "[\\n\\n]"."""
    return "[\n" + ",\n".join(encode_task(t) for t in tasks) + "\n]"


# ---- scanners ----


def _scan(text: str):
    """Yield (index, char, in_string) for every character, tracking quotes and escapes."""
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        yield i, ch, in_string
        if escaped:
            escaped = False
        elif ch == "\\" and in_string:
            escaped = True
        elif ch == '"':
            in_string = not in_string


def _boundary_end(body: str, i: int) -> int | None:
    """If body[i] == "}" starts a "} , {" boundary, return the index of the "{"."""
    j = _WS.match(body, i + 1).end()
    if j >= len(body) or body[j] != ",":
        return None
    k = _WS.match(body, j + 1).end()
    if k >= len(body) or body[k] != "{":
        return None
    return k


def split_records(body: str) -> list[str]:
    """
    Split the array body into record texts.

    A boundary is "}" + optional whitespace + "," + optional whitespace + "{".
    Inside a quoted string it only counts when it spans a line break: the
    writer never emits raw newlines in values, so an unbalanced quote in one
    hand-edited record cannot swallow the records after it. Quote state
    starts over with every record. The braces stay with their records.
    """
    parts: list[str] = []
    start = 0
    in_string = False
    escaped = False
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "}" and not escaped:
            k = _boundary_end(body, i)
            if k is not None and (not in_string or "\n" in body[i + 1 : k]):
                parts.append(body[start : i + 1])
                start = i = k
                in_string = False
                continue
        if escaped:
            escaped = False
        elif ch == "\\" and in_string:
            escaped = True
        elif ch == '"':
            in_string = not in_string
        i += 1
    parts.append(body[start:])
    return parts


def split_fields(record: str) -> list[str]:
    """Split a record body on commas that are not inside a quoted string."""
    fields: list[str] = []
    start = 0
    for i, ch, in_string in _scan(record):
        if ch == "," and not in_string:
            fields.append(record[start:i])
            start = i + 1
    fields.append(record[start:])
    return fields


# ---- reader ----


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def decode_task(record: str) -> Task | None:
    """
    Parse one record text. Returns None when the record is dropped
    (no positive id and no title).
    """
    body = record.strip()
    if body.startswith("{"):
        body = body[1:]
    if body.endswith("}"):
        body = body[:-1]
    body = body.strip()
    if not body:
        return None

    task_id = 0
    title = ""
    description = ""
    status = TaskStatus.NEW

    for field in split_fields(body):
        key, sep, raw_value = field.partition(":")
        if not sep:
            continue
        key = key.strip().replace('"', "")
        value = unescape(_strip_quotes(raw_value.strip()))

        try:
            if key == "id":
                task_id = int(value)
            elif key == "title":
                title = value
            elif key == "description":
                description = value
            elif key == "status":
                status = TaskStatus.from_name(value)
        except (KeyError, ValueError):
            logger.debug("Skipping unparsable field %s=%r", key, value)

    if task_id > 0 or title:
        return Task(id=task_id, title=title, description=description, status=status)
    return None


def decode_tasks(text: str | None) -> list[Task]:
    """Parse the whole file content into tasks, in file order."""
    content = (text or "").strip()
    if not content or content == EMPTY_ARRAY:
        return []

    if content.startswith("["):
        content = content[1:]
    if content.endswith("]"):
        content = content[:-1]
    content = content.strip()
    if not content:
        return []

    tasks: list[Task] = []
    for record in split_records(content):
        task = decode_task(record)
        if task is None:
            logger.debug("Dropped malformed task record: %r", record[:80])
            continue
        tasks.append(task)
    return tasks


def next_id_after(tasks: Iterable[Task]) -> int:
    return max((t.id for t in tasks), default=0) + 1
