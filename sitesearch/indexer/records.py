"""
Website records read from newline-delimited JSON files.
"""
import json
import logging
from dataclasses import dataclass

from sitesearch.common.config import JSON_KEYS
from sitesearch.common.errors import IOFailure, MalformedRecordError

logger = logging.getLogger("indexer")


@dataclass(frozen=True)
class WebsiteRecord:
    """One crawled page."""
    text: str
    title: str
    url: str


def parse_record(line, source=None, line_number=None):
    """Build a WebsiteRecord from one JSON line."""
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(f"invalid JSON ({e.msg})", source, line_number) from e

    if not isinstance(obj, dict):
        raise MalformedRecordError("expected a JSON object", source, line_number)

    missing = [key for key in JSON_KEYS if key not in obj]
    if missing:
        raise MalformedRecordError(
            f"missing required key(s): {', '.join(missing)}", source, line_number
        )

    for key in JSON_KEYS:
        if not isinstance(obj[key], str):
            raise MalformedRecordError(
                f"key '{key}' must be a string, got {type(obj[key]).__name__}",
                source, line_number
            )

    return WebsiteRecord(text=obj['text'], title=obj['title'], url=obj['url'])


def iter_lines(paths):
    """Yield (path, line_number, line) for every non-blank line of the given files."""
    for path in paths:
        logger.info(f"Reading records from {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                for line_number, line in enumerate(f, 1):
                    if line.strip():
                        yield path, line_number, line
        except OSError as e:
            raise IOFailure(f"Could not read input file {path}: {e}") from e
