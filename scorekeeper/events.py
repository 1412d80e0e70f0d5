"""Read and validate stored event documents.

The event file is written by the application's persistence layer; this
module only reads it. The scoring engine trusts what it gets from here:
every score has a known judge role, a value within 1-100, a run of 1 or 2,
and there is at most one score per (judge, category, athlete, run, attempt).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from scorekeeper.models import Athlete, Category, Event, Score
from scorekeeper.validation import EventDocument, validation_messages

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "SCOREKEEPER_DATA_DIR"
EVENT_FILENAME = "event.json"
ALLOWED_URL_SCHEMES = ("http", "https")
FETCH_TIMEOUT = 30.0


class EventFormatError(ValueError):
    """Raised when an event document is malformed.

    Attributes:
        errors: One message per problem found, in document order
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        if self.errors:
            message = f"{message}: " + "; ".join(self.errors)
        super().__init__(message)


class EventFetchError(Exception):
    """Error fetching an event document over HTTP."""
    pass


def default_event_path() -> Path:
    """Location of event.json: $SCOREKEEPER_DATA_DIR, falling back to ./data."""
    data_dir = os.environ.get(DATA_DIR_ENV) or Path.cwd() / "data"
    return Path(data_dir) / EVENT_FILENAME


def dedupe_scores(scores: list[Score]) -> list[Score]:
    """Keep only the last score for each (judge, category, athlete, run, attempt).

    The stored file should already hold one entry per key; this guards the
    engine against a writer that appended instead of replacing. Order of the
    surviving scores follows their last occurrence.
    """
    latest: dict[tuple, Score] = {}
    for score in scores:
        latest.pop(score.key, None)
        latest[score.key] = score
    dropped = len(scores) - len(latest)
    if dropped:
        logger.warning("Dropped %d superseded duplicate score(s)", dropped)
    return list(latest.values())


def event_from_dict(data: Any) -> Event:
    """Validate a decoded event document and build an Event from it.

    Fields other than the event header, categories and scores (keys, live
    state, locked runs) are ignored. Whole-number floats such as 80.0 are
    accepted as integers.

    Raises:
        EventFormatError: If the document is not a valid event
    """
    if not isinstance(data, dict):
        raise EventFormatError("Event document must be a JSON object")

    try:
        document = EventDocument.model_validate(data)
    except ValidationError as e:
        raise EventFormatError("Invalid event", validation_messages(e)) from e

    categories = [
        Category(
            id=cat.id,
            name=cat.name,
            athletes=[Athlete(bib=a.bib, name=a.name) for a in cat.athletes],
        )
        for cat in document.categories
    ]
    return Event(
        id=document.id,
        name=document.name,
        created_at=document.createdAt,
        categories=categories,
        scores=dedupe_scores([Score.from_dict(s.model_dump()) for s in document.scores]),
    )


def parse_event(content: bytes | str) -> Event:
    """Parse raw event.json content into an Event.

    Raises:
        EventFormatError: If the content is not JSON or not a valid event
    """
    if isinstance(content, bytes):
        # utf-8-sig also accepts files saved with a BOM
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise EventFormatError(f"Invalid encoding: {e}") from e
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise EventFormatError(f"Invalid JSON: {e}") from e
    return event_from_dict(data)


def load_event(path: str | Path | None = None) -> Event | None:
    """Load the event from disk.

    Args:
        path: Path to event.json; defaults to default_event_path()

    Returns:
        The parsed Event, or None if the file does not exist yet

    Raises:
        EventFormatError: If the file exists but is not a valid event
    """
    path = Path(path) if path is not None else default_event_path()
    if not path.exists():
        logger.info("No event file at %s", path)
        return None
    return parse_event(path.read_bytes())


def fetch_event(url: str, transport: httpx.BaseTransport | None = None) -> Event:
    """Fetch an exported event document from a URL and parse it.

    Args:
        url: http(s) URL of an event JSON export
        transport: Optional httpx transport, for tests

    Raises:
        EventFetchError: If the URL is unsupported or the request fails
        EventFormatError: If the response is not a valid event
    """
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_URL_SCHEMES:
        raise EventFetchError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(
            follow_redirects=True, timeout=FETCH_TIMEOUT, transport=transport
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise EventFetchError(f"HTTP error fetching event: {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise EventFetchError(f"Error fetching event: {e}") from e

    return parse_event(response.content)
