import json
import os, sys
from pathlib import Path

import pytest

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Pin configuration before mitter_sdk.config is imported
os.environ.setdefault("MITTER_API_BASE_URL", "https://api.test.mitter.io")
os.environ.setdefault("MITTER_APPLICATION_ID", "test-app")
os.environ.setdefault("MITTER_MAX_MESSAGE_LIST_LENGTH", "50")

from mitter_sdk.models import SENT_TIME_EVENT, ChannelReferencingMessage, TimelineEvent
from mitter_sdk.clients import ApiClient
from mitter_sdk.pagination import CursorPage, Direction, PageCursor


def make_message(message_id: str, sent_ms: int, text: str = "", channel_id: str = "chan-1"):
    return ChannelReferencingMessage(
        message_id=message_id,
        text_payload=text or f"text {message_id}",
        timeline_events=[TimelineEvent(type=SENT_TIME_EVENT, event_time_ms=sent_ms)],
        channel_id=channel_id,
    )


def make_history(count: int, channel_id: str = "chan-1"):
    """``count`` messages ordered oldest -> newest, ids m000.. with increasing send times."""
    return [make_message(f"m{i:03d}", 1_000 + i, channel_id=channel_id) for i in range(count)]


class HistoryGateway:
    """Serves pages out of an in-memory history the way the platform does."""

    def __init__(self, history):
        self.history = list(history)
        self.calls = []
        self.fail_next = None

    async def fetch_page(self, channel_id, cursor: PageCursor, limit):
        self.calls.append((channel_id, cursor, limit))
        if self.fail_next is not None:
            exc, self.fail_next = self.fail_next, None
            raise exc

        ids = [m.message_id for m in self.history]
        if cursor.after is not None:
            start = ids.index(cursor.after) + 1
            batch = self.history[start : start + limit]
            has_more = start + limit < len(self.history)
            direction = Direction.FORWARD
        else:
            end = ids.index(cursor.before) if cursor.before is not None else len(self.history)
            begin = max(0, end - limit)
            batch = self.history[begin:end]
            has_more = begin > 0
            direction = Direction.BACKWARD

        page = CursorPage.from_items(batch, direction=direction, limit=limit)
        return CursorPage(
            items=page.items,
            next_before_cursor=page.next_before_cursor,
            next_after_cursor=page.next_after_cursor,
            has_more=has_more,
        )


@pytest.fixture
def history_gateway():
    return HistoryGateway


@pytest.fixture
def message_factory():
    return make_message


@pytest.fixture
def history_factory():
    return make_history


class FakeResponse:
    def __init__(self, status=200, payload=None, text=None):
        self.status = status
        self._payload = payload
        self._text = text
        if payload is not None:
            self.content_type = "application/json"
        else:
            self.content_type = "text/plain"

    async def json(self):
        return self._payload

    async def text(self):
        if self._text is not None:
            return self._text
        return "" if self._payload is None else json.dumps(self._payload)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Records requests and replays queued responses (or raises queued exceptions)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_api():
    def _build(*responses, **kwargs):
        session = FakeSession(*responses)
        api = ApiClient("https://api.example.test", session=session, **kwargs)
        return api, session

    return _build


@pytest.fixture
def response():
    return FakeResponse
