import asyncio

import pytest

from mitter_sdk.errors import TransportFailure
from mitter_sdk.pagination import (
    CursorPage,
    Direction,
    FetchPhase,
    PageCursor,
    PaginationManager,
)


def _ids(messages):
    return [m.message_id for m in messages]


def _assert_canonical(view):
    keys = [(m.sent_time_ms, m.message_id) for m in view]
    assert keys == sorted(keys)
    assert len(set(_ids(view))) == len(view)


class StaticGateway:
    def __init__(self, *pages):
        self.pages = list(pages)
        self.calls = []

    async def fetch_page(self, channel_id, cursor, limit):
        self.calls.append(cursor)
        return self.pages.pop(0)


class BlockingGateway:
    def __init__(self, page):
        self.page = page
        self.calls = 0
        self.release = asyncio.Event()

    async def fetch_page(self, channel_id, cursor, limit):
        self.calls += 1
        await self.release.wait()
        return self.page


def test_limit_is_clamped_to_platform_maximum(history_gateway):
    manager = PaginationManager("chan-1", 500, history_gateway([]))
    assert manager.limit == 50
    assert manager.state.phase is FetchPhase.IDLE
    assert manager.current_view() == ()


@pytest.mark.asyncio
async def test_empty_channel_exhausts_backward(history_gateway):
    gateway = history_gateway([])
    manager = PaginationManager("chan-1", 5, gateway)

    assert await manager.request_more(Direction.BACKWARD) is True

    assert manager.is_exhausted(Direction.BACKWARD)
    assert manager.state.direction_phase(Direction.BACKWARD) is FetchPhase.EXHAUSTED
    assert manager.state.phase is FetchPhase.IDLE
    assert manager.current_view() == ()
    assert gateway.calls == [("chan-1", PageCursor(), 5)]


@pytest.mark.asyncio
async def test_backward_walk_over_ten_messages(history_gateway, history_factory):
    history = history_factory(10)
    gateway = history_gateway(history)
    manager = PaginationManager("chan-1", 5, gateway)

    await manager.request_more(Direction.BACKWARD)
    assert _ids(manager.current_view()) == _ids(history[5:])
    assert manager.state.phase is FetchPhase.IDLE
    assert not manager.is_exhausted(Direction.BACKWARD)

    await manager.request_more(Direction.BACKWARD)
    assert gateway.calls[1][1] == PageCursor(before="m005")
    assert manager.is_exhausted(Direction.BACKWARD)
    assert _ids(manager.current_view()) == _ids(history)

    # Exhausted directions are no-ops.
    assert await manager.request_more(Direction.BACKWARD) is False
    assert len(gateway.calls) == 2


@pytest.mark.asyncio
async def test_forward_cursor_is_seeded_from_first_backward_page(history_gateway, history_factory):
    history = history_factory(6)
    gateway = history_gateway(history[:4])
    manager = PaginationManager("chan-1", 10, gateway)

    await manager.request_more(Direction.BACKWARD)
    assert manager.state.after_cursor == "m003"

    gateway.history = history  # two new messages arrive
    await manager.request_more(Direction.FORWARD)

    assert gateway.calls[-1][1] == PageCursor(after="m003")
    assert _ids(manager.current_view()) == _ids(history)


@pytest.mark.asyncio
async def test_at_most_one_fetch_in_flight(message_factory):
    gateway = BlockingGateway(
        CursorPage(
            items=(message_factory("a", 1),),
            next_before_cursor="a",
            next_after_cursor="a",
            has_more=True,
        )
    )
    manager = PaginationManager("chan-1", 5, gateway)

    first = asyncio.create_task(manager.request_more(Direction.FORWARD))
    await asyncio.sleep(0)
    assert manager.is_loading

    assert await manager.request_more(Direction.FORWARD) is False
    assert await manager.request_more(Direction.BACKWARD) is False

    gateway.release.set()
    assert await first is True
    assert gateway.calls == 1
    assert not manager.is_loading


@pytest.mark.asyncio
async def test_directions_exhaust_independently(history_gateway, history_factory):
    history = history_factory(3)
    gateway = history_gateway(history)
    manager = PaginationManager("chan-1", 5, gateway)

    await manager.request_more(Direction.BACKWARD)
    assert manager.is_exhausted(Direction.BACKWARD)
    assert not manager.is_exhausted(Direction.FORWARD)

    gateway.history = history + history_factory(5)[3:]
    assert await manager.request_more(Direction.FORWARD) is True
    assert manager.is_exhausted(Direction.FORWARD)
    assert len(manager.current_view()) == 5
    _assert_canonical(manager.current_view())


@pytest.mark.asyncio
async def test_failed_fetch_keeps_view_and_allows_retry(history_gateway, history_factory):
    history = history_factory(8)
    gateway = history_gateway(history)
    manager = PaginationManager("chan-1", 4, gateway)
    await manager.request_more(Direction.BACKWARD)
    before = manager.current_view()

    gateway.fail_next = TransportFailure("boom", status=503)
    with pytest.raises(TransportFailure):
        await manager.request_more(Direction.BACKWARD)

    assert manager.current_view() == before
    assert manager.state.phase is FetchPhase.FAILED
    assert manager.state.direction_phase(Direction.BACKWARD) is FetchPhase.FAILED
    assert isinstance(manager.state.last_error, TransportFailure)
    assert not manager.is_loading

    assert await manager.request_more(Direction.BACKWARD) is True
    assert manager.state.phase is FetchPhase.IDLE
    assert manager.state.last_error is None
    assert _ids(manager.current_view()) == _ids(history)


@pytest.mark.asyncio
async def test_merging_same_page_twice_is_idempotent(message_factory):
    page = CursorPage(
        items=(message_factory("b", 2), message_factory("a", 1)),
        next_before_cursor="a",
        next_after_cursor="b",
        has_more=True,
    )
    manager = PaginationManager("chan-1", 5, StaticGateway(page, page))

    await manager.request_more(Direction.BACKWARD)
    once = manager.current_view()
    await manager.request_more(Direction.BACKWARD)

    assert manager.current_view() == once
    assert _ids(once) == ["a", "b"]


@pytest.mark.asyncio
async def test_latest_merged_copy_wins_on_conflict(message_factory):
    older = CursorPage(
        items=(message_factory("b", 2, text="draft"), message_factory("a", 1)),
        next_before_cursor="a",
        next_after_cursor="b",
        has_more=True,
    )
    newer = CursorPage(
        items=(message_factory("b", 2, text="edited"), message_factory("c", 3)),
        next_before_cursor="b",
        next_after_cursor="c",
        has_more=True,
    )
    manager = PaginationManager("chan-1", 5, StaticGateway(older, newer))

    await manager.request_more(Direction.BACKWARD)
    await manager.request_more(Direction.FORWARD)

    view = manager.current_view()
    assert _ids(view) == ["a", "b", "c"]
    assert view[1].text_payload == "edited"


@pytest.mark.asyncio
async def test_mixed_direction_walk_stays_ordered(history_gateway, history_factory):
    history = history_factory(30)
    gateway = history_gateway(history[:12])
    manager = PaginationManager("chan-1", 4, gateway)

    await manager.request_more(Direction.BACKWARD)
    gateway.history = history
    for direction in [Direction.FORWARD, Direction.BACKWARD, Direction.FORWARD, Direction.BACKWARD]:
        await manager.request_more(direction)
        _assert_canonical(manager.current_view())

    assert _ids(manager.current_view()) == _ids(history[0:20])


@pytest.mark.asyncio
async def test_listeners_see_loading_then_result(history_gateway, history_factory):
    manager = PaginationManager("chan-1", 5, history_gateway(history_factory(2)))
    snapshots = []
    unsubscribe = manager.subscribe(snapshots.append)

    await manager.request_more(Direction.BACKWARD)

    assert [s.is_loading for s in snapshots] == [True, False]
    assert len(snapshots[-1].messages) == 2
    assert Direction.BACKWARD in snapshots[-1].exhausted

    unsubscribe()
    manager.push([])
    await manager.request_more(Direction.FORWARD)
    assert len(snapshots) == 2


@pytest.mark.asyncio
async def test_listener_errors_do_not_break_pagination(history_gateway, history_factory):
    manager = PaginationManager("chan-1", 5, history_gateway(history_factory(2)))

    def broken(snapshot):
        raise RuntimeError("render failed")

    manager.subscribe(broken)
    assert await manager.request_more(Direction.BACKWARD) is True
    assert len(manager.current_view()) == 2


@pytest.mark.asyncio
async def test_result_after_close_is_discarded(message_factory):
    gateway = BlockingGateway(
        CursorPage(
            items=(message_factory("a", 1),),
            next_before_cursor="a",
            next_after_cursor="a",
            has_more=True,
        )
    )
    manager = PaginationManager("chan-1", 5, gateway)
    pending = asyncio.create_task(manager.request_more(Direction.BACKWARD))
    await asyncio.sleep(0)

    manager.close()
    gateway.release.set()

    assert await pending is False
    assert manager.current_view() == ()
    assert manager.is_loading is False
    assert manager.state.phase is FetchPhase.IDLE
    assert manager.state.in_flight is None
    assert await manager.request_more(Direction.BACKWARD) is False


@pytest.mark.asyncio
async def test_push_and_reopen(history_gateway, history_factory, message_factory):
    history = history_factory(3)
    gateway = history_gateway(history)
    manager = PaginationManager("chan-1", 5, gateway)
    await manager.request_more(Direction.FORWARD)
    assert manager.is_exhausted(Direction.FORWARD)

    sent = message_factory("m003", 1_003)
    assert manager.push([sent]) == 1
    assert manager.push([sent]) == 0
    assert _ids(manager.current_view())[-1] == "m003"

    gateway.history = history + [sent, message_factory("m004", 1_004)]
    manager.reopen(Direction.FORWARD)
    assert await manager.request_more(Direction.FORWARD) is True
    assert _ids(manager.current_view()) == ["m000", "m001", "m002", "m003", "m004"]
