"""
Unit tests for the tour timer and the tour service that drives it
"""
import asyncio

import pytest

from heritage_map.core.exceptions import TourSessionLimitError, TourSessionNotFoundError, TourStateError
from heritage_map.core.tour import TourController, TourSession, TourState
from heritage_map.services.tour_scheduler import TourScheduler
from heritage_map.services.tour_service import TourService, TourSessionStore


async def no_wait(seconds):
    await asyncio.sleep(0)


async def drain(rounds: int = 50):
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_scheduler_ticks_until_complete(kolkata_pois):
    intervals = []

    async def recording_sleep(seconds):
        intervals.append(seconds)
        await asyncio.sleep(0)

    controller = TourController(kolkata_pois)
    state = {"session": controller.start(TourSession(session_id="t1"), kolkata_pois[0])}

    def step():
        state["session"] = controller.advance(state["session"])
        return state["session"]

    scheduler = TourScheduler(interval_seconds=7.0, sleep=recording_sleep)
    result = await scheduler.start("t1", step)

    assert result.state == TourState.COMPLETE
    assert result.history == ("A", "B", "C")
    assert intervals == [7.0, 7.0, 7.0]
    assert not scheduler.is_running("t1")


@pytest.mark.asyncio
async def test_scheduler_stop_cancels_pending_tick():
    gate = asyncio.Event()
    calls = []

    async def blocked_sleep(seconds):
        await gate.wait()

    def step():
        calls.append(1)
        return TourSession(session_id="t1", state=TourState.FLYING)

    scheduler = TourScheduler(sleep=blocked_sleep)
    task = scheduler.start("t1", step)
    await asyncio.sleep(0)
    assert scheduler.is_running("t1")

    assert scheduler.stop("t1") is True
    with pytest.raises(asyncio.CancelledError):
        await task
    assert calls == []
    assert scheduler.stop("t1") is False


@pytest.mark.asyncio
async def test_scheduler_restart_replaces_previous_timer():
    gate = asyncio.Event()

    async def blocked_sleep(seconds):
        await gate.wait()

    scheduler = TourScheduler(sleep=blocked_sleep)
    first = scheduler.start("t1", lambda: TourSession(session_id="t1"))
    second = scheduler.start("t1", lambda: TourSession(session_id="t1"))
    await asyncio.sleep(0)

    assert first.cancelled()
    assert scheduler.is_running("t1")
    assert scheduler.stop_all() == 1
    assert not scheduler.is_running("t1")
    with pytest.raises(asyncio.CancelledError):
        await second


@pytest.mark.asyncio
async def test_autoplay_tour_runs_to_completion(kolkata_pois):
    service = TourService(scheduler=TourScheduler(sleep=no_wait))

    record = service.start_tour(kolkata_pois, kolkata_pois[0], autoplay=True)
    session_id = record.session.session_id
    assert service.scheduler.is_running(session_id)

    await drain()

    assert service.get(session_id).session.state == TourState.COMPLETE
    assert service.get(session_id).session.history == ("A", "B", "C")
    assert not service.scheduler.is_running(session_id)


@pytest.mark.asyncio
async def test_pause_stops_timer_and_resume_restarts_it(kolkata_pois):
    gate = asyncio.Event()

    async def gated_sleep(seconds):
        await gate.wait()

    service = TourService(scheduler=TourScheduler(sleep=gated_sleep))
    session_id = service.start_tour(kolkata_pois, kolkata_pois[0], autoplay=True).session.session_id

    paused = service.pause(session_id)
    assert paused.session.state == TourState.PAUSED
    assert not service.scheduler.is_running(session_id)

    resumed = service.resume(session_id)
    assert resumed.session.state == TourState.FLYING
    assert service.scheduler.is_running(session_id)

    service.end(session_id)
    assert not service.scheduler.is_running(session_id)
    await drain(3)
    with pytest.raises(TourSessionNotFoundError):
        service.get(session_id)


def test_manual_tour_has_no_timer(kolkata_pois):
    service = TourService(scheduler=TourScheduler(sleep=no_wait))
    record = service.start_tour(kolkata_pois, kolkata_pois[0])
    session_id = record.session.session_id

    assert not service.scheduler.is_running(session_id)
    assert service.advance(session_id).session.current.id == "B"
    assert service.advance(session_id).session.current.id == "C"
    assert service.advance(session_id).session.state == TourState.COMPLETE


def test_reset_then_pause_is_rejected(kolkata_pois):
    service = TourService(scheduler=TourScheduler(sleep=no_wait))
    session_id = service.start_tour(kolkata_pois, kolkata_pois[0]).session.session_id

    assert service.reset(session_id).session.state == TourState.IDLE
    with pytest.raises(TourStateError):
        service.pause(session_id)


def test_session_store_limit(kolkata_pois):
    service = TourService(
        scheduler=TourScheduler(sleep=no_wait),
        store=TourSessionStore(max_sessions=1),
    )
    service.start_tour(kolkata_pois, kolkata_pois[0])
    with pytest.raises(TourSessionLimitError):
        service.start_tour(kolkata_pois, kolkata_pois[1])


def test_unknown_session():
    service = TourService(scheduler=TourScheduler(sleep=no_wait))
    with pytest.raises(TourSessionNotFoundError):
        service.advance("missing")


def test_injected_store_and_scheduler_are_kept():
    store = TourSessionStore(max_sessions=2)
    scheduler = TourScheduler(sleep=no_wait)
    service = TourService(scheduler=scheduler, store=store)
    assert service.store is store
    assert service.scheduler is scheduler


def _finish(service, session_id):
    while service.get(session_id).session.state == TourState.FLYING:
        service.advance(session_id)


def test_completed_tours_make_room_for_new_ones(kolkata_pois):
    service = TourService(
        scheduler=TourScheduler(sleep=no_wait),
        store=TourSessionStore(max_sessions=2),
    )
    first = service.start_tour(kolkata_pois, kolkata_pois[0]).session.session_id
    second = service.start_tour(kolkata_pois, kolkata_pois[1]).session.session_id
    _finish(service, first)
    _finish(service, second)

    third = service.start_tour(kolkata_pois, kolkata_pois[2]).session.session_id

    assert len(service.store) == 2
    assert service.get(third).session.state == TourState.FLYING
    with pytest.raises(TourSessionNotFoundError):
        service.get(first)
    assert service.get(second).session.state == TourState.COMPLETE


def test_reset_tours_can_be_evicted(kolkata_pois):
    service = TourService(
        scheduler=TourScheduler(sleep=no_wait),
        store=TourSessionStore(max_sessions=1),
    )
    first = service.start_tour(kolkata_pois, kolkata_pois[0]).session.session_id
    service.reset(first)

    service.start_tour(kolkata_pois, kolkata_pois[1])
    with pytest.raises(TourSessionNotFoundError):
        service.get(first)


def test_untouched_sessions_expire(kolkata_pois):
    now = [0.0]
    store = TourSessionStore(max_sessions=10, ttl_seconds=60, clock=lambda: now[0])
    service = TourService(scheduler=TourScheduler(sleep=no_wait), store=store)

    stale = service.start_tour(kolkata_pois, kolkata_pois[0]).session.session_id
    now[0] = 30.0
    recent = service.start_tour(kolkata_pois, kolkata_pois[1]).session.session_id
    now[0] = 61.0
    service.get(recent)
    now[0] = 75.0

    fresh = service.start_tour(kolkata_pois, kolkata_pois[2]).session.session_id

    assert len(store) == 2
    with pytest.raises(TourSessionNotFoundError):
        service.get(stale)
    assert service.get(recent).session.is_active
    assert service.get(fresh).session.is_active


@pytest.mark.asyncio
async def test_expired_autoplay_tour_stops_its_timer(kolkata_pois):
    gate = asyncio.Event()

    async def gated_sleep(seconds):
        await gate.wait()

    now = [0.0]
    service = TourService(
        scheduler=TourScheduler(sleep=gated_sleep),
        store=TourSessionStore(ttl_seconds=60, clock=lambda: now[0]),
    )
    stale = service.start_tour(kolkata_pois, kolkata_pois[0], autoplay=True).session.session_id
    assert service.scheduler.is_running(stale)

    now[0] = 120.0
    service.start_tour(kolkata_pois, kolkata_pois[1])

    assert not service.scheduler.is_running(stale)
    await drain(3)


@pytest.mark.asyncio
async def test_restart_after_reset(kolkata_pois):
    service = TourService(scheduler=TourScheduler(sleep=no_wait))
    session_id = service.start_tour(kolkata_pois, kolkata_pois[0]).session.session_id
    service.advance(session_id)
    service.reset(session_id)

    record = service.restart(session_id, kolkata_pois, kolkata_pois[2], autoplay=True)
    assert record.session.session_id == session_id
    assert record.session.current.id == "C"
    assert record.session.history == ("C",)
    assert service.scheduler.is_running(session_id)

    await drain()
    assert service.get(session_id).session.state == TourState.COMPLETE
    assert service.get(session_id).session.history == ("C", "B", "A")


def test_restart_requires_idle(kolkata_pois):
    service = TourService(scheduler=TourScheduler(sleep=no_wait))
    session_id = service.start_tour(kolkata_pois, kolkata_pois[0]).session.session_id
    with pytest.raises(TourStateError):
        service.restart(session_id, kolkata_pois, kolkata_pois[1])
    assert service.get(session_id).session.current.id == "A"
