from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from fumotion.exceptions import FumotionApiError
from fumotion.models.message import Message
from fumotion.models.user import User
from fumotion.polling import PollingLoop


def _message(message_id: int, text: str = "hi") -> Message:
    return Message(
        id=message_id,
        sender_id=2,
        receiver_id=1,
        message=text,
        created_at=datetime(2025, 1, 1, 12, message_id, tzinfo=UTC),
    )


async def _settle(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeClock:
    """Sleep replacement whose sleepers only wake on :meth:`tick`."""

    def __init__(self) -> None:
        self._sleepers: list[asyncio.Future[None]] = []

    @property
    def sleepers(self) -> int:
        return sum(1 for fut in self._sleepers if not fut.done())

    async def sleep(self, _delay: float) -> None:
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._sleepers.append(fut)
        await fut

    async def tick(self) -> None:
        sleepers, self._sleepers = self._sleepers, []
        for fut in sleepers:
            if not fut.done():
                fut.set_result(None)
        await _settle()


@dataclass
class FakeThreadClient:
    messages: list[Message] = field(default_factory=lambda: [_message(1)])
    fetches: int = 0
    fail: bool = False
    profile_fail: bool = False
    gate: asyncio.Event | None = None

    async def get_messages(self, other_user_id: int) -> list[Message]:
        self.fetches += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise FumotionApiError("boom", status=500)
        return list(self.messages)

    async def get_public_profile(self, user_id: int) -> User:
        if self.profile_fail:
            raise FumotionApiError("user not found", status=404)
        return User(id=user_id, first_name="Bob")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def thread() -> FakeThreadClient:
    return FakeThreadClient()


@pytest.mark.asyncio
async def test_initial_load_is_immediate(clock: FakeClock, thread: FakeThreadClient) -> None:
    updates: list[list[Message]] = []

    async with PollingLoop(thread, 2, sleep=clock.sleep, on_update=updates.append) as poll:
        assert thread.fetches == 1
        assert poll.loaded
        assert poll.error is None
        assert poll.counterpart is not None and poll.counterpart.first_name == "Bob"
        assert [m.id for m in poll.messages] == [1]
        assert len(updates) == 1
        assert poll.running


@pytest.mark.asyncio
async def test_each_tick_refetches_the_thread(clock: FakeClock, thread: FakeThreadClient) -> None:
    async with PollingLoop(thread, 2, sleep=clock.sleep) as poll:
        await _settle()
        thread.messages.append(_message(2, "new"))

        await clock.tick()
        assert thread.fetches == 2
        assert [m.id for m in poll.messages] == [1, 2]

        await clock.tick()
        assert thread.fetches == 3


@pytest.mark.asyncio
async def test_no_fetch_after_stop(clock: FakeClock, thread: FakeThreadClient) -> None:
    poll = PollingLoop(thread, 2, sleep=clock.sleep)
    await poll.start()
    await _settle()

    await poll.stop()
    await clock.tick()
    await clock.tick()

    assert thread.fetches == 1
    assert not poll.running
    assert clock.sleepers == 0
    await poll.stop()


@pytest.mark.asyncio
async def test_tick_skipped_while_previous_fetch_in_flight(clock: FakeClock, thread: FakeThreadClient) -> None:
    async with PollingLoop(thread, 2, sleep=clock.sleep) as poll:
        await _settle()
        thread.gate = asyncio.Event()

        await clock.tick()
        assert thread.fetches == 2
        await clock.tick()
        assert thread.fetches == 2

        thread.messages.append(_message(2))
        thread.gate.set()
        await _settle()
        assert [m.id for m in poll.messages] == [1, 2]

        await clock.tick()
        assert thread.fetches == 3


@pytest.mark.asyncio
async def test_result_arriving_after_stop_is_discarded(clock: FakeClock, thread: FakeThreadClient) -> None:
    updates: list[list[Message]] = []
    poll = PollingLoop(thread, 2, sleep=clock.sleep, on_update=updates.append)
    await poll.start()
    await _settle()
    thread.gate = asyncio.Event()
    thread.messages.append(_message(2))

    await clock.tick()
    await poll.stop()
    thread.gate.set()
    await _settle()

    assert [m.id for m in poll.messages] == [1]
    assert len(updates) == 1


@pytest.mark.asyncio
async def test_tick_errors_are_silent(clock: FakeClock, thread: FakeThreadClient) -> None:
    async with PollingLoop(thread, 2, sleep=clock.sleep) as poll:
        await _settle()
        thread.fail = True

        await clock.tick()

        assert thread.fetches == 2
        assert poll.error is None
        assert [m.id for m in poll.messages] == [1]
        assert poll.running
        assert not await poll.refresh()


@pytest.mark.asyncio
async def test_initial_failure_is_reported_and_polling_recovers(clock: FakeClock, thread: FakeThreadClient) -> None:
    thread.fail = True

    async with PollingLoop(thread, 2, sleep=clock.sleep) as poll:
        assert poll.loaded
        assert poll.error == "boom"
        assert poll.messages == []
        assert poll.running

        await _settle()
        thread.fail = False
        await clock.tick()
        assert [m.id for m in poll.messages] == [1]


@pytest.mark.asyncio
async def test_context_manager_stops_on_error(clock: FakeClock, thread: FakeThreadClient) -> None:
    poll = PollingLoop(thread, 2, sleep=clock.sleep)

    with pytest.raises(RuntimeError):
        async with poll:
            raise RuntimeError("screen crashed")

    assert not poll.running
    await clock.tick()
    assert thread.fetches == 1


@pytest.mark.asyncio
async def test_cancel_is_synchronous_and_final(clock: FakeClock, thread: FakeThreadClient) -> None:
    poll = PollingLoop(thread, 2, sleep=clock.sleep)
    await poll.start()
    await _settle()

    poll.cancel()
    await _settle()

    assert not poll.running
    await poll.start()
    assert thread.fetches == 1


@pytest.mark.asyncio
async def test_failing_update_callback_does_not_stop_polling(clock: FakeClock, thread: FakeThreadClient) -> None:
    def explode(_messages: list[Message]) -> None:
        raise ValueError("render bug")

    async with PollingLoop(thread, 2, sleep=clock.sleep, on_update=explode) as poll:
        await _settle()
        await clock.tick()
        assert thread.fetches == 2
        assert poll.running


@pytest.mark.asyncio
async def test_profile_failure_still_shows_thread(clock: FakeClock, thread: FakeThreadClient) -> None:
    thread.profile_fail = True

    async with PollingLoop(thread, 2, sleep=clock.sleep) as poll:
        assert poll.error == "user not found"
        assert poll.counterpart is None
        assert [m.id for m in poll.messages] == [1]


@pytest.mark.asyncio
async def test_initial_load_waits_for_both_fetches(clock: FakeClock, thread: FakeThreadClient) -> None:
    thread.profile_fail = True
    thread.fail = True
    thread.gate = asyncio.Event()
    poll = PollingLoop(thread, 2, sleep=clock.sleep)

    starting = asyncio.create_task(poll.start())
    await _settle()
    assert not starting.done()

    thread.gate.set()
    await starting

    assert poll.error == "user not found"
    assert poll.messages == []
    assert poll.running
    await poll.stop()
