import asyncio

import pytest

from flux_actions.action import Action
from flux_actions.core.payload import Replacement, is_sequence, normalize_replacement
from flux_actions.core.scheduler import Scheduler
from flux_actions.hooks import AwaitResults, Hooks


def test_default_hooks() -> None:
    h = Hooks()
    assert h.run_pre_emit(1, 2) is None
    assert h.run_should_emit(1, 2) is True
    assert h.run_process_result(object()) is None


def test_hooks_subclass_override() -> None:
    class Doubling(Hooks):
        def run_pre_emit(self, *args):
            return Replacement(*(a * 2 for a in args))

    s = Scheduler()
    x = Action(Doubling(), scheduler=s)
    seen = []

    x.listen(lambda *a: seen.append(a))
    x.trigger(3)
    s.run_pending()
    assert seen == [(6,)]


def test_is_sequence() -> None:
    assert is_sequence([1])
    assert is_sequence(())
    assert not is_sequence("abc")
    assert not is_sequence(b"abc")
    assert not is_sequence({"a": 1})
    assert not is_sequence(None)


def test_normalize_replacement() -> None:
    assert normalize_replacement(None) is None
    assert normalize_replacement(Replacement()) == ()
    assert normalize_replacement(Replacement([1, 2])) == ([1, 2],)
    assert normalize_replacement([1, 2]) == (1, 2)
    assert normalize_replacement(False) == (False,)


def test_replacement_is_frozen() -> None:
    r = Replacement(1, 2)
    assert r.values == (1, 2)
    assert r == Replacement(1, 2)
    with pytest.raises(AttributeError):
        r.values = ()  # type: ignore[misc]


@pytest.mark.asyncio
async def test_await_results_tracks_async_subscribers() -> None:
    s = Scheduler()
    hooks = AwaitResults()
    x = Action(hooks, scheduler=s)
    order = []

    async def slow(v):
        await asyncio.sleep(0.01)
        order.append(("slow", v))
        return v * 2

    x.listen(slow)
    x.listen(lambda v: order.append(("sync", v)))
    x.trigger(21)
    await s.idle()
    assert order == [("sync", 21)]
    assert hooks.in_flight == 1

    assert await hooks.wait() == [42]
    assert order == [("sync", 21), ("slow", 21)]
    assert hooks.in_flight == 0
    assert await hooks.wait() == []


@pytest.mark.asyncio
async def test_await_results_reraises_subscriber_failure() -> None:
    s = Scheduler()
    hooks = AwaitResults()
    x = Action(hooks, scheduler=s)

    async def fails(*a):
        raise RuntimeError("store failed")

    x.listen(fails)
    x.trigger()
    await s.idle()
    with pytest.raises(RuntimeError, match="store failed"):
        await hooks.wait()


@pytest.mark.asyncio
async def test_await_results_forwards_futures_to_process_result() -> None:
    s = Scheduler()
    got = []
    hooks = AwaitResults(process_result=got.append)
    x = Action(hooks, scheduler=s)

    async def sub(v):
        return v

    x.listen(sub)
    x.listen(lambda v: "plain")
    x.trigger(1)
    await s.idle()
    assert len(got) == 2
    assert isinstance(got[0], asyncio.Future)
    assert got[1] == "plain"
    assert await hooks.wait() == [1]
