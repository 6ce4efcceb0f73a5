import asyncio

from class_store import ClassStore
from debounce import Debouncer
from views import class_list_view


def test_only_the_last_value_fires():
    fired = []

    async def scenario():
        debouncer = Debouncer(fired.append, delay=0.05)
        for text in ("p", "pr", "pri"):
            debouncer.push(text)
            await asyncio.sleep(0.01)
        assert fired == []
        assert debouncer.pending
        await asyncio.sleep(0.1)
        assert not debouncer.pending

    asyncio.run(scenario())
    assert fired == ["pri"]


def test_cancel_and_flush():
    fired = []

    async def scenario():
        debouncer = Debouncer(fired.append, delay=0.05)
        debouncer.push("dropped")
        debouncer.cancel()
        await asyncio.sleep(0.1)
        debouncer.push("now")
        debouncer.flush()
        assert fired == ["now"]
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert fired == ["now"]


def test_runs_immediately_outside_an_event_loop():
    fired = []
    Debouncer(fired.append).push("x")
    assert fired == ["x"]


def test_list_view_commits_search_after_quiet_period():
    view = class_list_view(ClassStore())
    view._debouncer.delay = 0.05

    async def scenario():
        view.set_search("py")
        view.set_search("python")
        assert view.is_typing
        assert view.search_term == ""
        assert len(view.result().items) == 3

        await asyncio.sleep(0.1)
        assert not view.is_typing
        assert view.search_term == "python"
        assert [c.title for c in view.result().items] == ["Python Data Structures"]

    asyncio.run(scenario())


def test_clear_filters_drops_pending_search():
    view = class_list_view(ClassStore())
    view._debouncer.delay = 0.05

    async def scenario():
        view.set_search("react")
        view.clear_filters()
        await asyncio.sleep(0.1)
        assert view.search_term == ""
        assert view.search_input == ""

    asyncio.run(scenario())
