import logging
from types import SimpleNamespace

import pytest

tk = pytest.importorskip("tkinter")

from userlist import ui  # noqa: E402
from userlist.logs import LogPanelHandler  # noqa: E402
from userlist.store import LoadState, UserStore, call_inline  # noqa: E402


class DeadRoot:
    def after(self, _ms, _fn):
        raise tk.TclError('can\'t invoke "after" command: application has been destroyed')


class LiveRoot:
    def __init__(self):
        self.queued = []

    def after(self, _ms, fn):
        self.queued.append(fn)


def test_post_to_tk_queues_on_live_root():
    root = LiveRoot()
    assert ui.post_to_tk(root, print)
    assert root.queued == [print]


def test_post_to_tk_drops_after_destroy():
    assert not ui.post_to_tk(DeadRoot(), print)


def test_late_completion_after_window_destroyed(client, session):
    root = DeadRoot()
    store = UserStore(client=client, run_async=call_inline,
                      dispatch=lambda fn: ui.post_to_tk(root, fn))
    session.reply([])
    assert store.fetch_users()
    # the completion was dropped, not raised out of the worker
    assert store.state is LoadState.LOADING


@pytest.mark.parametrize("event,units", [
    (SimpleNamespace(num=4, delta=0), -1),
    (SimpleNamespace(num=5, delta=0), 1),
    (SimpleNamespace(num="??", delta=120), -1),
    (SimpleNamespace(num="??", delta=-240), 2),
    (SimpleNamespace(num="??", delta=-1), 1),
    (SimpleNamespace(num="??", delta=0), 0),
])
def test_wheel_units(event, units):
    assert ui.wheel_units(event) == units


def test_wheel_bound_for_x11_buttons():
    assert {"<Button-4>", "<Button-5>", "<MouseWheel>"} <= set(ui.WHEEL_EVENTS)


class FakeCanvas:
    def __init__(self):
        self.unbound = []

    def unbind_all(self, sequence):
        self.unbound.append(sequence)


def test_close_releases_everything_once(store, session):
    screen = ui.UserListScreen.__new__(ui.UserListScreen)
    seen = []
    screen._closed = False
    screen._owns_store = False
    screen.store = store
    screen.subscription = store.subscribe(seen.append)
    screen.log_handler = LogPanelHandler(lambda _line: None)
    screen.canvas = FakeCanvas()
    logging.getLogger("userlist").addHandler(screen.log_handler)

    screen.close()
    screen.close()

    assert not screen.subscription.active
    assert screen.log_handler not in logging.getLogger("userlist").handlers
    assert screen.canvas.unbound == list(ui.WHEEL_EVENTS)
    session.reply([])
    store.fetch_users()
    assert seen == []
