"""
Design (rows.py)
- Purpose: Pure helpers between store state and widgets: per-user row data
           (initials, name, email, key) and keyed reconciliation of row widgets.
- Inputs: User sequences; an existing {key -> widget} mapping plus create/update/destroy hooks.
- Outputs: RowModel lists; the new {key -> widget} mapping in display order.
- Side effects: Only through the hooks passed to reconcile().
- Thread-safety: Stateless; the hooks are expected to run on the UI thread.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, TypeVar

from .models import User
from .store import LoadState, StoreSnapshot

W = TypeVar("W")


def initials(name: str) -> str:
    """
    Uppercased first letters of the first two whitespace-separated tokens.
    "Leanne Graham" -> "LG", "Madonna" -> "M", "" or "   " -> "".
    """
    return "".join(token[0] for token in name.split()[:2]).upper()


@dataclass(frozen=True)
class RowModel:
    key: int
    initials: str
    name: str
    email: str

    @classmethod
    def for_user(cls, user: User) -> "RowModel":
        return cls(key=user.id, initials=initials(user.name), name=user.name, email=user.email)


def build_rows(users: Iterable[User]) -> List[RowModel]:
    return [RowModel.for_user(u) for u in users]


def reconcile(existing: Dict[int, W], rows: List[RowModel],
              create: Callable[[RowModel], W],
              update: Callable[[W, RowModel], None],
              destroy: Callable[[W], None]) -> Dict[int, W]:
    """
    Purpose: Bring a keyed set of row widgets in line with rows.
    Inputs:
        existing: widgets from the previous render, by User.id
        rows: the new rows, in display order
        create/update/destroy: widget hooks
    Outputs: New {key -> widget} dict ordered like rows. Widgets whose key survives
             are reused (update() is called on them); others are created or destroyed.
    Note: if the server sends a duplicate id, the later row reuses the same widget slot.
    """
    result: Dict[int, W] = {}
    for row in rows:
        if row.key in result:
            update(result[row.key], row)
            continue
        widget = existing.get(row.key)
        if widget is None:
            widget = create(row)
        else:
            update(widget, row)
        result[row.key] = widget
    for key, widget in existing.items():
        if key not in result:
            destroy(widget)
    return result


def status_text(snapshot: StoreSnapshot) -> str:
    """
    Purpose: One-line summary shown above the list for a StoreSnapshot.
    Outputs: Loading / error / empty / count message.
    """
    state = snapshot.state
    if state is LoadState.LOADING:
        return "Loading users..."
    if state is LoadState.FAILED:
        reason = snapshot.last_error.reason if snapshot.last_error else "unknown error"
        return f"Could not load users: {reason}"
    if state is LoadState.IDLE:
        return ""
    if snapshot.is_empty:
        return "No users"
    # one row per id, so count what is shown
    count = len({u.id for u in snapshot.users})
    return f"{count} user" if count == 1 else f"{count} users"


def refresh_enabled(snapshot: StoreSnapshot) -> bool:
    """Refresh is unavailable while a fetch is running (it would be ignored)."""
    return snapshot.state is not LoadState.LOADING


def should_notify(prev_state: LoadState, snapshot: StoreSnapshot, enabled: bool = True) -> bool:
    """
    Purpose: Decide whether a desktop notification is due for this snapshot.
    Outputs: True only on a transition into FAILED (and when notifications are enabled).
    """
    return enabled and snapshot.state is LoadState.FAILED and prev_state is not LoadState.FAILED


def log_lines_to_trim(total_lines: int, max_lines: int) -> int:
    """Number of oldest lines to drop so the Logs panel keeps at most max_lines."""
    return max(0, total_lines - max_lines)
