"""
Design (ui.py)
- Purpose: Build and manage the Tkinter screen: status line, scrollable list of user rows,
           toolbar (Refresh / notifications / logs) and the Logs panel.
- Inputs: Tk root and a UserStore (created here if not given).
- Outputs: None (renders UI, calls store.fetch_users() on Refresh).
- Side effects: Creates widgets; desktop notifications (plyer) on fetch failure;
                mirrors the "userlist" logger into the Logs panel.
- Thread-safety: UI code runs on main thread; the store's worker reaches the UI only
                 through schedule(), which posts onto the Tk event loop.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional

from plyer import notification

from .config import (
    AVATAR_COLOR,
    AVATAR_SIZE,
    BG_COLOR,
    EMAIL_COLOR,
    LOG_MAX_LINES,
    NOTIFY_TIMEOUT_SEC,
    ROW_BG_COLOR,
    WINDOW_SIZE,
    WINDOW_TITLE,
)
from .logs import LogPanelHandler
from .rows import (
    RowModel,
    build_rows,
    log_lines_to_trim,
    reconcile,
    refresh_enabled,
    should_notify,
    status_text,
)
from .store import StoreSnapshot, UserStore

logger = logging.getLogger(__name__)

# Windows/macOS send <MouseWheel>; X11 sends button 4 (up) and 5 (down)
WHEEL_EVENTS = ("<MouseWheel>", "<Button-4>", "<Button-5>")


def post_to_tk(root: tk.Misc, fn: Callable[[], None]) -> bool:
    """
    Purpose: Queue fn on root's event loop from any thread.
    Outputs: False if the window is already destroyed (fn is dropped).
    """
    try:
        root.after(0, fn)
    except (RuntimeError, tk.TclError):
        logger.debug("Tk root is gone; dropped %r", fn)
        return False
    return True


def wheel_units(event) -> int:
    """Scroll amount in lines for a wheel event; negative scrolls up."""
    num = getattr(event, "num", None)
    if num == 4:
        return -1
    if num == 5:
        return 1
    delta = getattr(event, "delta", 0) or 0
    if delta == 0:
        return 0
    return int(-delta / 120) or (-1 if delta > 0 else 1)


class UserRow(tk.Frame):
    """One row: initials avatar, bold name, grey email."""

    def __init__(self, master: tk.Misc, row: RowModel):
        super().__init__(master, bg=ROW_BG_COLOR, padx=10, pady=10,
                         highlightthickness=1, highlightbackground="#d1d1d6")
        self.key = row.key

        self.avatar = tk.Canvas(self, width=AVATAR_SIZE, height=AVATAR_SIZE,
                                bg=ROW_BG_COLOR, highlightthickness=0)
        self.avatar.create_oval(1, 1, AVATAR_SIZE - 1, AVATAR_SIZE - 1, fill=AVATAR_COLOR, outline="")
        self._initials_item = self.avatar.create_text(
            AVATAR_SIZE // 2, AVATAR_SIZE // 2, fill="white", font=("Segoe UI", 13, "bold"))
        self.avatar.pack(side=tk.LEFT, padx=(0, 15))

        text_frame = tk.Frame(self, bg=ROW_BG_COLOR)
        text_frame.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.name_label = tk.Label(text_frame, bg=ROW_BG_COLOR, anchor="w",
                                   font=("Segoe UI", 14, "bold"))
        self.name_label.pack(fill=tk.X)
        self.email_label = tk.Label(text_frame, bg=ROW_BG_COLOR, fg=EMAIL_COLOR, anchor="w",
                                    font=("Segoe UI", 10))
        self.email_label.pack(fill=tk.X, pady=(5, 0))

        self.show(row)

    def show(self, row: RowModel) -> None:
        self.avatar.itemconfigure(self._initials_item, text=row.initials)
        self.name_label.configure(text=row.name)
        self.email_label.configure(text=row.email)


class UserListScreen:
    """
    Design (UserListScreen)
    - Purpose: Present the store's users; all row content comes from the latest snapshot.
    - Public attributes:
        store (UserStore): the one dependency
        enable_notifications (tk.BooleanVar): desktop notification when a fetch fails
        show_logs (tk.BooleanVar): toggles visibility of the Logs panel
    - Public methods:
        schedule(fn): thread-safe way to run fn on the Tk thread (store dispatch)
        render(snapshot): repaint from a snapshot (subscription callback)
        close(): dispose the subscription and detach the log handler
    """

    def __init__(self, root: tk.Tk, store: Optional[UserStore] = None):
        self.root = root
        self._owns_store = store is None
        self.store = store if store is not None else UserStore(dispatch=self.schedule)

        self.enable_notifications = tk.BooleanVar(value=True)
        self.show_logs = tk.BooleanVar(value=False)
        self._rows: Dict[int, UserRow] = {}
        self._closed = False
        self._last_state = self.store.state

        # Window
        self.root.title(WINDOW_TITLE)
        self.root.geometry(WINDOW_SIZE)
        self.root.rowconfigure(1, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg=BG_COLOR)

        self.status_var = tk.StringVar()
        tk.Label(self.root, textvariable=self.status_var, bg=BG_COLOR, fg="#3a3a3c",
                 anchor="w", font=("Segoe UI", 10)).grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 0))

        # Scrollable list: Canvas hosting a Frame of UserRow widgets
        list_frame = tk.Frame(self.root, bg=BG_COLOR)
        list_frame.grid(row=1, column=0, sticky="nsew", padx=10, pady=(5, 5))
        list_frame.rowconfigure(0, weight=1)
        list_frame.columnconfigure(0, weight=1)

        self.canvas = tk.Canvas(list_frame, bg=BG_COLOR, highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew")
        scrollbar = ttk.Scrollbar(list_frame, orient=tk.VERTICAL, command=self.canvas.yview)
        scrollbar.grid(row=0, column=1, sticky="ns")
        self.canvas.configure(yscrollcommand=scrollbar.set)

        self.rows_frame = tk.Frame(self.canvas, bg=BG_COLOR)
        self._rows_window = self.canvas.create_window((0, 0), window=self.rows_frame, anchor="nw")
        self.rows_frame.bind(
            "<Configure>", lambda _e: self.canvas.configure(scrollregion=self.canvas.bbox("all")))
        self.canvas.bind(
            "<Configure>", lambda e: self.canvas.itemconfigure(self._rows_window, width=e.width))
        for sequence in WHEEL_EVENTS:
            self.canvas.bind_all(sequence, self._on_mousewheel)

        # Buttons & toggles
        button_frame = tk.Frame(self.root, bg=BG_COLOR)
        button_frame.grid(row=2, column=0, sticky="ew", padx=10, pady=(0, 10))

        self.refresh_button = ttk.Button(button_frame, text="Refresh", command=self.refresh)
        self.refresh_button.pack(side=tk.LEFT, padx=5)

        tk.Checkbutton(
            button_frame,
            text="Enable Notifications",
            variable=self.enable_notifications,
            bg=BG_COLOR,
            activebackground=BG_COLOR,
        ).pack(side=tk.LEFT, padx=5)

        tk.Checkbutton(
            button_frame,
            text="Show Logs",
            variable=self.show_logs,
            bg=BG_COLOR,
            activebackground=BG_COLOR,
            command=self.toggle_logs,
        ).pack(side=tk.LEFT, padx=5)

        self.logs_box = tk.Text(self.root, height=6, bg="#1b1b1b", fg="#dddddd", wrap="none")
        self.logs_box.configure(state="disabled")
        self.logs_box.grid(row=3, column=0, sticky="ew", padx=10, pady=(0, 6))
        self.logs_box.grid_remove()  # hidden by default

        self.log_handler = LogPanelHandler(self.post_log)
        logging.getLogger("userlist").addHandler(self.log_handler)

        self.subscription = self.store.subscribe(self.render)
        self.render(self.store.snapshot())

    # ---------- Public API for the store ----------

    def schedule(self, fn: Callable[[], None]) -> None:
        """
        Purpose: Run fn on the main thread.
        Thread-safety: Safe to call from any thread (posts via Tk.after()).
        """
        post_to_tk(self.root, fn)

    def post_log(self, line: str) -> None:
        """Log handler sink; may be called from the worker thread."""
        post_to_tk(self.root, lambda: self._append_log(line))

    # ---------- Rendering ----------

    def render(self, snapshot: StoreSnapshot) -> None:
        """
        Purpose: Repaint status line and rows from snapshot.
        Side effects: Rows are reconciled by User.id, so existing row widgets are reused.
        Thread-safety: Main thread only.
        """
        self.status_var.set(status_text(snapshot))
        self.refresh_button.configure(state="normal" if refresh_enabled(snapshot) else "disabled")

        self._rows = reconcile(self._rows, build_rows(snapshot.users),
                               create=lambda row: UserRow(self.rows_frame, row),
                               update=lambda widget, row: widget.show(row),
                               destroy=lambda widget: widget.destroy())
        # re-pack in snapshot order (server order)
        for widget in self._rows.values():
            widget.pack_forget()
        for widget in self._rows.values():
            widget.pack(fill=tk.X, pady=(0, 10))

        if should_notify(self._last_state, snapshot, self.enable_notifications.get()):
            self._notify_failure(status_text(snapshot))
        self._last_state = snapshot.state

    def row_widget(self, user_id: int) -> Optional[UserRow]:
        return self._rows.get(user_id)

    # ---------- UI callbacks & utilities ----------

    def refresh(self) -> None:
        self.store.fetch_users()

    def toggle_logs(self) -> None:
        if self.show_logs.get():
            self.logs_box.grid()
        else:
            self.logs_box.grid_remove()

    def _on_mousewheel(self, event) -> None:
        self.canvas.yview_scroll(wheel_units(event), "units")

    def _notify_failure(self, message: str) -> None:
        try:
            notification.notify(title=WINDOW_TITLE, message=message, timeout=NOTIFY_TIMEOUT_SEC)
        except NotImplementedError:
            logger.warning("Desktop notifications are not available on this platform")

    def _append_log(self, text: str) -> None:
        """
        Purpose: Append one line to the Logs panel and trim to LOG_MAX_LINES.
        Thread-safety: Main thread only (called via after()).
        """
        self.logs_box.configure(state="normal")
        self.logs_box.insert("end", text)
        self.logs_box.see("end")
        total_lines = int(self.logs_box.index("end-1c").split(".")[0])
        remove = log_lines_to_trim(total_lines, LOG_MAX_LINES)
        if remove:
            self.logs_box.delete("1.0", f"{remove + 1}.0")
        self.logs_box.configure(state="disabled")

    # ---------- Teardown ----------

    def close(self) -> None:
        """Dispose the store subscription and stop mirroring logs. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self.subscription.dispose()
        logging.getLogger("userlist").removeHandler(self.log_handler)
        for sequence in WHEEL_EVENTS:
            self.canvas.unbind_all(sequence)
        if self._owns_store:
            self.store.close()
