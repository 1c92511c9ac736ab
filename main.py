"""
Entry point: wire store -> screen, start the first fetch, run the Tk loop.
"""

import logging
import tkinter as tk

from userlist.logs import configure_logging
from userlist.store import UserStore
from userlist.ui import UserListScreen, post_to_tk

logger = logging.getLogger("userlist.main")


def main() -> None:
    configure_logging()
    root = tk.Tk()
    store = UserStore(dispatch=lambda fn: post_to_tk(root, fn))
    screen = UserListScreen(root, store)

    def on_close():
        screen.close()
        store.close()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    try:
        store.load()
        root.mainloop()
    finally:
        # idempotent; covers exits that skip WM_DELETE_WINDOW (e.g. Ctrl+C)
        screen.close()
        store.close()
        logger.info("Shut down")


if __name__ == "__main__":
    main()
