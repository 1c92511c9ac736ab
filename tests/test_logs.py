import logging

from userlist.logs import LogPanelHandler


def test_handler_sends_formatted_lines():
    lines = []
    handler = LogPanelHandler(lines.append)
    log = logging.getLogger("userlist.test_logs")
    log.addHandler(handler)
    log.setLevel(logging.INFO)
    try:
        log.debug("hidden")
        log.warning("Error fetching users: %s", "network error: down")
    finally:
        log.removeHandler(handler)
    assert len(lines) == 1
    assert lines[0].endswith("WARNING userlist.test_logs: Error fetching users: network error: down\n")
