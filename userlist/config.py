"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (endpoint URL, window/avatars look, log settings).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

USERS_URL = "https://jsonplaceholder.typicode.com/users"

# None = requests' default (no timeout)
REQUEST_TIMEOUT_SEC = None

WINDOW_TITLE = "Users"
WINDOW_SIZE = "420x640"

AVATAR_SIZE = 50
AVATAR_COLOR = "#1e6fd9"

BG_COLOR = "#f2f2f7"       # list background (light grey)
ROW_BG_COLOR = "#ffffff"
EMAIL_COLOR = "#8e8e93"

# maximum number of log lines kept in the Logs panel (oldest trimmed)
LOG_MAX_LINES = 1000
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOTIFY_TIMEOUT_SEC = 5
