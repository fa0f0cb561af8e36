"""Internal constants shared across the library."""

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PRIVATE_KEY = "./private.pem"
DEFAULT_PUBLIC_KEY = "./public.pem"

# ------------------------------------------------------------------
# Timeouts (seconds)
# ------------------------------------------------------------------

#: Connection setup for data reads; reads should fail fast when the
#: vehicle is out of range.
DATA_CONNECT_TIMEOUT: float = 5.0
#: Connection setup (open, connect, handshake) for every other command.
ACTION_CONNECT_TIMEOUT: float = 30.0
#: Per-call budget of a single action handler invocation.
ACTION_HANDLER_TIMEOUT: float = 30.0
#: Per-call budget of a single data handler invocation.
DATA_HANDLER_TIMEOUT: float = 5.0
#: Graceful shutdown budget of the HTTP server.
SHUTDOWN_TIMEOUT: float = 15.0

# ------------------------------------------------------------------
# Wake escalation and retries
# ------------------------------------------------------------------

#: Wait after a successful wake signal before sending further commands.
WAKE_SETTLE_DELAY: float = 5.0
COMMAND_ATTEMPTS: int = 3

# ------------------------------------------------------------------
# Remote error markers meaning "already in the target state"
# ------------------------------------------------------------------

CHARGE_START_NOOP_MARKERS: tuple[str, ...] = ("already_started", "is_charging")
CHARGE_STOP_NOOP_MARKERS: tuple[str, ...] = ("not_charging",)

AUTH_REALM_HEADER = 'Basic realm="restricted", charset="UTF-8"'
