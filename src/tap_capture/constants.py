"""Constants shared across tap-capture."""

__version__ = '0.1.0'

# Window limits accepted by begin()
MIN_DURATION_MS = 500
MAX_DURATION_MS = 10000
MIN_TARGET_COUNT = 1
MAX_TARGET_COUNT = 255

# A shorter buffer finalizes early once no tap arrived for this long
INACTIVITY_TIMEOUT = 0.4

ESCAPE_CHAR = '\x1b'
ESCAPE_SENTINEL = '#escape'

DEFAULT_LOCK_TIMEOUT = 0.25

# D-Bus names
BUS_NAME = 'org.zay.KeyPressed'
OBJECT_PATH = '/org/zay/KeyPressed'
INTERFACE_NAME = 'org.zay.KeyPressed1'
