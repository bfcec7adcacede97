"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Security and redaction
REDACTED = "[REDACTED]"
DEFAULT_HSTS_MAX_AGE = 31536000  # 1 year in seconds

# Pagination bounds shared by request parsing and response wrapping
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Password policy
MIN_PASSWORD_LENGTH = 6
MIN_PASSWORD_CHARACTER_CLASSES = 2
