"""Feature routers mounted under ``Settings.api_prefix``."""
