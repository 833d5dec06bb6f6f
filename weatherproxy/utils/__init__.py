"""Utility helpers."""
from .network import client_identity  # noqa: F401
from .time import format_local_time, is_daytime, to_epoch, utc_now  # noqa: F401
