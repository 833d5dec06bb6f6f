"""Client identity helpers."""
from __future__ import annotations

from typing import Mapping, Optional

DEFAULT_CLIENT_IP = "127.0.0.1"


def client_identity(headers: Mapping[str, str], peer_host: Optional[str] = None) -> str:
    """Derive the rate-limit key from proxy headers or the socket peer.

    Uses the first address in ``X-Forwarded-For``, then ``X-Real-IP``, then
    ``peer_host``. The result is not authenticated.
    """

    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    real_ip = (headers.get("x-real-ip") or "").strip()
    if real_ip:
        return real_ip
    return peer_host or DEFAULT_CLIENT_IP
