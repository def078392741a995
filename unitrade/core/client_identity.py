"""
Client identity helpers.

Derives the identifier used to deduplicate anonymous requests. Kept free of
any framework types so it can be tested with plain mappings.
"""

from collections.abc import Mapping

UNKNOWN_CLIENT = "unknown"


def get_client_identifier(headers: Mapping[str, str], peer_host: str | None) -> str:
    """
    Resolve the client address for a request.

    Precedence:
        1. First entry of X-Forwarded-For (set by the reverse proxy)
        2. The direct peer address
        3. "unknown"

    Args:
        headers: Request headers. Lookup is tried as given and lowercased.
        peer_host: Address of the directly connected peer, if any

    Returns:
        Client identifier string
    """
    forwarded = headers.get("x-forwarded-for") or headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    if peer_host:
        return peer_host

    return UNKNOWN_CLIENT
