"""Exception types raised by the RSSHub client and the tool dispatcher.

Client-side failures (``TransportFailure``, ``UpstreamStatusError``,
``DeserializationError``, ``UnknownNamespaceError``) propagate to the
dispatcher, which turns them into in-band error envelopes.  ``ToolCallError``
subclasses are raised by the dispatcher itself before any component runs.
"""

from __future__ import annotations


class RSSHubError(Exception):
    """Base exception for every failure surfaced by the RSSHub core."""
    pass


class TransportFailure(RSSHubError):
    """All retry attempts failed at the transport level (connect/DNS/timeout)."""
    pass


class UpstreamStatusError(RSSHubError):
    """The server answered, but with a non-2xx status. Never retried."""

    def __init__(self, endpoint: str, status_code: int):
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(f"Failed to fetch {endpoint}: HTTP {status_code}")


class DeserializationError(RSSHubError):
    """A 2xx body was not JSON or did not match the expected schema."""
    pass


class UnknownNamespaceError(RSSHubError):
    """A search or suggestion targeted a namespace absent from the catalog."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"Namespace not found: {namespace}")


class ToolCallError(RSSHubError):
    """Base for dispatcher-level failures; carries a JSON-RPC error code."""

    code = -32603


class InvalidParamsError(ToolCallError):
    code = -32602


class ToolNotFoundError(ToolCallError):
    code = -32601
