from dataclasses import dataclass, field
from typing import Tuple

from feed_relay.utils import mask_token
from feed_relay.vars import POCKET_BASE_URL

ALL_INTERFACES = "0.0.0.0"


def build_target_url(username: str, base_url: str = POCKET_BASE_URL) -> str:
    """Return the unread feed URL for ``username`` on the remote host."""
    return f"{base_url.rstrip('/')}/users/{username}/feed/unread"


def parse_listen_address(listen_address: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` listen address into its parts.

    An empty host (``":9092"``) binds every interface. Bracketed IPv6 hosts
    (``"[::1]:9092"``) are unwrapped.

    Raises:
        ValueError: if the port is missing or not a valid TCP port.
    """
    host, sep, port_text = listen_address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in listen address {listen_address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(
            f"invalid port {port_text!r} in listen address {listen_address!r}"
        ) from None
    if not 0 <= port <= 65535:
        raise ValueError(f"port {port} out of range in {listen_address!r}")
    return host or ALL_INTERFACES, port


@dataclass(frozen=True)
class RelayConfig:
    """Settings built once at startup and shared read-only by every request."""

    listen_address: str
    target_url: str
    username: str
    password: str = field(repr=False)

    @classmethod
    def from_credentials(
        cls,
        listen_address: str,
        username: str,
        password: str,
        base_url: str = POCKET_BASE_URL,
    ) -> "RelayConfig":
        return cls(
            listen_address=listen_address,
            target_url=build_target_url(username, base_url),
            username=username,
            password=password,
        )

    @property
    def redacted_target_url(self) -> str:
        """Target URL with the username segment masked, safe for logs and spans."""
        segment = f"/users/{self.username}/"
        if not self.username or segment not in self.target_url:
            return self.target_url
        masked = mask_token(self.username, self.username)
        return self.target_url.replace(segment, f"/users/{masked}/")
