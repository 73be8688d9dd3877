"""Type definitions for the etcd Python client."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable


# Type aliases
ByteSequence = bytes
"""Opaque byte sequence used for credentials."""

ByteLike = Union[bytes, bytearray, str]
"""Anything that can be turned into a ByteSequence."""

ChannelOption = Tuple[str, Any]
"""A single gRPC channel argument, e.g. ("grpc.keepalive_time_ms", 30000)."""


DEFAULT_CHANNEL_OPTIONS: Tuple[ChannelOption, ...] = (
    ("grpc.max_send_message_length", 100 * 1024 * 1024),
    ("grpc.max_receive_message_length", 100 * 1024 * 1024),
    ("grpc.keepalive_time_ms", 30000),
    ("grpc.keepalive_timeout_ms", 10000),
)


def to_byte_sequence(value: ByteLike) -> ByteSequence:
    """Convert a value to bytes.

    Args:
        value: bytes, bytearray, or str (UTF-8 encoded)

    Returns:
        The value as bytes
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, bytes):
        return value
    raise TypeError(f"expected bytes, bytearray or str, got {type(value).__name__}")


@runtime_checkable
class NameResolverFactory(Protocol):
    """Alternative way of discovering server addresses.

    The builder stores it as-is; the client asks it for addresses when it
    opens channels.
    """

    def resolve(self) -> List[str]:
        """Return the server addresses (host:port) to connect to."""
        ...


@dataclass(frozen=True)
class ChannelConfig:
    """Parameters used to construct gRPC channels."""

    options: Sequence[ChannelOption] = DEFAULT_CHANNEL_OPTIONS
    """gRPC channel arguments."""

    credentials: Optional[Any] = None
    """grpc.ChannelCredentials for TLS. None means an insecure channel."""

    connect_timeout: int = 5000
    """How long to wait for a channel to become ready, in milliseconds."""


@dataclass(frozen=True)
class ClientConfig:
    """Finalized configuration handed to the Client."""

    endpoints: Tuple[str, ...] = ()
    """Server endpoints, in the order they were configured."""

    user: Optional[ByteSequence] = None
    """Auth user name."""

    password: Optional[ByteSequence] = field(default=None, repr=False)
    """Auth password."""

    name_resolver_factory: Optional[NameResolverFactory] = None
    """Alternative address discovery."""

    channel_config: Optional[ChannelConfig] = None
    """Transport parameters; None means defaults."""

    lazy_initialization: bool = False
    """Delay connectivity checks until the first call."""

    def has_credentials(self) -> bool:
        """Check whether both user and password are configured."""
        return self.user is not None and self.password is not None
