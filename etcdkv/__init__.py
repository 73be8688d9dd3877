"""etcd Python client SDK.

Client configuration for an etcd-style distributed key-value store.

Example:
    >>> import asyncio
    >>> from etcdkv import ClientBuilder
    >>>
    >>> async def main():
    ...     builder = ClientBuilder.new_builder().set_endpoints("localhost:2379")
    ...     async with builder.build() as client:
    ...         channel = await client.get_channel()
    >>>
    >>> asyncio.run(main())
"""

__version__ = "0.1.0"

from etcdkv.builder import ClientBuilder
from etcdkv.client import Client
from etcdkv.errors import (
    AuthFailedError,
    ConnectError,
    EtcdError,
    InternalError,
    InvalidArgumentError,
    NullArgumentError,
    PreconditionError,
    from_grpc_error,
)
from etcdkv.types import (
    ByteSequence,
    ChannelConfig,
    ClientConfig,
    NameResolverFactory,
)

__all__ = [
    "__version__",
    # Builder and client
    "ClientBuilder",
    "Client",
    # Configuration
    "ClientConfig",
    "ChannelConfig",
    "NameResolverFactory",
    "ByteSequence",
    # Errors
    "EtcdError",
    "NullArgumentError",
    "InvalidArgumentError",
    "PreconditionError",
    "ConnectError",
    "AuthFailedError",
    "InternalError",
    "from_grpc_error",
]
