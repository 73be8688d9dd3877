"""etcd Python client implementation."""

from typing import List, Optional

import grpc
import structlog

from etcdkv._internal.connection import ConnectionPool
from etcdkv.errors import AuthFailedError, ConnectError, InvalidArgumentError
from etcdkv.types import ClientConfig

logger = structlog.get_logger(__name__)


class Client:
    """Async etcd client.

    Usually created through ClientBuilder.build().

    Example:
        >>> config = ClientConfig(endpoints=("localhost:2379",))
        >>> async with Client(config) as client:
        ...     channel = await client.get_channel()
    """

    def __init__(self, config: ClientConfig):
        """Initialize the client.

        Args:
            config: Client configuration

        Raises:
            InvalidArgumentError: If config has no way to find servers
            AuthFailedError: If only one of user and password is set
        """
        if not config.endpoints and config.name_resolver_factory is None:
            raise InvalidArgumentError(
                "At least one endpoint or a name resolver factory is required"
            )
        if (config.user is None) != (config.password is None):
            raise AuthFailedError("user and password must be configured together")

        self._config = config
        self._pool = ConnectionPool(config.channel_config)
        self._connected = False

    @property
    def config(self) -> ClientConfig:
        return self._config

    def targets(self) -> List[str]:
        """Addresses to connect to: configured endpoints, then resolved ones.

        Duplicates are dropped, keeping the first occurrence.
        """
        addresses = list(self._config.endpoints)
        if self._config.name_resolver_factory is not None:
            addresses.extend(self._config.name_resolver_factory.resolve())
        return list(dict.fromkeys(addresses))

    async def connect(self) -> None:
        """Connect to the cluster.

        Unless lazy initialization is enabled, waits until at least one
        member is reachable. This is called automatically when using the
        client as a context manager.

        Raises:
            ConnectError: If no member is reachable
        """
        if self._connected:
            return

        if not self._config.lazy_initialization:
            await self._first_ready_channel()

        self._connected = True
        logger.info(
            "client_connected",
            endpoints=len(self._config.endpoints),
            name_resolver=self._config.name_resolver_factory is not None,
            credentials=self._config.has_credentials(),
            lazy_initialization=self._config.lazy_initialization,
        )

    async def close(self) -> None:
        """Close all connections to the cluster.

        Channels opened by a failed connect() are released as well.
        """
        if self._pool.is_closed():
            return

        await self._pool.close()
        self._connected = False
        logger.info("client_closed")

    async def __aenter__(self) -> "Client":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Async context manager exit."""
        await self.close()

    def is_connected(self) -> bool:
        """Check if the client is connected."""
        return self._connected and not self._pool.is_closed()

    async def get_channel(self) -> grpc.aio.Channel:
        """Get a ready channel to any reachable member.

        Raises:
            InvalidArgumentError: If the client is not connected
            ConnectError: If no member is reachable
        """
        if not self._connected:
            raise InvalidArgumentError("Client not connected")
        return await self._first_ready_channel()

    async def _first_ready_channel(self) -> grpc.aio.Channel:
        last_error: Optional[ConnectError] = None
        for address in self.targets():
            try:
                return await self._pool.wait_ready(address)
            except ConnectError as e:
                logger.warning("member_unreachable", address=address, error=str(e))
                last_error = e

        if last_error is not None:
            raise ConnectError(
                f"No etcd member reachable: {last_error}", last_error.address
            ) from last_error
        raise ConnectError("No etcd member addresses to connect to")
