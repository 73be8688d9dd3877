"""Connection pool management for etcd cluster members."""

import asyncio
from typing import Dict, Optional

import grpc
import structlog

from etcdkv.errors import ConnectError
from etcdkv.types import ChannelConfig

logger = structlog.get_logger(__name__)


class ConnectionPool:
    """Manages gRPC channels to cluster members, one per address."""

    def __init__(self, channel_config: Optional[ChannelConfig] = None):
        self._config = channel_config or ChannelConfig()
        self._channels: Dict[str, grpc.aio.Channel] = {}
        self._ready: Dict[str, bool] = {}
        self._closed = False
        self._lock = asyncio.Lock()
        self._connect_timeout = self._config.connect_timeout / 1000.0  # Convert to seconds

    async def get_channel(self, address: str) -> grpc.aio.Channel:
        """Get or create a channel for the given address (no readiness check)."""
        if self._closed:
            raise ConnectError("Connection pool is closed", address)

        async with self._lock:
            return self._get_or_create_channel(address)

    async def wait_ready(self, address: str) -> grpc.aio.Channel:
        """Get a channel for the address and wait until it is connected.

        Raises:
            ConnectError: If the channel is not ready within connect_timeout
        """
        channel = await self.get_channel(address)
        if self._ready.get(address):
            return channel

        try:
            await asyncio.wait_for(channel.channel_ready(), self._connect_timeout)
        except asyncio.TimeoutError as e:
            raise ConnectError(
                f"Timed out connecting to {address} after "
                f"{self._config.connect_timeout}ms",
                address,
            ) from e

        self._ready[address] = True
        return channel

    def _get_or_create_channel(self, address: str) -> grpc.aio.Channel:
        if address not in self._channels:
            options = list(self._config.options)
            if self._config.credentials is not None:
                channel = grpc.aio.secure_channel(
                    address, self._config.credentials, options=options
                )
            else:
                channel = grpc.aio.insecure_channel(address, options=options)

            self._channels[address] = channel
            logger.debug("channel_created", address=address)

        return self._channels[address]

    async def close(self) -> None:
        """Close all channels in the pool."""
        if self._closed:
            return

        self._closed = True

        async with self._lock:
            for channel in self._channels.values():
                await channel.close()

            self._channels.clear()
            self._ready.clear()

    def is_closed(self) -> bool:
        """Check if the connection pool is closed."""
        return self._closed
