"""Basic usage example for the etcdkv Python SDK."""

import asyncio

from etcdkv import ChannelConfig, ClientBuilder, ConnectError


async def main() -> None:
    """Demonstrate configuring and connecting a client."""
    # Create a builder and chain settings
    builder = (
        ClientBuilder.new_builder()
        .set_endpoints("localhost:2379", "localhost:22379")
        .set_channel_config(ChannelConfig(connect_timeout=2000))
    )

    # Derive a second configuration that adds credentials
    secured = builder.copy().set_user(b"root").set_password(b"secret")
    print(f"Plain endpoints:   {builder.get_endpoints()}")
    print(f"Secured endpoints: {secured.get_endpoints()}")

    # Use async context manager for automatic connection management
    try:
        async with builder.build() as client:
            print("Connected to etcd cluster")
            channel = await client.get_channel()
            print(f"Channel: {channel}")
    except ConnectError as e:
        print(f"Could not reach the cluster: {e}")

    # Lazy clients connect without touching the network
    async with secured.set_lazy_initialization(True).build() as client:
        print(f"Lazy client connected: {client.is_connected()}")


if __name__ == "__main__":
    asyncio.run(main())
