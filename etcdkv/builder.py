"""ClientBuilder knows how to create a Client instance.

Example:
    >>> from etcdkv import ClientBuilder
    >>>
    >>> client = (
    ...     ClientBuilder.new_builder()
    ...     .set_endpoints("localhost:2379", "localhost:22379")
    ...     .set_user(b"root")
    ...     .set_password(b"secret")
    ...     .set_lazy_initialization(True)
    ...     .build()
    ... )
"""

import copy
import os
from typing import List, Mapping, Optional

import structlog

from etcdkv.client import Client
from etcdkv.errors import (
    InternalError,
    InvalidArgumentError,
    NullArgumentError,
    PreconditionError,
)
from etcdkv.types import (
    ByteLike,
    ByteSequence,
    ChannelConfig,
    ClientConfig,
    NameResolverFactory,
    to_byte_sequence,
)

logger = structlog.get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


class ClientBuilder:
    """Accumulates client settings and builds a Client from them.

    Setters validate their own argument and return the builder so calls can
    be chained. Cross-field checks are deferred to build(), since
    intermediate states are allowed to be incomplete.

    Not thread-safe.
    """

    def __init__(self) -> None:
        self._endpoints: List[str] = []
        self._user: Optional[ByteSequence] = None
        self._password: Optional[ByteSequence] = None
        self._name_resolver_factory: Optional[NameResolverFactory] = None
        self._channel_config: Optional[ChannelConfig] = None
        self._lazy_initialization = False

    @classmethod
    def new_builder(cls) -> "ClientBuilder":
        """Create an empty builder."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientBuilder":
        """Create a builder pre-populated from ETCD_* environment variables.

        Reads ETCD_ENDPOINTS (comma separated), ETCD_USER, ETCD_PASSWORD and
        ETCD_LAZY_INIT. Unset variables leave the matching field unset.

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            InvalidArgumentError: If ETCD_ENDPOINTS contains a blank entry
        """
        env = os.environ if environ is None else environ
        builder = cls()

        endpoints = env.get("ETCD_ENDPOINTS")
        if endpoints:
            builder.set_endpoints(*endpoints.split(","))

        user = env.get("ETCD_USER")
        if user is not None:
            builder.set_user(user)

        password = env.get("ETCD_PASSWORD")
        if password is not None:
            builder.set_password(password)

        lazy = env.get("ETCD_LAZY_INIT")
        if lazy is not None:
            builder.set_lazy_initialization(lazy.strip().lower() in _TRUTHY)

        return builder

    def get_endpoints(self) -> List[str]:
        """Get the endpoints configured for the builder.

        The live list is returned, not a copy.
        """
        return self._endpoints

    def set_endpoints(self, *endpoints: str) -> "ClientBuilder":
        """Configure etcd server endpoints.

        Calls are additive: endpoints are appended to the ones already set.

        Args:
            *endpoints: etcd server endpoints, at least one

        Returns:
            This builder

        Raises:
            NullArgumentError: If endpoints is None or one of them is None
            InvalidArgumentError: If no endpoint is given or one is blank
        """
        if len(endpoints) == 1 and endpoints[0] is None:
            raise NullArgumentError("endpoints can't be None")
        if not endpoints:
            raise InvalidArgumentError("please configure at least one endpoint")

        # Validate the whole batch first so a bad element appends nothing
        trimmed = []
        for endpoint in endpoints:
            if endpoint is None:
                raise NullArgumentError("endpoint can't be None")
            if not isinstance(endpoint, str):
                raise InvalidArgumentError(
                    f"invalid endpoint: endpoint={endpoint!r}"
                )
            trimmed_endpoint = endpoint.strip()
            if not trimmed_endpoint:
                raise InvalidArgumentError(f"invalid endpoint: endpoint={endpoint!r}")
            trimmed.append(trimmed_endpoint)

        self._endpoints.extend(trimmed)
        return self

    def get_user(self) -> Optional[ByteSequence]:
        return self._user

    def set_user(self, user: ByteLike) -> "ClientBuilder":
        """Configure the etcd auth user.

        Args:
            user: etcd auth user

        Returns:
            This builder

        Raises:
            NullArgumentError: If user is None
        """
        if user is None:
            raise NullArgumentError("user can't be None")
        self._user = _credential(user, "user")
        return self

    def get_password(self) -> Optional[ByteSequence]:
        return self._password

    def set_password(self, password: ByteLike) -> "ClientBuilder":
        """Configure the etcd auth password.

        Args:
            password: etcd auth password

        Returns:
            This builder

        Raises:
            NullArgumentError: If password is None
        """
        if password is None:
            raise NullArgumentError("password can't be None")
        self._password = _credential(password, "password")
        return self

    def get_name_resolver_factory(self) -> Optional[NameResolverFactory]:
        return self._name_resolver_factory

    def set_name_resolver_factory(
        self, name_resolver_factory: NameResolverFactory
    ) -> "ClientBuilder":
        """Configure an alternative way of discovering server addresses.

        A resolver can stand in for explicit endpoints.

        Raises:
            NullArgumentError: If name_resolver_factory is None
        """
        if name_resolver_factory is None:
            raise NullArgumentError("nameResolverFactory can't be None")
        self._name_resolver_factory = name_resolver_factory
        return self

    def get_channel_config(self) -> Optional[ChannelConfig]:
        return self._channel_config

    def set_channel_config(
        self, channel_config: Optional[ChannelConfig]
    ) -> "ClientBuilder":
        """Configure channel construction parameters. None restores defaults."""
        self._channel_config = channel_config
        return self

    def is_lazy_initialization(self) -> bool:
        return self._lazy_initialization

    def set_lazy_initialization(self, lazy_initialization: bool) -> "ClientBuilder":
        """Define whether the client checks connectivity when it connects or
        delays it to the first call. Default is False.

        Args:
            lazy_initialization: True to defer connectivity checks

        Returns:
            This builder
        """
        self._lazy_initialization = bool(lazy_initialization)
        return self

    def build_config(self) -> ClientConfig:
        """Validate the accumulated settings and snapshot them.

        Returns:
            Immutable ClientConfig

        Raises:
            PreconditionError: If neither endpoints nor a name resolver
                factory is configured
        """
        if not self._endpoints and self._name_resolver_factory is None:
            raise PreconditionError(
                "please configure etcd server endpoints or nameResolverFactory before build."
            )
        return ClientConfig(
            endpoints=tuple(self._endpoints),
            user=self._user,
            password=self._password,
            name_resolver_factory=self._name_resolver_factory,
            channel_config=self._channel_config,
            lazy_initialization=self._lazy_initialization,
        )

    def build(self) -> Client:
        """Build a new Client.

        The builder is left untouched and may be built again.

        Returns:
            Client instance

        Raises:
            PreconditionError: If no server discovery mechanism is configured
            AuthFailedError: If only one of user and password is set
        """
        config = self.build_config()
        logger.debug(
            "client_builder_build",
            endpoints=len(config.endpoints),
            name_resolver=config.name_resolver_factory is not None,
            lazy_initialization=config.lazy_initialization,
        )
        return Client(config)

    def copy(self) -> "ClientBuilder":
        """Create an independent builder with the same settings.

        The endpoint list is duplicated; credentials, the name resolver factory
        and the channel config are shared, since they are treated as immutable.

        Raises:
            InternalError: If the builder could not be duplicated
        """
        try:
            duplicate = copy.copy(self)
        except (copy.Error, TypeError) as e:
            raise InternalError("failed to copy ClientBuilder", cause=e) from e

        duplicate._endpoints = list(self._endpoints)
        logger.debug("client_builder_copy", endpoints=len(duplicate._endpoints))
        return duplicate

    def __repr__(self) -> str:
        return (
            f"ClientBuilder(endpoints={self._endpoints!r}, user={self._user!r}, "
            f"name_resolver_factory={self._name_resolver_factory!r}, "
            f"channel_config={self._channel_config!r}, "
            f"lazy_initialization={self._lazy_initialization!r})"
        )


def _credential(value: ByteLike, name: str) -> ByteSequence:
    """Normalize a credential to bytes, rejecting unsupported types."""
    try:
        return to_byte_sequence(value)
    except TypeError as e:
        raise InvalidArgumentError(f"invalid {name}: {e}") from e
