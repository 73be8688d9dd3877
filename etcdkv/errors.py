"""Error classes raised by the etcd client and its builder."""

from typing import Any, Dict, Optional

import grpc


class EtcdError(Exception):
    """Root of the client's error hierarchy.

    Every error carries a stable ``code`` string callers can switch on.
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code

    def _fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"message": str(self)}
        if self.code:
            fields["code"] = self.code
        return fields

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={value!r}" for name, value in self._fields().items())
        return f"{type(self).__name__}({args})"


class NullArgumentError(EtcdError, TypeError):
    """Error indicating a required argument (or one of its elements) is None.

    Kept apart from InvalidArgumentError so callers can tell a missing
    argument from a malformed one.
    """

    def __init__(self, message: str):
        super().__init__(message, "NULL_ARGUMENT")


class InvalidArgumentError(EtcdError, ValueError):
    """Error indicating a non-None argument failed a content check."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_ARGUMENT")


class PreconditionError(EtcdError):
    """Error indicating the builder is not ready to produce a client."""

    def __init__(self, message: str):
        super().__init__(message, "FAILED_PRECONDITION")


class ConnectError(EtcdError):
    """Error indicating no usable connection to a cluster member."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message, "CONNECT_ERROR")
        self.address = address

    def _fields(self) -> Dict[str, Any]:
        return {"message": str(self), "address": self.address}


class AuthFailedError(EtcdError):
    """Error indicating wrong or incomplete credentials."""

    def __init__(self, message: str):
        super().__init__(message, "AUTH_FAILED")


class InternalError(EtcdError):
    """Unexpected failure inside the client library itself."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, "INTERNAL")
        self.cause = cause

    def _fields(self) -> Dict[str, Any]:
        return {"message": str(self), "cause": self.cause}


_STATUS_ERRORS = {
    grpc.StatusCode.UNAUTHENTICATED: AuthFailedError,
    grpc.StatusCode.PERMISSION_DENIED: AuthFailedError,
    grpc.StatusCode.INVALID_ARGUMENT: InvalidArgumentError,
    grpc.StatusCode.FAILED_PRECONDITION: PreconditionError,
}


def from_grpc_error(error: Any, address: Optional[str] = None) -> EtcdError:
    """Translate a failed RPC into an etcd client error.

    Meant for RPCs issued over channels obtained from Client.get_channel().

    Args:
        error: grpc.RpcError (or anything exposing code() and details())
        address: Address of the member the RPC was sent to, if known

    Returns:
        Matching EtcdError subclass; EtcdError carrying the status name
        for statuses without a dedicated class
    """
    code_fn = getattr(error, "code", None)
    status = code_fn() if callable(code_fn) else None

    details_fn = getattr(error, "details", None)
    message = (details_fn() if callable(details_fn) else None) or str(error) or "Unknown error"

    if status == grpc.StatusCode.UNAVAILABLE:
        return ConnectError(message, address)

    error_class = _STATUS_ERRORS.get(status)
    if error_class is not None:
        return error_class(message)

    return EtcdError(message, status.name if isinstance(status, grpc.StatusCode) else None)
