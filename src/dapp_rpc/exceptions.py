"""Exception hierarchy for the dapp request and provider layers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .constants import RPC_ERROR_CODES, ConnectionKind, ErrorCode


class DappRpcError(Exception):
    """Base exception for all dapp RPC errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DappRpcError):
    """Raised when a dapp request fails validation.

    Not a ``ValueError`` on purpose: pydantic only wraps ``ValueError`` and
    ``AssertionError`` raised inside validators, so this exception leaves a
    model validator with its explicit path intact.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
        *,
        code: ErrorCode = ErrorCode.INVALID_PARAMS,
        path: Sequence[str | int] = (),
    ):
        super().__init__(message, details)
        self.path = tuple(path)
        self.field = field if field is not None else (".".join(str(p) for p in path) or None)
        self.value = value
        self.code = code

    @property
    def rpc_code(self) -> int:
        return RPC_ERROR_CODES[self.code]

    def to_rpc_error(self) -> dict[str, Any]:
        """Render the error as a JSON-RPC error object for the calling dapp."""

        return {
            "code": self.rpc_code,
            "message": self.message,
            "data": {"path": self.field, "errorCode": self.code.value},
        }


class UnsupportedMethodError(ValidationError):
    """Raised when a request names a method outside the supported set."""

    def __init__(self, method: Any):
        super().__init__(
            f"Unsupported method: {method}",
            field="method",
            value=method,
            code=ErrorCode.UNSUPPORTED_METHOD,
            path=("method",),
        )
        self.method = method


class ConversionError(DappRpcError, ValueError):
    """Raised when a numeric-ish or byte-like value cannot be coerced."""

    def __init__(self, message: str, value: Any | None = None):
        super().__init__(message, {"value": repr(value)})
        self.value = value


class NetworkError(DappRpcError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class ProviderNotConnectedError(NetworkError):
    """Raised when no connected provider could be produced for a chain."""

    def __init__(
        self,
        message: str,
        chain_id: str,
        connection_kind: ConnectionKind,
        address: str | None = None,
    ):
        super().__init__(
            message,
            details={
                "chain_id": chain_id,
                "connection_kind": connection_kind.value,
                "address": address,
            },
        )
        self.chain_id = chain_id
        self.connection_kind = connection_kind
        self.address = address


class IdentityMismatchError(NetworkError):
    """Raised when a private provider ends up bound to a different address."""

    def __init__(self, chain_id: str, expected_address: str | None, bound_address: str | None):
        super().__init__(
            f"Private provider not connected for chain {chain_id}, address {expected_address}",
            details={
                "chain_id": chain_id,
                "expected_address": expected_address,
                "bound_address": bound_address,
            },
        )
        self.chain_id = chain_id
        self.expected_address = expected_address
        self.bound_address = bound_address
