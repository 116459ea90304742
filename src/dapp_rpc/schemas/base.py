"""Envelope schemas for requests that come via ``window.ethereum.request``.

e.g.: ``{"jsonrpc": "2.0", "method": "personal_sign", "params": ["0x68656c6c6f", "0x295a..."], "id": 1}``

See https://eips.ethereum.org/EIPS/eip-1193 and
https://docs.metamask.io/wallet/reference/json-rpc-api/
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..constants import ErrorCode
from ..exceptions import ValidationError
from ..utils import format_path

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def _check_request_id(value: str) -> str:
    if not _UUID_RE.fullmatch(value):
        raise ValueError("requestId must be a UUID string")
    return value


RequestId = Annotated[str, AfterValidator(_check_request_id)]


class WireModel(BaseModel):
    """Frozen model with snake_case attributes and camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class EthereumRequest(WireModel):
    method: str
    params: list[Any] | dict[str, Any] | None = None

    @field_validator("params", mode="before")
    @classmethod
    def _check_params_container(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, list | tuple | Mapping):
            raise ValueError("Params must be an array or an object")
        return value


class EthereumRequestWithId(EthereumRequest):
    request_id: RequestId


def from_pydantic_error(
    exc: PydanticValidationError,
    *,
    code: ErrorCode = ErrorCode.INVALID_PARAMS,
    prefix: Sequence[str | int] = (),
    message: str | None = None,
) -> ValidationError:
    """Translate the first pydantic error into a located ``ValidationError``."""

    errors = exc.errors(include_url=False)
    first = errors[0] if errors else {"loc": (), "msg": str(exc), "type": "unknown"}
    path = (*prefix, *first["loc"])

    detail = first["msg"]
    ctx = first.get("ctx") or {}
    if first["type"] == "value_error" and "error" in ctx:
        detail = str(ctx["error"])

    return ValidationError(
        f"{message}: {detail}" if message else detail,
        value=first.get("input"),
        code=code,
        path=path,
        details={
            "errors": [
                {"path": format_path((*prefix, *error["loc"])), "message": error["msg"]}
                for error in errors
            ]
        },
    )
