"""EIP-2255 wallet permission schemas.

https://eips.ethereum.org/EIPS/eip-2255
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import TypeAdapter

from .base import WireModel

# Requested permissions map a method name to arbitrary capability descriptors,
# e.g. ``{"eth_accounts": {}}``. Only the outer two levels are checked.
PermissionRequest = dict[str, dict[str, Any]]

permission_request_adapter: TypeAdapter[PermissionRequest] = TypeAdapter(PermissionRequest)


class RequestedPermission(WireModel):
    parent_capability: str  # name of the method for which the permission is requested
    date: int | None = None  # in UNIX time


class Caveat(WireModel):
    type: str
    value: Any = None


class Permission(WireModel):
    invoker: str
    parent_capability: str
    caveats: tuple[Caveat, ...] = ()


def requested_permissions(request: PermissionRequest) -> list[RequestedPermission]:
    """Expand a permission request into one entry per requested capability."""

    return [RequestedPermission(parent_capability=capability) for capability in request]


def build_permission(
    invoker: str,
    parent_capability: str,
    caveats: Iterable[Caveat] = (),
) -> Permission:
    return Permission(invoker=invoker, parent_capability=parent_capability, caveats=tuple(caveats))
