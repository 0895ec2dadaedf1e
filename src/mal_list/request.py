"""Mapping of logical list operations to service URLs and HTTP verbs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .constants import Category


class Operation(str, Enum):
    """Logical operations the service supports."""

    SEARCH = "search"
    LIST = "list"
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    VERIFY_CREDENTIALS = "verify_credentials"


@dataclass(frozen=True)
class PreparedRequest:
    """Everything the transport needs to send one request."""

    operation: Operation
    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    data: Optional[dict[str, str]] = None
    authenticated: bool = True


def build_request(
    base_url: str,
    operation: Operation,
    category: Optional[Category] = None,
    target: Union[int, str, None] = None,
    body: Optional[str] = None,
) -> PreparedRequest:
    """Build the request for ``operation``.

    Args:
        base_url: Service root, e.g. ``https://myanimelist.net``.
        operation: What to do.
        category: Which list the operation applies to (unused for credential checks).
        target: Search query for SEARCH, username for LIST, series ID for
            ADD/UPDATE/DELETE.
        body: Serialized ``<entry>`` document for ADD/UPDATE.
    """
    base_url = base_url.rstrip("/")

    if operation is Operation.VERIFY_CREDENTIALS:
        return PreparedRequest(operation, "GET", f"{base_url}/api/account/verify_credentials.xml")

    if category is None:
        raise ValueError(f"{operation.value} requires a list category")
    kind = Category(category).value

    if operation is Operation.SEARCH:
        return PreparedRequest(
            operation, "GET", f"{base_url}/api/{kind}/search.xml", params={"q": str(target or "")}
        )

    if operation is Operation.LIST:
        if not target:
            raise ValueError("reading a list requires a username")
        return PreparedRequest(
            operation,
            "GET",
            f"{base_url}/malappinfo.php",
            params={"u": str(target), "status": "all", "type": kind},
            authenticated=False,
        )

    if target is None:
        raise ValueError(f"{operation.value} requires a series ID")
    series_id = int(target)

    if operation in (Operation.ADD, Operation.UPDATE):
        return PreparedRequest(
            operation,
            "POST",
            f"{base_url}/api/{kind}list/{operation.value}/{series_id}.xml",
            data={"data": body or ""},
        )

    if operation is Operation.DELETE:
        return PreparedRequest(operation, "DELETE", f"{base_url}/api/{kind}list/delete/{series_id}.xml")

    raise ValueError(f"Unknown operation: {operation}")
