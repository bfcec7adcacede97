"""Route metadata and request accessors used around authentication.

Authentication itself happens outside this package: a guard in front of
the routes verifies the bearer token, skips routes marked with
:func:`public`, and stores the authenticated user on ``request.state.user``.
This module provides the marker the guard reads and the accessors handlers
use to read the user back.

Example:
    >>> @router.get("/competitions")
    ... @public
    ... async def list_competitions(): ...

    >>> @router.get("/registrations/mine")
    ... async def my_registrations(
    ...     user_id: Annotated[int, Depends(current_user("userId"))],
    ... ): ...
"""

from collections.abc import Callable, Mapping
from typing import Annotated, Any, Final, TypeVar

from fastapi import Depends, Request

IS_PUBLIC_KEY: Final[str] = "is_public"

EndpointT = TypeVar("EndpointT", bound=Callable[..., Any])


def public(endpoint: EndpointT) -> EndpointT:
    """Mark a route handler as reachable without authentication.

    Apply it beneath the router decorator so the flag is already set when
    the route is registered. Applying it more than once has no further
    effect.

    Args:
        endpoint: The route handler.

    Returns:
        EndpointT: The same handler, carrying the public flag.
    """
    setattr(endpoint, IS_PUBLIC_KEY, True)
    return endpoint


def is_public_endpoint(endpoint: object) -> bool:
    """Return True if ``endpoint`` was marked with :func:`public`."""
    return getattr(endpoint, IS_PUBLIC_KEY, False) is True


def is_public_request(request: Request) -> bool:
    """Return True if the route matched for ``request`` is public.

    Requests that have not been routed yet, or matched no route, are not
    public.
    """
    endpoint = request.scope.get("endpoint")
    if endpoint is None:
        endpoint = getattr(request.scope.get("route"), "endpoint", None)
    return endpoint is not None and is_public_endpoint(endpoint)


def get_request_user(request: Request, field: str | None = None) -> Any:  # noqa: ANN401 - user shape is owned by the guard
    """Read the authenticated user, or one field of it, from the request.

    Mapping users are read by key, any other object by attribute.

    Args:
        request: The in-flight request.
        field: Optional field name to project; empty selects the whole user.

    Returns:
        Any: The user, the named field, or None when no user is attached or
            the field does not exist.
    """
    user = getattr(request.state, "user", None)
    if user is None or not field:
        return user
    if isinstance(user, Mapping):
        return user.get(field)
    return getattr(user, field, None)


def current_user(field: str | None = None) -> Callable[[Request], Any]:
    """Build a dependency that injects the current user or one of its fields.

    Args:
        field: Optional field name to project.

    Returns:
        Callable[[Request], Any]: A FastAPI dependency.
    """

    def dependency(request: Request) -> Any:  # noqa: ANN401
        return get_request_user(request, field)

    return dependency


CurrentUser = Annotated[Any, Depends(current_user())]
