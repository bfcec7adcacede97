"""System endpoints: status vocabularies and the current user."""

from typing import Any

from fastapi import APIRouter
from loguru import logger

from papercontest.api.auth import CurrentUser, public
from papercontest.api.constants import SYSTEM_TAG
from papercontest.api.schemas.envelope import ApiResponse, success
from papercontest.api.schemas.pagination import Pagination, PaginatedResponse
from papercontest.core.exceptions import NotFoundError
from papercontest.core.observability import trace_operation
from papercontest.domain.enums import STATUS_VOCABULARIES

router = APIRouter(prefix="/system", tags=[SYSTEM_TAG])


@router.get("/statuses", response_model=ApiResponse[dict[str, list[str]]])
@public
async def list_status_vocabularies() -> ApiResponse[dict[str, list[str]]]:
    """Return every status vocabulary, keyed by kind."""
    return success(
        {kind: vocabulary.values() for kind, vocabulary in STATUS_VOCABULARIES.items()}
    )


@router.get(
    "/statuses/{kind}",
    response_model=ApiResponse[PaginatedResponse[str]],
)
@public
async def list_status_values(
    kind: str, pagination: Pagination
) -> ApiResponse[PaginatedResponse[str]]:
    """Return one page of the values of a single vocabulary.

    Raises:
        NotFoundError: If ``kind`` names no vocabulary.
    """
    vocabulary = STATUS_VOCABULARIES.get(kind)
    if vocabulary is None:
        raise NotFoundError(
            f"Unknown status vocabulary '{kind}'",
            context={"kind": kind, "available": sorted(STATUS_VOCABULARIES)},
        )

    with trace_operation("system.list_status_values", kind=kind):
        values = vocabulary.values()
        page = values[pagination.offset : pagination.offset + pagination.limit]
        logger.debug("Listed {} of {} {} statuses", len(page), len(values), kind)

    return success(PaginatedResponse[str].create(page, len(values), pagination))


@router.get("/me", response_model=ApiResponse[Any])
async def read_current_user(user: CurrentUser) -> ApiResponse[Any]:
    """Return the authenticated user attached to the request, or null."""
    return success(user)
