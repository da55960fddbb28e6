"""List posts use case."""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from quill.application.usecase.views import PostView
from quill.domain.query import Pagination, PostQueryBuilder, paginate
from quill.domain.service import PostService


class ListPostsRequest(BaseModel):
    """List posts request.

    ``params`` is the flat query string mapping, for example
    ``{"category": "travel", "views[gte]": "10", "sort": "-views"}``.
    """

    params: dict[str, Any] = Field(default_factory=dict)


class ListPostsResponse(BaseModel):
    """One page of posts.

    Items carry every post field, or only the selected ones when the
    request had a ``select`` parameter.
    """

    items: list[dict[str, Any]]
    count: int
    total: int
    pagination: Pagination


class ListPostsUseCase:
    """Use case for listing posts with filtering, sorting and pagination.

    Listing never changes view counts.
    """

    def __init__(
        self, post_service: PostService, query_builder: PostQueryBuilder
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            query_builder: Builds validated queries from request params
        """
        self.post_service = post_service
        self.query_builder = query_builder

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Raises:
            ValidationError: If a filter, sort or select parameter is invalid
        """
        with logfire.span("list_posts.execute", params=sorted(request.params)):
            query = self.query_builder.build(request.params)
            posts, total = await self.post_service.list_posts(query)

            include = set(query.select) if query.select else None
            items = [
                PostView.from_domain(post).model_dump(include=include)
                for post in posts
            ]

            return ListPostsResponse(
                items=items,
                count=len(items),
                total=total,
                pagination=paginate(query.page, query.limit, total),
            )
