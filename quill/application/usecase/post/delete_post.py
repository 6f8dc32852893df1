"""Delete post use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.post.update_post import parse_post_id
from quill.domain.repository import AfterCommit
from quill.domain.service import AccessGate, BlobStore, PostService
from quill.domain.value import Principal

DELETED_MESSAGE = "Post deleted successfully"


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str
    principal: Principal


class DeletePostResponse(BaseModel):
    """Delete post response."""

    message: str


class DeletePostUseCase:
    """Use case for deleting a post."""

    def __init__(
        self,
        post_service: PostService,
        access_gate: AccessGate,
        blob_store: BlobStore,
        after_commit: AfterCommit,
    ) -> None:
        self.post_service = post_service
        self.access_gate = access_gate
        self.blob_store = blob_store
        self.after_commit = after_commit

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Delete a post, and its cover image once the deletion is committed.

        Raises:
            NotFoundError: If the post doesn't exist or the requester is
                neither its author nor an admin
        """
        post_id = parse_post_id(request.post_id)

        with logfire.span(
            "delete_post.execute",
            post_id=str(post_id),
            user_id=str(request.principal.id),
        ):
            post = await self.post_service.get_by_id(post_id)
            decision = self.access_gate.decide(request.principal, post)
            decision.ensure_writable(post)

            await self.post_service.delete_post(post.id)
            cover = post.cover_image
            if cover is not None:
                self.after_commit.add(
                    "delete_cover", lambda: self.blob_store.delete(cover)
                )

            return DeletePostResponse(message=DELETED_MESSAGE)
