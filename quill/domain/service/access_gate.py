"""Access Gate: who may read and modify a post.

Visibility rules, per requester:

| Requester                         | Draft      | Published | Published premium |
|-----------------------------------|------------|-----------|-------------------|
| anonymous / plain user            | not found  | read      | forbidden         |
| premium subscriber                | not found  | read      | read              |
| post author / admin               | read       | read      | read              |

Only the author and admins may update or delete; to anyone else the post
looks nonexistent. Reads by anyone other than the author or an admin
count as a view.
"""

from enum import Enum
from typing import Optional

import logfire

from quill.domain.error import ForbiddenError, NotFoundError
from quill.domain.model.post import Post
from quill.domain.value import Principal
from quill.domain.value.common import ValueObject

from .base import Service


class Denial(str, Enum):
    """Why a read was refused."""

    NOT_FOUND = "not_found"  # Post must look nonexistent
    PREMIUM = "premium"  # Post exists but needs a subscription


class AuthorizationDecision(ValueObject):
    """Outcome of the access check for one requester on one post."""

    can_read: bool
    can_write: bool
    counts_view: bool
    denial: Optional[Denial] = None

    def ensure_readable(self, post: Post) -> None:
        """Raise the error matching a refused read.

        Raises:
            NotFoundError: Post is invisible to the requester
            ForbiddenError: Post is premium-gated
        """
        if self.can_read:
            return
        if self.denial == Denial.PREMIUM:
            raise ForbiddenError("Premium content requires subscription")
        raise NotFoundError("Post", str(post.slug))

    def ensure_writable(self, post: Post) -> None:
        """Raise when the requester may not modify the post.

        A post the requester does not own is reported as not found, whether
        or not they can read it.

        Raises:
            NotFoundError: Requester is neither author nor admin
        """
        if self.can_write:
            return
        logfire.warn("Write refused for non-owner", post_id=str(post.id))
        raise NotFoundError("Post", str(post.id))


class AccessGate(Service):
    """Computes authorization decisions for posts."""

    def decide(
        self, principal: Optional[Principal], post: Post
    ) -> AuthorizationDecision:
        """Decide what the requester may do with the post.

        Args:
            principal: Authenticated requester, None for anonymous
            post: Target post

        Returns:
            Authorization decision
        """
        is_owner = principal is not None and (
            principal.is_admin or post.is_authored_by(principal.id)
        )

        if is_owner:
            decision = AuthorizationDecision(
                can_read=True, can_write=True, counts_view=False
            )
        elif not post.published:
            decision = AuthorizationDecision(
                can_read=False,
                can_write=False,
                counts_view=False,
                denial=Denial.NOT_FOUND,
            )
        elif post.is_premium and not (principal is not None and principal.is_premium):
            decision = AuthorizationDecision(
                can_read=False,
                can_write=False,
                counts_view=False,
                denial=Denial.PREMIUM,
            )
        else:
            decision = AuthorizationDecision(
                can_read=True, can_write=False, counts_view=True
            )

        logfire.debug(
            "Access decision",
            post_id=str(post.id),
            principal_id=str(principal.id) if principal else None,
            can_read=decision.can_read,
            can_write=decision.can_write,
            denial=decision.denial.value if decision.denial else None,
        )
        return decision

    @staticmethod
    def sees_drafts(principal: Optional[Principal]) -> bool:
        """Whether listings for this requester include unpublished posts."""
        return principal is not None and principal.is_admin
