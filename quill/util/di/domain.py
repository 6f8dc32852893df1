"""Domain layer DI providers."""

from dishka import Scope, provide

from quill.config import AuthSettings
from quill.domain.repository import (
    CategoryRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from quill.domain.service import (
    AccessGate,
    IdentityService,
    JWTService,
    PostService,
    TaxonomyService,
)
from quill.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_access_gate(self) -> AccessGate:
        """Provide the stateless access gate."""
        return AccessGate()

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self, user_repository: UserRepository, jwt_service: JWTService
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(user_repository=user_repository, jwt_service=jwt_service)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_taxonomy_service(
        self, category_repository: CategoryRepository, tag_repository: TagRepository
    ) -> TaxonomyService:
        """Provide taxonomy domain service."""
        return TaxonomyService(
            category_repository=category_repository, tag_repository=tag_repository
        )
