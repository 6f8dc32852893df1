"""Application layer DI providers."""

from dishka import Scope, provide

from quill.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterUseCase,
)
from quill.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    PostPopulator,
    UpdatePostUseCase,
)
from quill.application.usecase.taxonomy import (
    CreateCategoryUseCase,
    CreateTagUseCase,
    ListCategoriesUseCase,
    ListTagsUseCase,
)
from quill.config import PaginationSettings, UploadSettings
from quill.domain.repository import AfterCommit, UserRepository
from quill.domain.service import (
    AccessGate,
    BlobStore,
    IdentityService,
    PostService,
    TaxonomyService,
)
from quill.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_post_populator(
        self, user_repository: UserRepository, taxonomy_service: TaxonomyService
    ) -> PostPopulator:
        """Provide post populator."""
        return PostPopulator(
            user_repository=user_repository, taxonomy_service=taxonomy_service
        )

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        post_service: PostService,
        taxonomy_service: TaxonomyService,
        post_populator: PostPopulator,
        blob_store: BlobStore,
        upload_settings: UploadSettings,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service,
            taxonomy_service=taxonomy_service,
            post_populator=post_populator,
            blob_store=blob_store,
            upload_settings=upload_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self,
        post_service: PostService,
        access_gate: AccessGate,
        post_populator: PostPopulator,
        upload_settings: UploadSettings,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service,
            access_gate=access_gate,
            post_populator=post_populator,
            upload_settings=upload_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        taxonomy_service: TaxonomyService,
        access_gate: AccessGate,
        post_populator: PostPopulator,
        pagination_settings: PaginationSettings,
        upload_settings: UploadSettings,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            taxonomy_service=taxonomy_service,
            access_gate=access_gate,
            post_populator=post_populator,
            pagination_settings=pagination_settings,
            upload_settings=upload_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(
        self,
        post_service: PostService,
        taxonomy_service: TaxonomyService,
        access_gate: AccessGate,
        post_populator: PostPopulator,
        blob_store: BlobStore,
        upload_settings: UploadSettings,
        after_commit: AfterCommit,
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(
            post_service=post_service,
            taxonomy_service=taxonomy_service,
            access_gate=access_gate,
            post_populator=post_populator,
            blob_store=blob_store,
            upload_settings=upload_settings,
            after_commit=after_commit,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self,
        post_service: PostService,
        access_gate: AccessGate,
        blob_store: BlobStore,
        after_commit: AfterCommit,
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(
            post_service=post_service,
            access_gate=access_gate,
            blob_store=blob_store,
            after_commit=after_commit,
        )

    # Taxonomy use cases
    @provide(scope=Scope.REQUEST)
    def get_list_categories_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_create_category_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> CreateCategoryUseCase:
        """Provide create category use case."""
        return CreateCategoryUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(taxonomy_service=taxonomy_service)

    @provide(scope=Scope.REQUEST)
    def get_create_tag_use_case(
        self, taxonomy_service: TaxonomyService
    ) -> CreateTagUseCase:
        """Provide create tag use case."""
        return CreateTagUseCase(taxonomy_service=taxonomy_service)

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self, identity_service: IdentityService
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(self, identity_service: IdentityService) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_refresh_token_use_case(
        self, identity_service: IdentityService
    ) -> RefreshTokenUseCase:
        """Provide refresh token use case."""
        return RefreshTokenUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(self, identity_service: IdentityService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, identity_service: IdentityService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(identity_service=identity_service)
