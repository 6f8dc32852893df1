"""Unit tests for ListPostsUseCase."""

from datetime import datetime, timedelta

import pytest

from quill.application.usecase.post import ListPostsRequest, ListPostsUseCase
from quill.domain.repository import (
    CategoryRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from quill.domain.value import Role
from tests.conftest import make_category, make_post, make_tag, make_user, principal_for
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_paging_metadata(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo)
        start = datetime(2024, 1, 1)
        for i in range(7):
            await make_post(
                post_repo,
                author,
                title=f"Post {i}",
                created_at=start + timedelta(hours=i),
            )

        # Act
        response = await use_case.execute(ListPostsRequest(page=2, limit=3))

        # Assert
        assert response.total == 7
        assert response.total_pages == 3
        assert response.current_page == 2
        assert [p.title for p in response.posts] == ["Post 3", "Post 2", "Post 1"]

    @pytest.mark.asyncio
    async def test_default_and_maximum_limit(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo)
        for i in range(12):
            await make_post(post_repo, author, title=f"Post {i}")

        default_page = await use_case.execute(ListPostsRequest())
        clamped_page = await use_case.execute(ListPostsRequest(limit=1000))

        assert len(default_page.posts) == 10
        assert default_page.total_pages == 2
        assert len(clamped_page.posts) == 12
        assert clamped_page.total_pages == 1

    @pytest.mark.asyncio
    async def test_drafts_listed_only_for_admins(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo, name="Alice")
        admin = await make_user(user_repo, name="Root", role=Role.ADMIN)
        await make_post(post_repo, author, title="Live")
        await make_post(post_repo, author, title="Draft", published=False)

        # Act
        anonymous = await use_case.execute(ListPostsRequest())
        as_author = await use_case.execute(
            ListPostsRequest(principal=principal_for(author))
        )
        as_admin = await use_case.execute(
            ListPostsRequest(principal=principal_for(admin))
        )

        # Assert
        assert [p.title for p in anonymous.posts] == ["Live"]
        assert [p.title for p in as_author.posts] == ["Live"]
        assert as_admin.total == 2

    @pytest.mark.asyncio
    async def test_premium_posts_are_listed_without_body(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo)
        await make_post(post_repo, author, title="Members Only", is_premium=True)

        response = await use_case.execute(ListPostsRequest())

        assert response.total == 1
        assert response.posts[0].is_premium is True
        assert response.posts[0].content == ""
        assert response.posts[0].markdown == ""

    @pytest.mark.asyncio
    async def test_premium_body_listed_for_subscribers_and_author(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo, name="Alice")
        reader = await make_user(user_repo, name="Bob")
        subscriber = await make_user(user_repo, name="Carol", is_premium=True)
        await make_post(post_repo, author, title="Members Only", is_premium=True)
        await make_post(post_repo, author, title="Free For All")

        # Act
        as_reader = await use_case.execute(
            ListPostsRequest(principal=principal_for(reader))
        )
        as_subscriber = await use_case.execute(
            ListPostsRequest(principal=principal_for(subscriber))
        )
        as_author = await use_case.execute(
            ListPostsRequest(principal=principal_for(author))
        )

        # Assert
        bodies = {p.title: p.content for p in as_reader.posts}
        assert bodies == {"Members Only": "", "Free For All": "<p>Free For All</p>"}
        assert all(p.content for p in as_subscriber.posts)
        assert all(p.content for p in as_author.posts)

    @pytest.mark.asyncio
    async def test_filter_by_category_slug_and_tag_id(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        category_repo = await unit_env.get(CategoryRepository)
        tag_repo = await unit_env.get(TagRepository)
        author = await make_user(user_repo)
        travel = await make_category(category_repo, "Travel")
        python = await make_tag(tag_repo, "Python")
        await make_post(post_repo, author, title="Trip", category_ids=[travel.id])
        await make_post(
            post_repo,
            author,
            title="Trip Planner",
            category_ids=[travel.id],
            tag_ids=[python.id],
        )
        await make_post(post_repo, author, title="Other")

        # Act
        by_category = await use_case.execute(ListPostsRequest(category="travel"))
        by_both = await use_case.execute(
            ListPostsRequest(category="travel", tag=str(python.id))
        )

        # Assert
        assert by_category.total == 2
        assert [p.title for p in by_both.posts] == ["Trip Planner"]
        assert by_both.posts[0].categories[0].name == "Travel"

    @pytest.mark.asyncio
    async def test_unknown_filter_returns_empty_page(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo)
        await make_post(post_repo, author)

        response = await use_case.execute(ListPostsRequest(tag="no-such-tag"))

        assert response.posts == []
        assert response.total == 0
        assert response.total_pages == 0

    @pytest.mark.asyncio
    async def test_search_matches_title_or_content_case_insensitively(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo)
        await make_post(post_repo, author, title="Learning Rust")
        await make_post(post_repo, author, title="Gardening")

        response = await use_case.execute(ListPostsRequest(search="RUST"))

        assert [p.title for p in response.posts] == ["Learning Rust"]
