"""
Social Posts Backend — Post Service Unit Tests
===============================================

What:  Tests for PostService business logic with a mocked AsyncSession.
Why:   Not-found handling, snapshots and commit behavior must hold without
       a real database.

What we test:
    ✅ Visible post found / not found
    ✅ Mutations commit; not-found paths never commit
    ✅ like/dislike return the pre-update snapshot and update in the store
    ✅ Unexpected store failures become DatabaseError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from social_posts.exceptions import DatabaseError, NotFoundError
from social_posts.services.post_service import PostService


def _result_with(post):
    result = MagicMock()
    result.scalar_one_or_none.return_value = post
    return result


class TestPostServiceRead:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        assert await self.service.list_posts(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_posts_maps_rows(self, mock_db_session, sample_post):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [sample_post]
        mock_db_session.execute.return_value = result

        posts = await self.service.list_posts(mock_db_session)

        assert len(posts) == 1
        assert posts[0].id == 1
        assert posts[0].content == "hello"

    @pytest.mark.asyncio
    async def test_get_post_found(self, mock_db_session, sample_post):
        mock_db_session.execute.return_value = _result_with(sample_post)

        post = await self.service.get_post(mock_db_session, 1)

        assert post.id == 1
        assert post.likes == 3
        assert post.created == sample_post.created

    @pytest.mark.asyncio
    async def test_get_post_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError):
            await self.service.get_post(mock_db_session, 42)

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_post(mock_db_session, 1)

        assert exc_info.value.context["error_type"] == "RuntimeError"
        assert exc_info.value.context["post_id"] == 1


class TestPostServiceWrite:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_post_adds_flushes_and_commits(self, mock_db_session, sample_post):
        async def fake_refresh(post):
            post.id = 5
            post.likes = 0
            post.created = sample_post.created

        mock_db_session.refresh = AsyncMock(side_effect=fake_refresh)

        post = await self.service.create_post(mock_db_session, "fresh")

        assert post.id == 5
        assert post.content == "fresh"
        assert post.likes == 0
        mock_db_session.add.assert_called_once()
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_edit_post_not_found_does_not_commit(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=[MagicMock(), _result_with(None)])

        with pytest.raises(NotFoundError):
            await self.service.edit_post(mock_db_session, 9, "new text")

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_post_returns_updated_row(self, mock_db_session, sample_post):
        sample_post.content = "new text"
        mock_db_session.execute = AsyncMock(side_effect=[MagicMock(), _result_with(sample_post)])

        post = await self.service.edit_post(mock_db_session, 1, "new text")

        assert post.content == "new text"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remove_post_returns_snapshot(self, mock_db_session, sample_post):
        mock_db_session.execute = AsyncMock(side_effect=[_result_with(sample_post), MagicMock()])

        post = await self.service.remove_post(mock_db_session, 1)

        assert post.id == 1
        assert mock_db_session.execute.await_count == 2
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remove_missing_post_skips_update(self, mock_db_session):
        mock_db_session.execute = AsyncMock(return_value=_result_with(None))

        with pytest.raises(NotFoundError):
            await self.service.remove_post(mock_db_session, 1)

        assert mock_db_session.execute.await_count == 1
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_restore_missing_post_raises(self, mock_db_session):
        mock_db_session.execute = AsyncMock(return_value=_result_with(None))

        with pytest.raises(NotFoundError):
            await self.service.restore_post(mock_db_session, 1)

    @pytest.mark.asyncio
    async def test_like_returns_pre_increment_snapshot(self, mock_db_session, sample_post):
        calls = []

        async def execute(statement):
            calls.append(statement)
            if len(calls) == 1:
                return _result_with(sample_post)
            # Mimic the session synchronizing the loaded object after UPDATE
            sample_post.likes += 1
            return MagicMock()

        mock_db_session.execute = AsyncMock(side_effect=execute)

        post = await self.service.like_post(mock_db_session, 1)

        assert post.likes == 3
        assert sample_post.likes == 4
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_like_issues_store_side_increment(self, mock_db_session, sample_post):
        mock_db_session.execute = AsyncMock(side_effect=[_result_with(sample_post), MagicMock()])

        await self.service.like_post(mock_db_session, 1)

        update_statement = mock_db_session.execute.await_args_list[1].args[0]
        assert "likes + " in str(update_statement)

    @pytest.mark.asyncio
    async def test_dislike_issues_store_side_decrement(self, mock_db_session, sample_post):
        mock_db_session.execute = AsyncMock(side_effect=[_result_with(sample_post), MagicMock()])

        post = await self.service.dislike_post(mock_db_session, 1)

        assert post.likes == 3
        update_statement = mock_db_session.execute.await_args_list[1].args[0]
        assert "likes + " in str(update_statement)
        assert -1 in update_statement.compile().params.values()

    @pytest.mark.asyncio
    async def test_dislike_not_found(self, mock_db_session):
        mock_db_session.execute = AsyncMock(return_value=_result_with(None))

        with pytest.raises(NotFoundError):
            await self.service.dislike_post(mock_db_session, 3)

        mock_db_session.commit.assert_not_awaited()
