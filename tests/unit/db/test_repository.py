"""
Unit tests for UserRepository and PostRepository.

Repositories are exercised directly on fresh in-memory instances; no HTTP
layer is involved.
"""

from __future__ import annotations

import asyncio

import pytest

from resource_api.db.models import Post, User
from resource_api.db.repositories import DEFAULT_AUTHOR_ID, PostRepository, UserRepository
from resource_api.exceptions import ConflictError, NotFoundError


class TestUserRepositoryCreate:
    """Identity assignment and uniqueness on create."""

    @pytest.mark.asyncio
    async def test_create_assigns_sequential_ids(self, user_repo: UserRepository) -> None:
        first = await user_repo.create("alice", "a@x.com")
        second = await user_repo.create("bob", "b@x.com")

        assert (first.id, second.id) == (1, 2)
        assert isinstance(first, User)

    @pytest.mark.asyncio
    async def test_create_sets_equal_timestamps(self, user_repo: UserRepository) -> None:
        user = await user_repo.create("alice", "a@x.com")

        assert user.created_at == user.updated_at
        assert user.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_username_or_email_clash_is_a_conflict(self, user_repo: UserRepository) -> None:
        """Either field alone is enough to reject the create."""
        alice = await user_repo.create("alice", "a@x.com")
        assert alice.id == 1

        with pytest.raises(ConflictError, match="User already exists"):
            await user_repo.create("alice", "b@x.com")
        with pytest.raises(ConflictError):
            await user_repo.create("bob", "a@x.com")

        bob = await user_repo.create("bob", "b@x.com")
        assert bob.id == 2

    @pytest.mark.asyncio
    async def test_uniqueness_is_case_sensitive(self, user_repo: UserRepository) -> None:
        await user_repo.create("alice", "a@x.com")

        other = await user_repo.create("Alice", "A@x.com")

        assert other.id == 2

    @pytest.mark.asyncio
    async def test_rejected_create_does_not_consume_an_id(self, user_repo: UserRepository) -> None:
        await user_repo.create("alice", "a@x.com")
        with pytest.raises(ConflictError):
            await user_repo.create("alice", "other@x.com")

        bob = await user_repo.create("bob", "b@x.com")

        assert bob.id == 2
        assert len(user_repo) == 2

    @pytest.mark.asyncio
    async def test_ids_are_never_reissued_after_delete(self, user_repo: UserRepository) -> None:
        seen: list[int] = []
        for index in range(5):
            user = await user_repo.create(f"user{index}", f"user{index}@x.com")
            seen.append(user.id)
            if index % 2 == 0:
                await user_repo.delete(user.id)

        assert seen == sorted(set(seen))
        assert user_repo.next_id == 6

        latest = await user_repo.create("after", "after@x.com")
        assert latest.id == 6

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_creates_admit_exactly_one(
        self, user_repo: UserRepository
    ) -> None:
        results = await asyncio.gather(
            *(user_repo.create("dup", "dup@x.com") for _ in range(20)),
            return_exceptions=True,
        )

        created = [result for result in results if isinstance(result, User)]
        conflicts = [result for result in results if isinstance(result, ConflictError)]

        assert len(created) == 1
        assert len(conflicts) == 19
        assert [user.id for user in await user_repo.list_all()] == [created[0].id]


class TestUserRepositoryReads:
    """List and get behaviour."""

    @pytest.mark.asyncio
    async def test_list_preserves_insertion_order(self, user_repo: UserRepository) -> None:
        for name in ("carol", "alice", "bob"):
            await user_repo.create(name, f"{name}@x.com")

        users = await user_repo.list_all()

        assert [user.username for user in users] == ["carol", "alice", "bob"]

    @pytest.mark.asyncio
    async def test_list_returns_a_snapshot(self, user_repo: UserRepository) -> None:
        await user_repo.create("alice", "a@x.com")
        snapshot = await user_repo.list_all()

        await user_repo.create("bob", "b@x.com")

        assert len(snapshot) == 1

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, user_repo: UserRepository) -> None:
        with pytest.raises(NotFoundError, match="User not found"):
            await user_repo.get(42)

    @pytest.mark.asyncio
    async def test_first_id_tracks_list_head(self, user_repo: UserRepository) -> None:
        assert await user_repo.first_id() is None

        alice = await user_repo.create("alice", "a@x.com")
        bob = await user_repo.create("bob", "b@x.com")
        assert await user_repo.first_id() == alice.id

        await user_repo.delete(alice.id)
        assert await user_repo.first_id() == bob.id


class TestUserRepositoryUpdate:
    """Update semantics."""

    @pytest.mark.asyncio
    async def test_update_round_trip(self, user_repo: UserRepository) -> None:
        original = await user_repo.create("alice", "a@x.com")

        await user_repo.update(original.id, "alicia", "alicia@x.com")
        fetched = await user_repo.get(original.id)

        assert (fetched.username, fetched.email) == ("alicia", "alicia@x.com")
        assert fetched.created_at == original.created_at
        assert fetched.updated_at > original.updated_at

    @pytest.mark.asyncio
    async def test_update_may_keep_own_values(self, user_repo: UserRepository) -> None:
        user = await user_repo.create("alice", "a@x.com")

        updated = await user_repo.update(user.id, "alice", "a@x.com")

        assert updated.username == "alice"
        assert updated.updated_at > user.updated_at

    @pytest.mark.asyncio
    async def test_update_conflicts_with_other_users(self, user_repo: UserRepository) -> None:
        await user_repo.create("alice", "a@x.com")
        bob = await user_repo.create("bob", "b@x.com")

        with pytest.raises(ConflictError, match="Username or email already exists"):
            await user_repo.update(bob.id, "bob", "a@x.com")

        unchanged = await user_repo.get(bob.id)
        assert unchanged == bob

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, user_repo: UserRepository) -> None:
        await user_repo.create("alice", "a@x.com")
        before = await user_repo.list_all()

        with pytest.raises(NotFoundError):
            await user_repo.update(99, "ghost", "ghost@x.com")

        assert await user_repo.list_all() == before

    @pytest.mark.asyncio
    async def test_missing_id_wins_over_conflict(self, user_repo: UserRepository) -> None:
        await user_repo.create("alice", "a@x.com")

        with pytest.raises(NotFoundError):
            await user_repo.update(99, "alice", "a@x.com")

    @pytest.mark.asyncio
    async def test_update_keeps_position(self, user_repo: UserRepository) -> None:
        for name in ("a", "b", "c"):
            await user_repo.create(name, f"{name}@x.com")

        await user_repo.update(2, "bee", "bee@x.com")

        assert [user.username for user in await user_repo.list_all()] == ["a", "bee", "c"]


class TestUserRepositoryDelete:
    """Delete semantics."""

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, user_repo: UserRepository) -> None:
        user = await user_repo.create("alice", "a@x.com")

        await user_repo.delete(user.id)

        with pytest.raises(NotFoundError):
            await user_repo.get(user.id)

    @pytest.mark.asyncio
    async def test_delete_preserves_order_of_the_rest(self, user_repo: UserRepository) -> None:
        for name in ("a", "b", "c", "d"):
            await user_repo.create(name, f"{name}@x.com")

        await user_repo.delete(2)

        assert [user.id for user in await user_repo.list_all()] == [1, 3, 4]

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, user_repo: UserRepository) -> None:
        with pytest.raises(NotFoundError):
            await user_repo.delete(1)

    @pytest.mark.asyncio
    async def test_deleted_username_can_be_registered_again(
        self, user_repo: UserRepository
    ) -> None:
        user = await user_repo.create("alice", "a@x.com")
        await user_repo.delete(user.id)

        again = await user_repo.create("alice", "a@x.com")

        assert again.id == 2


class TestPostRepository:
    """Post lifecycle and author attribution."""

    @pytest.mark.asyncio
    async def test_author_defaults_without_users(self, post_repo: PostRepository) -> None:
        post = await post_repo.create("T", "C")

        assert isinstance(post, Post)
        assert (post.id, post.author_id) == (1, DEFAULT_AUTHOR_ID)

    @pytest.mark.asyncio
    async def test_author_is_first_user_not_latest(
        self, user_repo: UserRepository, post_repo: PostRepository
    ) -> None:
        for index in range(4):
            user = await user_repo.create(f"tmp{index}", f"tmp{index}@x.com")
            await user_repo.delete(user.id)
        carol = await user_repo.create("carol", "c@x.com")
        await user_repo.create("dave", "d@x.com")
        assert carol.id == 5

        post = await post_repo.create("T", "C")

        assert post.author_id == carol.id

    @pytest.mark.asyncio
    async def test_author_is_fixed_at_creation(
        self, user_repo: UserRepository, post_repo: PostRepository
    ) -> None:
        alice = await user_repo.create("alice", "a@x.com")
        post = await post_repo.create("T", "C")

        await user_repo.delete(alice.id)
        await user_repo.create("bob", "b@x.com")
        updated = await post_repo.update(post.id, "T2", "C2")

        assert updated.author_id == alice.id
        assert (await post_repo.get(post.id)).author_id == alice.id

    @pytest.mark.asyncio
    async def test_posts_have_no_uniqueness_constraint(self, post_repo: PostRepository) -> None:
        first = await post_repo.create("same", "same")
        second = await post_repo.create("same", "same")

        assert (first.id, second.id) == (1, 2)

    @pytest.mark.asyncio
    async def test_update_round_trip(self, post_repo: PostRepository) -> None:
        original = await post_repo.create("T", "C")

        updated = await post_repo.update(original.id, "T2", "C2")

        assert (updated.title, updated.content) == ("T2", "C2")
        assert updated.created_at == original.created_at
        assert updated.updated_at > original.updated_at

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, post_repo: PostRepository) -> None:
        with pytest.raises(NotFoundError, match="Post not found"):
            await post_repo.update(7, "T", "C")

        assert await post_repo.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_never_reissues_ids(self, post_repo: PostRepository) -> None:
        first = await post_repo.create("a", "a")
        await post_repo.delete(first.id)

        with pytest.raises(NotFoundError):
            await post_repo.get(first.id)

        second = await post_repo.create("b", "b")
        assert second.id == 2

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(
        self, user_repo: UserRepository, post_repo: PostRepository
    ) -> None:
        await user_repo.create("alice", "a@x.com")

        posts = await asyncio.gather(*(post_repo.create(f"t{i}", "c") for i in range(10)))

        assert sorted(post.id for post in posts) == list(range(1, 11))
        assert {post.author_id for post in posts} == {1}
