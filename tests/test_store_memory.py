"""Tests for InMemoryOrderedStore sorted-set semantics."""
import pytest

KEY = "store_test"


class TestInMemoryOrderedStore:
    @pytest.mark.asyncio
    async def test_basic(self, memory_store):
        store = memory_store
        m1, m2, m3 = b"member1", b"member2", b"member3"

        await store.remove(KEY, m1)

        assert await store.insert_if_absent(KEY, 1, m1) == 1
        assert await store.insert_if_absent(KEY, 1, m1) == 0

        await store.remove(KEY, m1)
        assert await store.insert_if_absent(KEY, 1, m1) == 1
        assert await store.insert_if_absent(KEY, 2, m1) == 0

        assert await store.insert_if_absent(KEY, 2, m2) == 1
        assert await store.insert_if_absent(KEY, 3, m3) == 1

        res = await store.range_by_score(KEY, 1, 3)
        assert [r.member for r in res] == [m1, m2, m3]
        assert [r.score for r in res] == [1, 2, 3]

        assert len(await store.range_by_score(KEY, 2, 2)) == 1

    @pytest.mark.asyncio
    async def test_duplicate_keeps_first_score(self, memory_store):
        assert await memory_store.insert_if_absent(KEY, 10.0, b"m") == 1
        assert await memory_store.insert_if_absent(KEY, 20.0, b"m") == 0
        res = await memory_store.range_by_score(KEY, 0, float("inf"))
        assert res == [(b"m", 10.0)]

    @pytest.mark.asyncio
    async def test_equal_scores_ordered_by_member_bytes(self, memory_store):
        for member in (b"c", b"a", b"b"):
            await memory_store.insert_if_absent(KEY, 5.0, member)
        res = await memory_store.range_by_score(KEY, 5.0, 5.0)
        assert [r.member for r in res] == [b"a", b"b", b"c"]

    @pytest.mark.asyncio
    async def test_range_bounds_inclusive(self, memory_store):
        for score in (1.0, 2.0, 3.0, 4.0):
            await memory_store.insert_if_absent(KEY, score, str(score).encode())
        res = await memory_store.range_by_score(KEY, 2.0, 3.0)
        assert [r.score for r in res] == [2.0, 3.0]
        assert await memory_store.range_by_score(KEY, 4.5, 10.0) == []

    @pytest.mark.asyncio
    async def test_remove_absent_is_noop(self, memory_store):
        await memory_store.insert_if_absent(KEY, 1.0, b"keep")
        await memory_store.remove(KEY, b"missing")
        await memory_store.remove("other", b"keep")
        assert len(await memory_store.range_by_score(KEY, 0, 10)) == 1

    @pytest.mark.asyncio
    async def test_empty_key_disappears(self, memory_store):
        await memory_store.insert_if_absent(KEY, 1.0, b"m")
        assert KEY in memory_store._entries
        await memory_store.remove(KEY, b"m")
        assert KEY not in memory_store._entries
        assert await memory_store.insert_if_absent(KEY, 2.0, b"m") == 1

    @pytest.mark.asyncio
    async def test_unknown_key_is_empty(self, memory_store):
        assert await memory_store.range_by_score("nope", 0, float("inf")) == []
