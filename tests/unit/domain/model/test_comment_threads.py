"""Unit tests for assembling comment reply trees."""

from datetime import datetime, timedelta
from uuid import uuid4

from quill.domain.model.comment import Comment, build_threads, walk_threads
from quill.domain.value import CommentId, PostId, UserId

POST_ID = PostId(uuid4())
AUTHOR_ID = UserId(uuid4())
START = datetime(2024, 5, 1, 12, 0)


def _comment(minute: int, parent: Comment | None = None) -> Comment:
    return Comment(
        id=CommentId(uuid4()),
        post_id=POST_ID,
        author_id=AUTHOR_ID,
        content=f"comment at minute {minute}",
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        created_at=START + timedelta(minutes=minute),
    )


class TestBuildThreads:
    """Tests for build_threads."""

    def test_replies_nest_under_parents_oldest_first(self):
        # Arrange
        first = _comment(0)
        second = _comment(1)
        reply_late = _comment(5, parent=first)
        reply_early = _comment(2, parent=first)
        nested = _comment(3, parent=reply_early)

        # Act
        threads = build_threads([nested, second, reply_late, first, reply_early])

        # Assert
        assert [t.comment.id for t in threads] == [first.id, second.id]
        first_thread = threads[0]
        assert [r.comment.id for r in first_thread.replies] == [
            reply_early.id,
            reply_late.id,
        ]
        assert first_thread.replies[0].replies[0].comment.id == nested.id
        assert threads[1].replies == []

    def test_orphaned_replies_are_dropped(self):
        parent = _comment(0)
        orphan = _comment(1, parent=parent)

        assert build_threads([orphan]) == []

    def test_empty_input(self):
        assert build_threads([]) == []

    def test_deep_reply_chain(self):
        chain = [_comment(0)]
        for minute in range(1, 1000):
            chain.append(_comment(minute, parent=chain[-1]))

        threads = build_threads(list(reversed(chain)))

        assert len(threads) == 1
        assert [c.id for c in walk_threads(threads)] == [c.id for c in chain]


class TestWalkThreads:
    """Tests for walk_threads."""

    def test_each_comment_is_followed_by_its_replies(self):
        first = _comment(0)
        second = _comment(1)
        reply = _comment(2, parent=first)
        nested = _comment(3, parent=reply)

        walked = list(walk_threads(build_threads([second, nested, reply, first])))

        assert [c.id for c in walked] == [first.id, reply.id, nested.id, second.id]
