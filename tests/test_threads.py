"""Thread assembly tests: pure folding of flat comment/reply rows."""
from blogsite.services.comment_service import assemble_threads


def _row(comment_id, reply_id=None, website=None):
    return {
        "idcomment": comment_id,
        "comment_name": f"commenter {comment_id}",
        "comment_email": f"c{comment_id}@example.com",
        "comment_website": website,
        "comment_msg": f"comment {comment_id}",
        "idreply": reply_id,
        "reply_name": None if reply_id is None else f"replier {reply_id}",
        "reply_email": None if reply_id is None else f"r{reply_id}@example.com",
        "reply_msg": None if reply_id is None else f"reply {reply_id}",
    }


def test_empty_rows():
    assert assemble_threads([]) == []


def test_groups_replies_under_their_comment():
    threads = assemble_threads([_row(1, 1), _row(1, 2), _row(2)])

    assert [t.id for t in threads] == [1, 2]
    assert [r.id for r in threads[0].replies] == [1, 2]
    assert threads[1].replies == []


def test_preserves_first_seen_comment_order():
    threads = assemble_threads([_row(9), _row(4, 10), _row(4, 11), _row(2)])
    assert [t.id for t in threads] == [9, 4, 2]


def test_reply_order_follows_rows():
    threads = assemble_threads([_row(3, 7), _row(3, 8), _row(3, 12)])
    assert len(threads) == 1
    assert [r.message for r in threads[0].replies] == ["reply 7", "reply 8", "reply 12"]


def test_comment_fields_copied_from_first_row():
    (thread,) = assemble_threads([_row(5, website="https://example.com")])
    assert thread.name == "commenter 5"
    assert thread.email == "c5@example.com"
    assert thread.website == "https://example.com"
    assert thread.message == "comment 5"


def test_reply_fields():
    (thread,) = assemble_threads([_row(1, 42)])
    (reply,) = thread.replies
    assert reply.id == 42
    assert reply.name == "replier 42"
    assert reply.email == "r42@example.com"
    assert reply.message == "reply 42"


def test_accepts_any_iterable():
    threads = assemble_threads(_row(c) for c in (3, 2, 1))
    assert [t.id for t in threads] == [3, 2, 1]
