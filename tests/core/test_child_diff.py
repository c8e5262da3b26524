"""Child Diff: verifies minimal add/delete sets for tags and attachments.

Tests cover:
    - tags: to_add = desired - current, to_delete = current - desired
    - diff(state, state) is empty (idempotent update)
    - attachments keyed by link, deletions reported by row id
    - duplicates in input collapse, order of first appearance kept
"""

from datetime import datetime, timezone

from ticketing.core.child_diff import diff_attachments, diff_tag_ids
from ticketing.core.entities import Attachment

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _attachment(attachment_id: int, link: str) -> Attachment:
    return Attachment(
        id=attachment_id, ticket_id=7, link=link, created_at=NOW, updated_at=NOW,
    )


# ─── Tags ────────────────────────────────────────────────────────

def test_tag_diff_is_set_difference_both_ways():
    diff = diff_tag_ids([1, 2, 3], [2, 3, 4, 5])
    assert diff.to_add == [4, 5]
    assert diff.to_delete == [1]


def test_tag_diff_same_set_is_empty():
    diff = diff_tag_ids([3, 1, 2], [1, 2, 3])
    assert diff.to_add == []
    assert diff.to_delete == []
    assert diff.is_empty


def test_tag_diff_from_empty_adds_everything():
    diff = diff_tag_ids([], [5, 6])
    assert diff.to_add == [5, 6]
    assert diff.to_delete == []


def test_tag_diff_to_empty_deletes_everything():
    diff = diff_tag_ids([5, 6], [])
    assert diff.to_add == []
    assert diff.to_delete == [5, 6]


def test_tag_diff_collapses_duplicates():
    diff = diff_tag_ids([1], [2, 2, 1, 3, 3])
    assert diff.to_add == [2, 3]
    assert diff.to_delete == []


def test_tag_diff_applied_then_rediffed_is_empty():
    current, desired = {1, 2, 9}, [2, 3, 4]
    diff = diff_tag_ids(current, desired)
    after = (current - set(diff.to_delete)) | set(diff.to_add)
    assert after == set(desired)
    assert diff_tag_ids(after, desired).is_empty


# ─── Attachments ─────────────────────────────────────────────────

def test_attachment_diff_adds_new_links_and_deletes_old_ids():
    current = [_attachment(10, "a"), _attachment(11, "b")]
    diff = diff_attachments(current, ["b", "c"])
    assert diff.links_to_add == ["c"]
    assert diff.ids_to_delete == [10]


def test_attachment_diff_leaves_shared_links_untouched():
    current = [_attachment(10, "a"), _attachment(11, "b")]
    diff = diff_attachments(current, ["b", "a"])
    assert diff.is_empty


def test_attachment_diff_changed_link_is_delete_plus_add():
    diff = diff_attachments([_attachment(10, "old")], ["new"])
    assert diff.links_to_add == ["new"]
    assert diff.ids_to_delete == [10]


def test_attachment_diff_clearing_deletes_all_rows():
    current = [_attachment(10, "a"), _attachment(11, "a")]
    diff = diff_attachments(current, [])
    assert diff.links_to_add == []
    assert diff.ids_to_delete == [10, 11]


def test_attachment_diff_duplicate_desired_link_added_once():
    diff = diff_attachments([], ["x", "x", "y"])
    assert diff.links_to_add == ["x", "y"]
