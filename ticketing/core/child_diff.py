"""Child Collection Diff: minimal add/delete sets between stored and desired ticket children.

Invariants:
    - tag_ids_to_add = desired - current, tag_ids_to_delete = current - desired
    - Attachments are keyed by link: shared links are never touched
    - Attachments to delete are reported by row id, additions by link
    - diff(state, state) yields empty deltas (update is idempotent)
    - Outputs keep first-appearance order and contain no duplicates

Design Decisions:
    - Pure functions over sets: no IO, trivially testable (ADR: functional core)
    - Ordered de-duplication via dict.fromkeys: stable SQL statement order for tests and logs
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ticketing.core.entities import Attachment


@dataclass(frozen=True)
class TagDiff:
    to_add: list[int] = field(default_factory=list)
    to_delete: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_delete


@dataclass(frozen=True)
class AttachmentDiff:
    links_to_add: list[str] = field(default_factory=list)
    ids_to_delete: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.links_to_add and not self.ids_to_delete


def diff_tag_ids(current: Iterable[int], desired: Iterable[int]) -> TagDiff:
    """Compute tag association deltas between current and desired tag id sets."""
    current_ids = list(dict.fromkeys(current))
    desired_ids = list(dict.fromkeys(desired))
    current_set = set(current_ids)
    desired_set = set(desired_ids)
    return TagDiff(
        to_add=[tag_id for tag_id in desired_ids if tag_id not in current_set],
        to_delete=[tag_id for tag_id in current_ids if tag_id not in desired_set],
    )


def diff_attachments(
    current: Iterable[Attachment], desired_links: Iterable[str],
) -> AttachmentDiff:
    """Compute attachment deltas keyed by link value."""
    current = list(current)
    desired = list(dict.fromkeys(desired_links))
    current_links = {attachment.link for attachment in current}
    desired_set = set(desired)
    return AttachmentDiff(
        links_to_add=[link for link in desired if link not in current_links],
        ids_to_delete=[
            attachment.id for attachment in current
            if attachment.link not in desired_set
        ],
    )
