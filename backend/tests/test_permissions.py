"""문서 열람/편집 판정 규칙(순수 함수)을 검증하는 테스트입니다."""

import pytest

from knowledge_base.utils.permissions import AccessSubject, can_edit, can_view

AUTHOR = 1
OTHER = 2


@pytest.mark.parametrize("user_id", [None, AUTHOR, OTHER, 999])
def test_public_document_viewable_by_anyone(user_id):
    subject = AccessSubject(visibility="public", author_id=AUTHOR)
    assert can_view(subject, user_id) is True


@pytest.mark.parametrize("visibility", ["private", "public", "space"])
def test_author_always_views_and_edits(visibility):
    subject = AccessSubject(visibility=visibility, author_id=AUTHOR, space_id=5)
    assert can_view(subject, AUTHOR) is True
    assert can_edit(subject, AUTHOR) is True


def test_private_document_without_grants_denies_others():
    subject = AccessSubject(visibility="private", author_id=AUTHOR)
    assert can_view(subject, OTHER) is False
    assert can_edit(subject, OTHER) is False
    assert can_view(subject, None) is False


def test_view_grant_does_not_confer_edit():
    subject = AccessSubject(visibility="private", author_id=AUTHOR)
    assert can_view(subject, OTHER, permission="view") is True
    assert can_edit(subject, OTHER, permission="view") is False


def test_edit_grant_confers_both():
    subject = AccessSubject(visibility="private", author_id=AUTHOR)
    assert can_view(subject, OTHER, permission="edit") is True
    assert can_edit(subject, OTHER, permission="edit") is True


def test_space_visibility_requires_membership():
    subject = AccessSubject(visibility="space", author_id=AUTHOR, space_id=7)
    assert can_view(subject, OTHER, is_space_member=True) is True
    assert can_view(subject, OTHER, is_space_member=False) is False


def test_space_visibility_without_space_is_private():
    subject = AccessSubject(visibility="space", author_id=AUTHOR, space_id=None)
    assert can_view(subject, OTHER, is_space_member=True) is False


def test_membership_ignored_for_private_documents():
    subject = AccessSubject(visibility="private", author_id=AUTHOR, space_id=7)
    assert can_view(subject, OTHER, is_space_member=True) is False


def test_space_membership_never_grants_edit():
    subject = AccessSubject(visibility="space", author_id=AUTHOR, space_id=7)
    assert can_edit(subject, OTHER) is False


def test_anonymous_cannot_edit_public_document():
    subject = AccessSubject(visibility="public", author_id=AUTHOR)
    assert can_edit(subject, None) is False
