"""멘션 추출, 열람 권한 자동 부여, 멘션 알림 발송을 검증하는 테스트입니다."""

from sqlalchemy.exc import OperationalError

from knowledge_base.models.document import DocumentPermission
from knowledge_base.models.notification import Notification
from knowledge_base.services import mention_service, notification_service
from tests.conftest import auth_headers, create_document


def _permission(db, doc_id, user_id):
    db.expire_all()
    return db.query(DocumentPermission).filter(
        DocumentPermission.doc_id == doc_id,
        DocumentPermission.user_id == user_id,
    ).all()


def _mentions_for(db, user_id):
    db.expire_all()
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.noti_type == "mention")
        .order_by(Notification.noti_id.asc())
        .all()
    )


def test_extract_mentions_preserves_order_and_duplicates():
    assert mention_service.extract_mentions("hi @bob and @alice, @bob again") == ["bob", "alice", "bob"]


def test_extract_mentions_edge_cases():
    assert mention_service.extract_mentions(None) == []
    assert mention_service.extract_mentions("") == []
    assert mention_service.extract_mentions("no mentions @ here") == []
    assert mention_service.extract_mentions("<p>@Bob_2</p>@carol!") == ["Bob_2", "carol"]
    assert mention_service.extract_mentions("@héllo") == ["h"]


def test_document_update_mention_grants_view_and_notifies(client, db, seed_users):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft")

    resp = client.put(f"/api/documents/{doc['doc_id']}", json={"content": "ping @bob"}, headers=alice)
    assert resp.status_code == 200

    rows = _permission(db, doc["doc_id"], seed_users["bob"].user_id)
    assert len(rows) == 1
    assert rows[0].permission == "view"
    assert rows[0].granted_by == seed_users["alice"].user_id

    notis = _mentions_for(db, seed_users["bob"].user_id)
    assert len(notis) == 1
    assert notis[0].data == {"document_id": doc["doc_id"]}

    bob = auth_headers(client, "bob")
    assert client.get(f"/api/documents/{doc['doc_id']}", headers=bob).status_code == 200
    assert client.put(f"/api/documents/{doc['doc_id']}", json={"content": "x"}, headers=bob).status_code == 403


def test_every_mention_is_processed(client, db, seed_users):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft")

    client.put(
        f"/api/documents/{doc['doc_id']}",
        json={"content": "@bob @carol @dave and @bob again"},
        headers=alice,
    )

    for name in ("bob", "carol", "dave"):
        assert len(_permission(db, doc["doc_id"], seed_users[name].user_id)) == 1
    assert len(_mentions_for(db, seed_users["bob"].user_id)) == 2
    assert len(_mentions_for(db, seed_users["carol"].user_id)) == 1


def test_mention_does_not_downgrade_edit_permission(client, db, seed_users):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft")
    client.post(
        f"/api/documents/{doc['doc_id']}/permissions",
        json={"user_id": seed_users["bob"].user_id, "permission": "edit"},
        headers=alice,
    )

    client.put(f"/api/documents/{doc['doc_id']}", json={"content": "thanks @bob"}, headers=alice)

    rows = _permission(db, doc["doc_id"], seed_users["bob"].user_id)
    assert [r.permission for r in rows] == ["edit"]
    assert len(_mentions_for(db, seed_users["bob"].user_id)) == 1


def test_mention_on_public_document_adds_no_permission(client, db, seed_users):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft", visibility="public")

    client.put(f"/api/documents/{doc['doc_id']}", json={"content": "cc @carol"}, headers=alice)

    assert _permission(db, doc["doc_id"], seed_users["carol"].user_id) == []
    assert len(_mentions_for(db, seed_users["carol"].user_id)) == 1


def test_unchanged_content_does_not_renotify(client, db, seed_users):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="hi @bob")

    client.put(f"/api/documents/{doc['doc_id']}", json={"content": "hi @bob", "title": "Plan 2"}, headers=alice)

    assert _mentions_for(db, seed_users["bob"].user_id) == []


def test_comment_with_unknown_mention_succeeds_silently(client, db, seed_users):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft")
    before_notifications = db.query(Notification).count()

    resp = client.post(
        f"/api/documents/{doc['doc_id']}/comments",
        json={"content": "hello @unknownuser123"},
        headers=alice,
    )
    assert resp.status_code == 201
    assert resp.json()["mentions"] == ["unknownuser123"]

    db.expire_all()
    assert db.query(DocumentPermission).filter(DocumentPermission.doc_id == doc["doc_id"]).count() == 0
    assert db.query(Notification).count() == before_notifications


def test_comment_mention_payload_includes_comment(client, db, seed_users):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft")

    resp = client.post(
        f"/api/documents/{doc['doc_id']}/comments",
        json={"content": "@dave please review"},
        headers=alice,
    )
    comment_id = resp.json()["comment_id"]

    notis = _mentions_for(db, seed_users["dave"].user_id)
    assert len(notis) == 1
    assert notis[0].data == {"document_id": doc["doc_id"], "comment_id": comment_id}
    assert len(_permission(db, doc["doc_id"], seed_users["dave"].user_id)) == 1


def test_failed_mention_does_not_stop_others(client, db, seed_users, monkeypatch):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft")
    bob_id = seed_users["bob"].user_id
    real_create = notification_service.create_notification

    def flaky_create_notification(db_, user_id, *args, **kwargs):
        if user_id == bob_id:
            raise OperationalError("INSERT INTO notification", {}, Exception("database is locked"))
        return real_create(db_, user_id, *args, **kwargs)

    monkeypatch.setattr(notification_service, "create_notification", flaky_create_notification)

    resp = client.put(f"/api/documents/{doc['doc_id']}", json={"content": "@bob @carol"}, headers=alice)
    assert resp.status_code == 200

    assert _mentions_for(db, bob_id) == []
    assert len(_mentions_for(db, seed_users["carol"].user_id)) == 1
    assert len(_permission(db, doc["doc_id"], seed_users["carol"].user_id)) == 1


def test_concurrent_grant_is_treated_as_already_granted(client, db, seed_users, monkeypatch):
    alice = auth_headers(client, "alice")
    doc = create_document(client, alice, title="Plan", content="draft")
    bob_id = seed_users["bob"].user_id
    client.post(
        f"/api/documents/{doc['doc_id']}/permissions",
        json={"user_id": bob_id, "permission": "edit"},
        headers=alice,
    )
    # 권한 확인 직후 다른 요청이 행을 먼저 추가한 상황: 확인은 통과하고 INSERT는 충돌한다.
    monkeypatch.setattr(mention_service, "user_can_view", lambda db_, doc_, user_id: False)

    resp = client.put(f"/api/documents/{doc['doc_id']}", json={"content": "ping @bob"}, headers=alice)
    assert resp.status_code == 200

    assert [r.permission for r in _permission(db, doc["doc_id"], bob_id)] == ["edit"]
    assert len(_mentions_for(db, bob_id)) == 1


def test_grant_view_if_missing_reports_conflict(db, seed_users, monkeypatch):
    from knowledge_base.models.document import Document

    alice_id = seed_users["alice"].user_id
    bob_id = seed_users["bob"].user_id
    doc = Document(title="T", content="C", slug="t", author_id=alice_id)
    db.add(doc)
    db.commit()
    db.add(DocumentPermission(doc_id=doc.doc_id, user_id=bob_id, permission="view", granted_by=alice_id))
    db.commit()
    monkeypatch.setattr(mention_service, "user_can_view", lambda db_, doc_, user_id: False)

    assert mention_service.grant_view_if_missing(db, doc, bob_id, alice_id) is False
    assert len(_permission(db, doc.doc_id, bob_id)) == 1
