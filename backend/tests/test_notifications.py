"""알림 조회와 읽음 처리 API 테스트입니다."""

import pytest

from knowledge_base.services import notification_service
from tests.conftest import auth_headers


def _notify(db, user_id, title):
    return notification_service.create_notification(
        db,
        user_id=user_id,
        noti_type=notification_service.SHARE,
        title=title,
        message=f"{title} message",
        data={"document_id": 1},
    )


def test_list_notifications_newest_first(client, db, seed_users):
    bob_id = seed_users["bob"].user_id
    _notify(db, bob_id, "first")
    _notify(db, bob_id, "second")
    _notify(db, seed_users["carol"].user_id, "other")

    resp = client.get("/api/notifications", headers=auth_headers(client, "bob"))
    assert resp.status_code == 200
    body = resp.json()
    assert [n["title"] for n in body] == ["second", "first"]
    assert body[0]["data"] == {"document_id": 1}
    assert body[0]["is_read"] is False


def test_mark_read_and_unread_filter(client, db, seed_users):
    bob_id = seed_users["bob"].user_id
    first = _notify(db, bob_id, "first")
    _notify(db, bob_id, "second")
    bob = auth_headers(client, "bob")

    assert client.put(f"/api/notifications/{first.noti_id}/read", headers=bob).status_code == 204

    unread = client.get("/api/notifications", params={"unread_only": True}, headers=bob).json()
    assert [n["title"] for n in unread] == ["second"]


def test_mark_read_other_users_notification(client, db, seed_users):
    noti = _notify(db, seed_users["carol"].user_id, "carol only")
    bob = auth_headers(client, "bob")

    assert client.put(f"/api/notifications/{noti.noti_id}/read", headers=bob).status_code == 404
    assert client.put("/api/notifications/9999/read", headers=bob).status_code == 404


def test_mark_all_read(client, db, seed_users):
    bob_id = seed_users["bob"].user_id
    _notify(db, bob_id, "first")
    _notify(db, bob_id, "second")
    carol_noti = _notify(db, seed_users["carol"].user_id, "carol only")
    bob = auth_headers(client, "bob")

    assert client.put("/api/notifications/read-all", headers=bob).status_code == 204
    assert client.get("/api/notifications", params={"unread_only": True}, headers=bob).json() == []

    db.expire_all()
    db.refresh(carol_noti)
    assert carol_noti.is_read is False


def test_notifications_require_auth(client, seed_users):
    assert client.get("/api/notifications").status_code == 401
    assert client.put("/api/notifications/read-all").status_code == 401


def test_unknown_notification_type_rejected(db, seed_users):
    with pytest.raises(ValueError):
        notification_service.create_notification(
            db, user_id=seed_users["bob"].user_id, noti_type="digest", title="t", message="m"
        )
