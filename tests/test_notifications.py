from datetime import datetime, timedelta, timezone

import pytest

from models.Notification import Notification, NotificationType


def _add(db_session, recipient, count=1, read=False, start=None):
    start = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
    rows = []
    for i in range(count):
        n = Notification(
            recipient_id=recipient,
            sender_id="system",
            sender_name="System",
            type=NotificationType.SYSTEM,
            message=f"note {i}",
            read=read,
            created_at=start + timedelta(minutes=i),
        )
        db_session.add(n)
        rows.append(n)
    db_session.commit()
    return [n.id for n in rows]


def _get(client, user_id):
    return client.get("/notifications", headers={"x-user-id": user_id})


def _mark(client, user_id, body):
    return client.put("/notifications", json=body, headers={"x-user-id": user_id})


def test_list_newest_first_with_unread_count(client, db_session):
    _add(db_session, "alice", count=3)
    _add(db_session, "alice", count=1, read=True, start=datetime(2025, 1, 1, tzinfo=timezone.utc))
    _add(db_session, "bob", count=2)

    resp = _get(client, "alice")

    assert resp.status_code == 200
    body = resp.json()
    assert [n["message"] for n in body["notifications"]] == ["note 2", "note 1", "note 0", "note 0"]
    assert body["unreadCount"] == 3
    first = body["notifications"][0]
    assert first["recipient"] == "alice"
    assert first["type"] == "SYSTEM"
    assert first["sender"] == {"userId": "system", "name": "System", "photoURL": None}


def test_list_is_capped_at_fifty(client, db_session):
    _add(db_session, "alice", count=55)
    body = _get(client, "alice").json()
    assert len(body["notifications"]) == 50
    assert body["notifications"][0]["message"] == "note 54"
    assert body["unreadCount"] == 55


def test_mark_single_read_only_touches_that_notification(client, db_session):
    first, second = _add(db_session, "alice", count=2)

    resp = _mark(client, "alice", {"notificationId": first})

    assert resp.status_code == 200
    assert resp.json() == {"message": "Notifications updated"}
    db_session.expire_all()
    assert db_session.get(Notification, first).read is True
    assert db_session.get(Notification, second).read is False
    assert _get(client, "alice").json()["unreadCount"] == 1


def test_mark_single_is_scoped_to_recipient(client, db_session):
    [bobs] = _add(db_session, "bob")

    resp = _mark(client, "alice", {"notificationId": bobs})

    assert resp.status_code == 404
    db_session.expire_all()
    assert db_session.get(Notification, bobs).read is False


def test_mark_all_only_affects_caller(client, db_session):
    _add(db_session, "alice", count=3)
    _add(db_session, "bob", count=2)

    assert _mark(client, "alice", {"markAll": True}).status_code == 200

    assert _get(client, "alice").json()["unreadCount"] == 0
    assert _get(client, "bob").json()["unreadCount"] == 2


def test_mark_without_target_is_invalid(client):
    resp = _mark(client, "alice", {})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


@pytest.mark.parametrize("method", ["get", "put"])
def test_notifications_require_identity(client, method):
    resp = client.request(method.upper(), "/notifications", json={"markAll": True})
    assert resp.status_code == 401


def test_notification_is_pushed_to_registered_device(client, create_trip, join, monkeypatch):
    import services.notifications as notifications_service

    sent = []
    monkeypatch.setattr(notifications_service, "send_notification", lambda **kw: sent.append(kw) or True)
    client.post("/users/", json={"uid": "owner-uid", "name": "Olivia"})
    client.put("/users/owner-uid/fcm-token", json={"fcmToken": "device-1"})
    trip = create_trip()

    join(trip["id"], "alice")

    [push] = sent
    assert push["fcm_token"] == "device-1"
    assert push["title"] == "New join request"
    assert push["data"]["type"] == "JOIN_REQUEST"
    assert push["data"]["trip_id"] == str(trip["id"])
