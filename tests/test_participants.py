import logging

from models.JoinRequest import JoinRequest, JoinRequestStatus
from models.Notification import Notification, NotificationType
import services.notifications as notifications_service

from conftest import OWNER


def _remove(client, trip_id, participant_id, actor=OWNER):
    return client.delete(
        f"/trips/{trip_id}/participants/{participant_id}",
        headers={"x-user-id": actor},
    )


def test_remove_participant_deletes_request_and_notifies(client, db_session, accepted_participant):
    trip, _ = accepted_participant

    resp = _remove(client, trip["id"], "alice")

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Participant removed successfully"
    assert body["trip"]["participants"] == []

    db_session.expire_all()
    assert db_session.query(JoinRequest).filter_by(trip_id=trip["id"], user_id="alice").count() == 0
    removed = (
        db_session.query(Notification)
        .filter_by(recipient_id="alice", type=NotificationType.PARTICIPANT_REMOVED)
        .one()
    )
    assert removed.message == 'You have been removed from the trip "Goa getaway"'


def test_removed_participant_can_request_again(client, db_session, accepted_participant, join):
    trip, _ = accepted_participant
    _remove(client, trip["id"], "alice")

    resp = join(trip["id"], "alice")

    assert resp.status_code == 200
    db_session.expire_all()
    [request] = db_session.query(JoinRequest).filter_by(trip_id=trip["id"], user_id="alice").all()
    assert request.status is JoinRequestStatus.PENDING
    assert request.id == resp.json()["requestId"]


def test_only_owner_can_remove(client, accepted_participant):
    trip, _ = accepted_participant
    resp = _remove(client, trip["id"], "alice", actor="alice")
    assert resp.status_code == 403
    assert resp.json()["message"] == "Only the trip creator can remove participants"
    assert [p["userId"] for p in client.get(f"/trips/{trip['id']}").json()["participants"]] == ["alice"]


def test_owner_cannot_be_removed(client, create_trip):
    trip = create_trip()
    resp = _remove(client, trip["id"], OWNER)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Cannot remove the trip creator"


def test_remove_unknown_participant(client, create_trip):
    trip = create_trip()
    resp = _remove(client, trip["id"], "nobody")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Participant not found in this trip"


def test_remove_requires_identity_and_trip(client, create_trip):
    trip = create_trip()
    assert client.delete(f"/trips/{trip['id']}/participants/alice").status_code == 401
    assert _remove(client, 4242, "alice").status_code == 404


def test_notification_failure_does_not_fail_removal(client, db_session, accepted_participant,
                                                   monkeypatch, caplog):
    trip, _ = accepted_participant

    def broken(**kwargs):
        raise RuntimeError("notification store down")

    monkeypatch.setattr(notifications_service, "Notification", broken)
    with caplog.at_level(logging.ERROR, logger="travelmates.notifications"):
        resp = _remove(client, trip["id"], "alice")

    assert resp.status_code == 200
    assert resp.json()["trip"]["participants"] == []
    db_session.expire_all()
    assert db_session.query(JoinRequest).filter_by(trip_id=trip["id"], user_id="alice").count() == 0
    assert (
        db_session.query(Notification)
        .filter_by(recipient_id="alice", type=NotificationType.PARTICIPANT_REMOVED)
        .count()
    ) == 0
    assert "Error creating PARTICIPANT_REMOVED notification for alice" in caplog.text
