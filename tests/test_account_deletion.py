from __future__ import annotations

from datetime import datetime, timedelta, timezone

from conftest import auth_headers, fail_writes

from social_api import models


def manage(client, caller_id, **body):
    return client.post("/functions/manage-account-deletion", json=body, headers=auth_headers(caller_id))


def add_pending_request(db, user_id, scheduled_in=timedelta(days=30)):
    now = datetime.now(timezone.utc)
    db.add(models.AccountDeletionRequest(
        user_id=user_id,
        requested_at=now,
        scheduled_deletion_at=now + scheduled_in,
        status="pending",
    ))
    db.commit()


def test_request_deletion_schedules_notice_period(client, db, make_profile) -> None:
    user = make_profile().id

    resp = manage(client, user, action="request_deletion", user_id=user)

    assert resp.status_code == 200
    request = resp.json()["request"]
    assert request["status"] == "pending"
    row = db.query(models.AccountDeletionRequest).filter_by(user_id=user).one()
    assert (row.scheduled_deletion_at - row.requested_at).days == 30


def test_only_one_pending_request_per_user(client, make_profile) -> None:
    user = make_profile().id
    manage(client, user, action="request_deletion")

    resp = manage(client, user, action="request_deletion")

    assert resp.status_code == 400
    assert resp.json()["error"] == "A deletion request is already pending"


def test_cancel_and_status(client, db, make_profile) -> None:
    user = make_profile().id
    manage(client, user, action="request_deletion")

    cancelled = manage(client, user, action="cancel_deletion")
    status = manage(client, user, action="get_status")

    assert cancelled.status_code == 200
    assert cancelled.json()["request"]["status"] == "cancelled"
    assert status.json() == {"request": None}
    assert manage(client, user, action="cancel_deletion").status_code == 404


def test_user_cannot_act_for_someone_else(client, make_profile) -> None:
    user = make_profile().id
    other = make_profile().id

    resp = manage(client, user, action="request_deletion", user_id=other)

    assert resp.status_code == 403


def test_get_all_pending_requires_admin(client, make_profile) -> None:
    user = make_profile().id

    resp = manage(client, user, action="get_all_pending", user_id="admin")

    assert resp.status_code == 403
    assert resp.json() == {"error": "Admin access required"}


def test_get_all_pending_lists_requests_with_profiles(client, db, make_profile, make_admin) -> None:
    admin = make_admin().id
    soon = make_profile(full_name="Soon", username="soon", email="soon@example.com").id
    later = make_profile(full_name="Later").id
    add_pending_request(db, later, timedelta(days=10, hours=1))
    add_pending_request(db, soon, timedelta(hours=5, minutes=30))

    resp = manage(client, admin, action="get_all_pending", user_id="admin")

    assert resp.status_code == 200
    requests = resp.json()["requests"]
    assert [r["user_id"] for r in requests] == [soon, later]
    assert requests[0]["profiles"] == {
        "id": soon,
        "full_name": "Soon",
        "username": "soon",
        "avatar_url": None,
        "email": "soon@example.com",
    }
    assert requests[0]["time_remaining"] == "5 hours remaining"
    assert requests[1]["time_remaining"] == "10 days remaining"


def test_admin_delete_now_removes_user_data(client, db, make_profile, make_admin) -> None:
    admin = make_admin().id
    user = make_profile().id
    friend = make_profile().id
    add_pending_request(db, user)

    post = models.Post(user_id=user, content="mine")
    db.add(post)
    db.commit()
    post_id = post.id
    db.add_all([
        models.Comment(user_id=friend, post_id=post_id, content="on their post"),
        models.Follow(follower_id=user, following_id=friend),
        models.Follow(follower_id=friend, following_id=user),
        models.Notification(user_id=user, type="follow", title="t", body="b"),
    ])
    db.commit()

    resp = manage(client, admin, action="admin_delete_now", user_id=user, admin_id=admin)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "User account permanently deleted"}
    assert db.query(models.AccountDeletionRequest).filter_by(user_id=user).count() == 0
    assert db.query(models.Profile).filter_by(id=user).count() == 0
    assert db.query(models.Post).count() == 0
    assert db.query(models.Comment).count() == 0
    assert db.query(models.Follow).count() == 0
    assert db.query(models.Notification).count() == 0
    assert db.query(models.Profile).filter_by(id=friend).count() == 1


def test_admin_delete_now_requires_user_id(client, make_admin) -> None:
    admin = make_admin().id

    resp = manage(client, admin, action="admin_delete_now")

    assert resp.status_code == 400


def test_process_scheduled_deletes_due_users(client, db, make_profile, make_admin) -> None:
    admin = make_admin().id
    due = make_profile().id
    not_due = make_profile().id
    add_pending_request(db, due, timedelta(hours=-1))
    add_pending_request(db, not_due, timedelta(days=3))

    resp = manage(client, admin, action="process_scheduled")

    assert resp.json() == {"success": True, "deleted_count": 1}
    assert db.query(models.Profile).filter_by(id=due).count() == 0
    assert db.query(models.AccountDeletionRequest).filter_by(user_id=not_due).count() == 1


def test_unknown_action(client, make_profile) -> None:
    user = make_profile().id

    resp = manage(client, user, action="explode")

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid action"}


def test_cancel_failure_keeps_request_pending(client, db, make_profile) -> None:
    user = make_profile().id
    manage(client, user, action="request_deletion")
    fail_writes(db, "account_deletion_requests", "UPDATE")

    resp = manage(client, user, action="cancel_deletion")

    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to cancel account deletion"
    assert db.query(models.AccountDeletionRequest).filter_by(user_id=user, status="pending").count() == 1


def test_admin_id_must_match_caller(client, db, make_profile, make_admin) -> None:
    admin = make_admin().id
    other_admin = make_admin().id
    user = make_profile().id
    add_pending_request(db, user)

    resp = manage(client, admin, action="admin_delete_now", user_id=user, admin_id=other_admin)

    assert resp.status_code == 403
    assert resp.json() == {"error": "admin_id does not match the authenticated user"}
    assert db.query(models.Profile).filter_by(id=user).count() == 1
