from datetime import datetime, timezone

import pytest

import jobtracker.repos.application_repo as arepo
import jobtracker.repos.connection_repo as crepo
import jobtracker.repos.user_repo as urepo
from jobtracker.core.constants import coerce_position_type, coerce_status
from jobtracker.models.past_action_notification import PastActionNotification
from jobtracker.repos import notification_repo


def test_user_repo_lookup_and_taken(db, make_user):
    alice = make_user("alice")
    assert urepo.get_by_username(db, "alice").id == alice.id
    assert urepo.get_by_email(db, "alice@example.com").id == alice.id
    assert urepo.get_by_id(db, "missing") is None

    assert urepo.find_taken(db, username="alice").id == alice.id
    assert urepo.find_taken(db, email="alice@example.com", exclude_user_id=alice.id) is None
    assert urepo.find_taken(db) is None
    assert alice.password_hash != "secret123"


def test_user_repo_update_partial(db, make_user):
    alice = make_user("alice")
    updated = urepo.update(db, alice.id, email="new@example.com")
    assert updated.username == "alice"
    assert updated.email == "new@example.com"
    assert urepo.update(db, "missing", username="x") is None


def test_delete_user_removes_connections_both_directions(db, make_user):
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    crepo.create_pending(db, alice.id, bob.id)
    crepo.create_pending(db, carol.id, alice.id)
    crepo.create_pending(db, bob.id, carol.id)
    alice_id = alice.id

    assert urepo.delete_user(db, alice_id) is True
    assert urepo.get_by_id(db, alice_id) is None
    assert [c.requester.username for c in crepo.list_for_user(db, bob.id)] == ["bob"]
    assert urepo.delete_user(db, alice_id) is False


def test_application_repo_update_and_delete_scoped_to_owner(db, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    app = arepo.create(db, alice.id, {"company_name": "Acme", "notes": "first"})

    assert arepo.update(db, app.id, bob.id, {"notes": "hijack"}) is None
    updated = arepo.update(db, app.id, alice.id, {"status": "HR Round"})
    assert updated.status == "HR Round"
    assert updated.notes == "first"

    assert arepo.delete(db, app.id, bob.id) is False
    assert arepo.delete(db, app.id, alice.id) is True
    assert arepo.get_for_user(db, app.id, alice.id) is None


def test_application_delete_cascades_notifications(db, make_user):
    alice = make_user("alice")
    when = datetime(2026, 1, 5, tzinfo=timezone.utc)
    app = arepo.create(db, alice.id, {"company_name": "Acme", "next_action_date": when})
    notification_repo.create(db, app, when)
    assert db.query(PastActionNotification).count() == 1

    arepo.delete(db, app.id, alice.id)
    assert db.query(PastActionNotification).count() == 0


def test_application_queries(db, make_user):
    alice = make_user("alice")
    jan = lambda d: datetime(2026, 1, d, tzinfo=timezone.utc)  # noqa: E731
    arepo.create(db, alice.id, {"company_name": "A", "next_action_date": jan(3)})
    arepo.create(db, alice.id, {"company_name": "B", "next_action_date": jan(1), "status": "Rejected"})
    arepo.create(db, alice.id, {"company_name": "C", "is_private": True})

    assert [a.company_name for a in arepo.list_with_next_action(db, alice.id)] == ["B", "A"]
    assert [a.company_name for a in arepo.list_next_action_between(db, alice.id, jan(2), jan(4))] == ["A"]
    assert [a.company_name for a in arepo.list_next_action_before(db, alice.id, jan(10))] == ["A"]
    assert {a.company_name for a in arepo.list_shared_for_user(db, alice.id)} == {"A", "B"}


def test_count_accepted_by_user(db, make_user):
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    crepo.accept(db, crepo.create_pending(db, alice.id, bob.id))
    crepo.create_pending(db, alice.id, carol.id)

    assert crepo.count_accepted_by_user(db, [alice.id, bob.id, carol.id]) == {alice.id: 1, bob.id: 1, carol.id: 0}
    assert crepo.count_accepted_by_user(db, []) == {}
    assert crepo.accepted_neighbor_ids(db, alice.id) == {bob.id}


@pytest.mark.parametrize(
    "raw,expected",
    [("applied", "Applied"), (" Technical ", "Technical Round"), ("OFFER RECEIVED", "Offer Received")],
)
def test_coerce_status(raw, expected):
    assert coerce_status(raw).value == expected


def test_coerce_rejects_unknown():
    with pytest.raises(ValueError):
        coerce_status("ghosted")
    with pytest.raises(ValueError):
        coerce_position_type("freelance")
    assert coerce_position_type("intern").value == "Internship"
