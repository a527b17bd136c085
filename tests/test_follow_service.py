"""
Tests for follow edges and the per-edge notification bell.
"""

import uuid

import pytest
from sqlalchemy import false
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateFollowError, InvalidFollowError, NotFoundError
from app.models.follower import Follower
from app.services import follow_service


class TestFollow:
    def test_follow_creates_edge_with_bell_on(self, db, alice, bob):
        result = follow_service.follow(db, alice.id, bob.id)

        assert result.follower_id == alice.id
        assert result.following_id == bob.id
        assert result.bell_enabled is True
        assert result.following.student_code == "STU-002"

    def test_following_twice_is_a_duplicate(self, db, alice, bob):
        follow_service.follow(db, alice.id, bob.id)

        with pytest.raises(DuplicateFollowError):
            follow_service.follow(db, alice.id, bob.id)

        assert db.query(Follower).count() == 1

    def test_self_follow_is_rejected(self, db, alice):
        with pytest.raises(InvalidFollowError):
            follow_service.follow(db, alice.id, alice.id)

    def test_mutual_follow_is_allowed(self, db, alice, bob):
        follow_service.follow(db, alice.id, bob.id)
        follow_service.follow(db, bob.id, alice.id)

        assert db.query(Follower).count() == 2

    def test_unknown_student(self, db, alice):
        with pytest.raises(NotFoundError):
            follow_service.follow(db, alice.id, uuid.uuid4())


class TestUnfollow:
    def test_unfollow_removes_edge(self, db, alice, bob, make_follow):
        make_follow(alice, bob)

        assert follow_service.unfollow(db, alice.id, bob.id) == 1
        assert db.query(Follower).count() == 0

    def test_unfollow_without_edge_is_not_an_error(self, db, alice, bob):
        assert follow_service.unfollow(db, alice.id, bob.id) == 0

    def test_unfollow_only_touches_the_ordered_pair(self, db, alice, bob, make_follow):
        make_follow(bob, alice)

        follow_service.unfollow(db, alice.id, bob.id)

        assert db.query(Follower).count() == 1


class TestBell:
    def test_toggle_bell_off_and_on(self, db, alice, bob, make_follow):
        make_follow(alice, bob)

        off = follow_service.toggle_bell(db, alice.id, bob.id, False)
        assert off.bell_enabled is False

        on = follow_service.toggle_bell(db, alice.id, bob.id, True)
        assert on.bell_enabled is True

    def test_toggle_bell_without_edge(self, db, alice, bob):
        with pytest.raises(NotFoundError):
            follow_service.toggle_bell(db, alice.id, bob.id, False)

    def test_bell_subscribers_skip_muted_followers(self, db, alice, bob, make_student, make_follow):
        carol = make_student("STU-003")
        make_follow(bob, alice, bell_enabled=True)
        make_follow(carol, alice, bell_enabled=False)

        assert follow_service.bell_subscribers(db, alice.id) == [bob.id]


def test_list_following_newest_first(db, alice, bob, make_student, make_follow):
    carol = make_student("STU-003")
    make_follow(alice, bob, minutes=1)
    make_follow(alice, carol, minutes=5)
    make_follow(bob, carol, minutes=9)

    following = follow_service.list_following(db, alice.id)

    assert [f.following_id for f in following] == [carol.id, bob.id]
    assert following[0].following.student_code == "STU-003"


class TestStoreConstraints:
    """The store, not the pre-insert check, is the last word on edge uniqueness."""

    def test_unique_violation_on_insert_is_a_duplicate(self, db, alice, bob, monkeypatch):
        """
        A concurrent request can pass the existence check before the first
        insert commits; uq_followers_pair must still turn it into a duplicate.
        """
        follow_service.follow(db, alice.id, bob.id)
        monkeypatch.setattr(follow_service, "_pair", lambda follower_id, following_id: false())

        with pytest.raises(DuplicateFollowError):
            follow_service.follow(db, alice.id, bob.id)

        assert db.query(Follower).count() == 1

    def test_self_edge_rejected_by_check_constraint(self, db, alice):
        db.add(Follower(follower_id=alice.id, following_id=alice.id))

        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

        assert db.query(Follower).count() == 0

    def test_other_integrity_errors_are_not_duplicates(self, db, alice, bob, monkeypatch):
        """A foreign-key failure on insert is reported as a store error, not a duplicate."""
        fk_error = IntegrityError(
            "INSERT INTO followers ...",
            {},
            Exception(
                'insert or update on table "followers" violates foreign key '
                'constraint "followers_following_id_fkey"'
            ),
        )

        def failing_commit():
            raise fk_error

        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(IntegrityError):
            follow_service.follow(db, alice.id, bob.id)


class TestIsDuplicateEdge:
    def test_postgres_unique_message(self):
        exc = IntegrityError(
            "INSERT",
            {},
            Exception('duplicate key value violates unique constraint "uq_followers_pair"'),
        )

        assert follow_service.is_duplicate_edge(exc) is True

    def test_sqlite_unique_message(self):
        exc = IntegrityError(
            "INSERT",
            {},
            Exception("UNIQUE constraint failed: followers.follower_id, followers.following_id"),
        )

        assert follow_service.is_duplicate_edge(exc) is True

    def test_check_constraint_message(self):
        exc = IntegrityError("INSERT", {}, Exception("CHECK constraint failed: ck_followers_not_self"))

        assert follow_service.is_duplicate_edge(exc) is False
