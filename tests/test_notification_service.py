"""Notification feed — ordering, unread count, read/dismiss/clear actions."""

from unittest.mock import patch

import pytest

from fleet_maintenance.core.exceptions import UnauthorizedError
from fleet_maintenance.models.constants import NOTIFICATIONS
from fleet_maintenance.services.fleet import FleetServices


class TestQueries:
    def test_seeded_unread_count(self, fleet):
        assert fleet.unread_count() == 2

    def test_newest_first(self, admin):
        job = admin.create_job({
            "component_id": "c1", "ship_id": "s1", "type": "Repair", "priority": "High",
            "status": "Open", "assigned_engineer_id": "3", "scheduled_date": "2030-01-01",
        })
        assert admin.list_notifications()[0]["related_id"] == job["id"]

    def test_unread_list(self, fleet):
        assert {n["id"] for n in fleet.unread_notifications()} == {"n1", "n2"}


class TestMarkRead:
    def test_mark_read(self, engineer):
        notification = engineer.mark_read("n1")
        assert notification["read"] is True
        assert engineer.unread_count() == 1

    def test_unknown_id_is_noop(self, engineer):
        assert engineer.mark_read("nope") is None
        assert engineer.unread_count() == 2

    def test_mark_all_read_is_idempotent(self, inspector, store):
        assert inspector.mark_all_read() == 2
        assert inspector.unread_count() == 0
        assert inspector.mark_all_read() == 0
        assert inspector.unread_count() == 0
        assert all(n["read"] for n in store.get_all(NOTIFICATIONS))

    def test_mark_all_read_keeps_feed_when_store_read_fails(self, inspector, store):
        with patch.object(store, "get_all", return_value=[]):
            assert inspector.mark_all_read() == 2
        notifications = store.get_all(NOTIFICATIONS)
        assert len(notifications) == 3
        assert all(n["read"] for n in notifications)

    def test_listed_notifications_are_copies(self, engineer):
        engineer.list_notifications()[0]["read"] = "tampered"
        assert all(n["read"] in (True, False) for n in engineer.list_notifications())

    def test_anonymous_rejected(self, fleet):
        with pytest.raises(UnauthorizedError):
            fleet.mark_all_read()


class TestDismiss:
    def test_dismiss(self, engineer, store):
        assert engineer.dismiss("n2") is True
        assert {n["id"] for n in store.get_all(NOTIFICATIONS)} == {"n1", "n3"}
        assert engineer.unread_count() == 1

    def test_unknown_id_is_noop(self, engineer):
        assert engineer.dismiss("nope") is False
        assert len(engineer.list_notifications()) == 3

    def test_clear_all(self, inspector, store):
        inspector.clear_all()
        assert inspector.list_notifications() == []
        assert inspector.unread_count() == 0
        assert FleetServices(store).list_notifications() == []

    def test_anonymous_cannot_clear(self, fleet):
        with pytest.raises(UnauthorizedError):
            fleet.clear_all()
        assert len(fleet.list_notifications()) == 3


class TestCreate:
    def test_system_create_needs_no_session(self, fleet):
        notification = fleet.notifications.create("component_alert", "Hull breach", related_id="c1")
        assert notification["id"].startswith("n")
        assert notification["read"] is False
        assert notification["created_at"]
        assert fleet.unread_count() == 3
