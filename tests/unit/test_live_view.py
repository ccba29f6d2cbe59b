"""
Unit tests for LiveView activation / re-entry and the notification views.
"""
import asyncio
from datetime import datetime, timezone

import pytest

from camwatch.application.services.change_feed import FeedScope
from camwatch.application.services.live_view import LiveView
from camwatch.application.use_cases.notification import (
    camera_notifications_view,
    user_notifications_view,
)
from camwatch.core.exceptions import TransportError
from camwatch.domain.models import Notification


def _ts(minute):
    return datetime(2025, 5, 1, 12, minute, tzinfo=timezone.utc)


def _seed(store):
    store.tables["cameras"] = [
        {"id": "cam-1", "user_id": "u1", "camera_name": "Front Door", "ip_address": "10.0.0.5"},
        {"id": "cam-9", "user_id": "u2", "camera_name": "Not Mine", "ip_address": "10.0.0.9"},
    ]
    store.tables["notifications"] = [
        {"id": "n1", "user_id": "u1", "camera_id": "cam-1", "notification_text": "old", "timestamp": _ts(1)},
        {"id": "n2", "user_id": "u1", "camera_id": "cam-1", "notification_text": "new", "timestamp": _ts(5)},
        {"id": "n3", "user_id": "u2", "camera_id": "cam-9", "notification_text": "theirs", "timestamp": _ts(3)},
    ]


def _ids(view):
    return [item.id for item in view.items]


class TestUserNotificationsView:
    @pytest.mark.asyncio
    async def test_activate_loads_snapshot_newest_first_with_camera_names(self, context, store):
        _seed(store)
        view = user_notifications_view(context, "u1")

        await view.activate()

        assert _ids(view) == ["n2", "n1"]
        assert view.items[0].camera_name == "Front Door"
        assert view.active
        # fetch happens before the feed is attached
        assert store.calls.index("query") < store.calls.index("subscribe")

    @pytest.mark.asyncio
    async def test_feed_insert_is_prepended_with_camera_name(self, context, store):
        _seed(store)
        view = user_notifications_view(context, "u1")
        await view.activate()

        await store.external_insert(
            "notifications",
            {"id": "n4", "user_id": "u1", "camera_id": "cam-1", "notification_text": "fight", "timestamp": _ts(9)},
        )
        await store.external_insert(
            "notifications",
            {"id": "n5", "user_id": "u2", "camera_id": "cam-9", "notification_text": "other user", "timestamp": _ts(9)},
        )

        assert _ids(view) == ["n4", "n2", "n1"]
        assert view.items[0].camera_name == "Front Door"

    @pytest.mark.asyncio
    async def test_reentry_refetches_and_resubscribes(self, context, store):
        _seed(store)
        view = user_notifications_view(context, "u1")
        await view.activate()
        store.drop_transport()

        # written while the feed was down
        store.tables["notifications"].append(
            {"id": "n6", "user_id": "u1", "camera_id": None, "notification_text": "missed", "timestamp": _ts(30)}
        )
        assert not view.active

        assert await view.ensure_active() is True
        assert _ids(view) == ["n6", "n2", "n1"]
        assert view.active
        assert len(store.open_subscriptions) == 1

    @pytest.mark.asyncio
    async def test_ensure_active_is_noop_when_attached(self, context, store):
        view = user_notifications_view(context, "u1")
        await view.activate()
        assert await view.ensure_active() is False
        assert store.calls.count("subscribe") == 1

    @pytest.mark.asyncio
    async def test_activate_twice_releases_previous_subscription(self, context, store):
        view = user_notifications_view(context, "u1")
        await view.activate()
        await view.activate()
        assert store.calls.count("subscribe") == 2
        assert len(store.open_subscriptions) == 1


class TestCameraNamesForNewCameras:
    @pytest.mark.asyncio
    async def test_camera_registered_after_activation_gets_its_name(self, context, store):
        _seed(store)
        view = user_notifications_view(context, "u1")
        await view.activate()
        changes = []
        view.store.add_listener(changes.append)

        store.tables["cameras"].append(
            {"id": "cam-3", "user_id": "u1", "camera_name": "Porch", "ip_address": "10.0.0.7"}
        )
        await store.external_insert(
            "notifications",
            {"id": "p1", "user_id": "u1", "camera_id": "cam-3", "notification_text": "person", "timestamp": _ts(9)},
        )
        assert view.items[0].camera_name is None

        for _ in range(10):
            if view.items[0].camera_name:
                break
            await asyncio.sleep(0)

        assert _ids(view) == ["p1", "n2", "n1"]
        assert view.items[0].camera_name == "Porch"
        assert [change.kind.value for change in changes] == ["insert", "update"]
        await view.close()

    @pytest.mark.asyncio
    async def test_unknown_camera_is_looked_up_once(self, context, store):
        _seed(store)
        view = user_notifications_view(context, "u1")
        await view.activate()
        queries_before = store.calls.count("query")

        for notification_id in ("x1", "x2"):
            await store.external_insert(
                "notifications",
                {"id": notification_id, "user_id": "u1", "camera_id": "gone", "notification_text": "?", "timestamp": _ts(9)},
            )
            for _ in range(5):
                await asyncio.sleep(0)

        assert store.calls.count("query") == queries_before + 1
        assert all(item.camera_name is None for item in view.items if item.camera_id == "gone")
        await view.close()


class TestCameraNotificationsView:
    @pytest.mark.asyncio
    async def test_only_that_camera(self, context, store):
        _seed(store)
        store.tables["cameras"].append(
            {"id": "cam-2", "user_id": "u1", "camera_name": "Garage", "ip_address": "10.0.0.6"}
        )
        view = camera_notifications_view(context, "u1", "cam-2")
        await view.activate()
        assert _ids(view) == []

        await store.external_insert(
            "notifications",
            {"id": "g1", "user_id": "u1", "camera_id": "cam-2", "notification_text": "garage open", "timestamp": _ts(7)},
        )
        await store.external_insert(
            "notifications",
            {"id": "f1", "user_id": "u1", "camera_id": "cam-1", "notification_text": "front", "timestamp": _ts(7)},
        )

        assert _ids(view) == ["g1"]
        assert view.items[0].camera_name == "Garage"


class TestFailures:
    @pytest.mark.asyncio
    async def test_fetch_failure_does_not_subscribe(self, context, store):
        store.fail_on("query")
        view = user_notifications_view(context, "u1")

        with pytest.raises(TransportError):
            await view.activate()

        assert "subscribe" not in store.calls
        assert view.error == "query failed"
        assert view.loading is False

    @pytest.mark.asyncio
    async def test_subscribe_failure_keeps_snapshot_and_reports_error(self, context, store):
        _seed(store)
        store.fail_on("subscribe", RuntimeError("no replica set"))
        view = user_notifications_view(context, "u1")

        with pytest.raises(TransportError):
            await view.activate()

        assert _ids(view) == ["n2", "n1"]
        assert view.error == "Live updates are unavailable right now."
        assert not view.active


class TestClose:
    @pytest.mark.asyncio
    async def test_close_releases_subscription_and_ignores_late_events(self, context, store):
        view = user_notifications_view(context, "u1")
        await view.activate()
        subscription = store.open_subscriptions[0]

        await view.close()
        await view.close()

        assert subscription.closed
        assert view.store.closed
        with pytest.raises(RuntimeError):
            await view.activate()

    @pytest.mark.asyncio
    async def test_async_context_manager(self, context, store):
        async def _fetch():
            return [Notification(id="n1", user_id="u1", notification_text="hi", timestamp=None)]

        async with LiveView(
            context,
            FeedScope.for_owner("notifications", "u1"),
            fetch=_fetch,
            decode=Notification.from_record,
        ) as view:
            assert view.active
            assert _ids(view) == ["n1"]

        assert not view.active
        assert store.open_subscriptions == []
