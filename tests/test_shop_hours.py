"""
Tests for opening hours checks.
"""

from datetime import datetime

import pytz

from backend.app.models.shop import Shop, ShopHours
from backend.app.services.shop_hours import is_accepting_orders, is_open_at


def hours(weekly, timezone="Europe/Berlin"):
    return ShopHours.model_validate({"timezone": timezone, "weekly": weekly})


# 2024-01-15 - понедельник
def utc(hour, minute=0, day=15):
    return datetime(2024, 1, day, hour, minute, tzinfo=pytz.utc)


class TestIsOpenAt:

    def test_no_hours_means_open(self):
        assert is_open_at(None, utc(3)) is True

    def test_window_in_shop_timezone(self):
        h = hours({"monday": [{"opensAt": "09:00", "closesAt": "17:00"}]})
        # Берлин зимой UTC+1
        assert is_open_at(h, utc(7, 59)) is False
        assert is_open_at(h, utc(8, 0)) is True
        assert is_open_at(h, utc(16, 0)) is False

    def test_overnight_window(self):
        h = hours({"monday": [{"opensAt": "22:00", "closesAt": "02:00"}]}, timezone="UTC")
        assert is_open_at(h, utc(23)) is True
        assert is_open_at(h, utc(1)) is True
        assert is_open_at(h, utc(12)) is False

    def test_window_with_seconds(self):
        h = hours({"monday": [{"opensAt": "09:00:00", "closesAt": "17:00:00"}]}, timezone="UTC")
        assert is_open_at(h, utc(8, 59)) is False
        assert is_open_at(h, utc(9, 0)) is True
        assert is_open_at(h, utc(17, 0)) is False

    def test_closed_day(self):
        h = hours({"monday": [{"opensAt": "09:00", "closesAt": "17:00", "isClosed": True}]}, timezone="UTC")
        assert is_open_at(h, utc(12)) is False

    def test_day_without_windows(self):
        h = hours({"tuesday": [{"opensAt": "09:00", "closesAt": "17:00"}]}, timezone="UTC")
        assert is_open_at(h, utc(12)) is False

    def test_unknown_timezone_uses_utc(self):
        h = hours({"monday": [{"opensAt": "09:00", "closesAt": "17:00"}]}, timezone="Mars/Olympus")
        assert is_open_at(h, utc(12)) is True

    def test_naive_datetime_is_utc(self):
        h = hours({"monday": [{"opensAt": "09:00", "closesAt": "17:00"}]}, timezone="UTC")
        assert is_open_at(h, datetime(2024, 1, 15, 12, 0)) is True


class TestIsAcceptingOrders:

    def test_closed_or_paused_shop(self):
        shop = Shop(id="s", name="S", slug="s", status="open", accepting_orders=False)
        assert is_accepting_orders(shop, None, utc(12)) is False
        shop = Shop(id="s", name="S", slug="s", status="draft", accepting_orders=True)
        assert is_accepting_orders(shop, None, utc(12)) is False

    def test_open_shop(self):
        shop = Shop(id="s", name="S", slug="s", status="open", accepting_orders=True)
        assert is_accepting_orders(shop, None, utc(12)) is True
