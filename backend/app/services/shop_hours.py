"""
Часы работы магазина: открыт ли магазин в заданный момент.
"""

import logging
from datetime import datetime
from typing import Optional

import pytz

from ..models.shop import Shop, ShopHours

logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _minutes(value: str) -> int:
    # секунды, если есть, не учитываем
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def shop_timezone(hours: ShopHours):
    try:
        return pytz.timezone(hours.timezone)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"[HOURS] Unknown timezone '{hours.timezone}', using UTC")
        return pytz.utc


def is_open_at(hours: Optional[ShopHours], moment: datetime) -> bool:
    """
    Проверяет, попадает ли момент в интервал работы.

    Если часы не заданы, магазин считается открытым.
    Интервал, где закрытие раньше открытия, переходит через полночь.
    """
    if hours is None:
        return True

    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    local = moment.astimezone(shop_timezone(hours))
    now = local.hour * 60 + local.minute

    windows = getattr(hours.weekly, WEEKDAYS[local.weekday()]) or []
    for window in windows:
        if window.is_closed:
            continue
        opens, closes = _minutes(window.opens_at), _minutes(window.closes_at)
        if opens < closes:
            if opens <= now < closes:
                return True
        elif now >= opens or now < closes:
            return True
    return False


def is_accepting_orders(shop: Shop, hours: Optional[ShopHours], moment: Optional[datetime] = None) -> bool:
    """Магазин открыт, принимает заказы и сейчас рабочее время."""
    if shop.status != "open" or not shop.accepting_orders:
        return False
    return is_open_at(hours, moment or datetime.now(pytz.utc))
