from __future__ import annotations

from datetime import datetime, time, timedelta

from kungfu import Error, Ok, Result

from pizzabasket.data.models import Basket, DayOffset

from .errors import BasketError, EmptyBasket, InvalidTime


def validate_pickup_time(
    basket: Basket,
    day: DayOffset,
    hour: int,
    minute: int,
    now: datetime,
) -> Result[datetime, BasketError]:
    """Resolve (today|tomorrow, hour, minute) against `now`.

    The slot may equal `now` but never precede it.
    """
    if not basket.pizzas:
        return Error(EmptyBasket())

    try:
        slot = time(hour, minute)
    except ValueError:
        return Error(InvalidTime())

    date = now.date()
    if day == DayOffset.TOMORROW:
        date = date + timedelta(days=1)

    pickup_time = datetime.combine(date, slot, tzinfo=now.tzinfo)
    if pickup_time < now:
        return Error(InvalidTime())
    return Ok(pickup_time)
