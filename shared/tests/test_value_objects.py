from datetime import time

import pytest

from shared.domain.value_objects import TimePeriod


def test_parse_and_render():
    period = TimePeriod.parse("08:00-10:00")
    assert period.start == time(8, 0)
    assert period.end == time(10, 0)
    assert str(period) == "08:00-10:00"


@pytest.mark.parametrize("value", ["08:00", "8am-10am", "10:00-08:00", "09:00-09:00"])
def test_parse_rejects_bad_periods(value):
    with pytest.raises(ValueError):
        TimePeriod.parse(value)


def test_end_is_exclusive():
    period = TimePeriod(start=time(8), end=time(10))
    assert not period.has_elapsed(time(9, 59))
    assert period.has_elapsed(time(10))
