import pytest
from datetime import date

from apps.settlement.exceptions import InvalidPeriodError
from apps.settlement.periods import Period


class TestPeriod:

    def test_parse(self):
        period = Period.parse('2025-01')

        assert period == Period(2025, 1)
        assert str(period) == '2025-01'

    @pytest.mark.parametrize('value', ['', '2025-13', '2025-1', '25-01', 'January', None])
    def test_parse_invalid(self, value):
        with pytest.raises(InvalidPeriodError):
            Period.parse(value)

    def test_bounds_in_leap_february(self):
        period = Period(2024, 2)

        assert period.start == date(2024, 2, 1)
        assert period.end == date(2024, 2, 29)

    def test_contains(self):
        period = Period(2025, 1)

        assert date(2025, 1, 31) in period
        assert date(2025, 2, 1) not in period

    def test_containing_and_ordering(self):
        assert Period.containing(date(2025, 12, 31)) == Period(2025, 12)
        assert Period(2024, 12) < Period(2025, 1)
