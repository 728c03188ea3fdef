"""
Tests for derived values: age and Average Daily Gain.
"""

from datetime import date

from eternak.calculations import calculate_adg, calculate_age, format_date, latest_weight
from eternak.models.livestock import GrowthRecord


def _record(record_id: str, day: str, weight: float) -> GrowthRecord:
    return GrowthRecord(id=record_id, date=date.fromisoformat(day), weight=weight)


class TestCalculateAge:
    """Age is shown as 'X Tahun Y Bulan'."""

    def test_missing_birth_date(self):
        assert calculate_age(None) == "N/A"

    def test_whole_years_and_months(self):
        assert calculate_age(date(2021, 1, 10), today=date(2024, 4, 10)) == "3 Tahun 3 Bulan"

    def test_month_not_counted_before_its_day(self):
        assert calculate_age(date(2022, 3, 15), today=date(2024, 3, 14)) == "1 Tahun 11 Bulan"
        assert calculate_age(date(2024, 1, 20), today=date(2024, 3, 10)) == "0 Tahun 1 Bulan"

    def test_born_today(self):
        assert calculate_age(date(2024, 5, 1), today=date(2024, 5, 1)) == "0 Tahun 0 Bulan"

    def test_future_birth_date_is_invalid(self):
        assert calculate_age(date(2025, 1, 1), today=date(2024, 6, 1)) == "Data Tidak Valid"
        assert calculate_age(date(2024, 6, 2), today=date(2024, 6, 1)) == "Data Tidak Valid"


class TestCalculateAdg:
    """ADG between consecutive weighings, in kg/day."""

    def test_no_records(self):
        summary = calculate_adg([])
        assert summary.average == "N/A"
        assert summary.records == []

    def test_single_record_has_no_adg(self):
        summary = calculate_adg([_record("g1", "2024-01-01", 30)])
        assert summary.average == "N/A"
        assert [r.adg for r in summary.records] == ["N/A"]

    def test_consecutive_intervals_and_average(self):
        summary = calculate_adg([
            _record("g1", "2024-01-01", 30),
            _record("g2", "2024-01-11", 40),
            _record("g3", "2024-01-21", 45),
        ])
        assert [r.adg for r in summary.records] == ["N/A", "1.00", "0.50"]
        assert summary.average == "0.75"

    def test_records_are_sorted_by_date(self):
        summary = calculate_adg([
            _record("late", "2024-03-01", 90),
            _record("early", "2024-01-01", 30),
        ])
        assert [r.id for r in summary.records] == ["early", "late"]
        assert summary.records[1].adg == "1.00"

    def test_same_day_weighing_is_skipped(self):
        summary = calculate_adg([
            _record("g1", "2024-01-01", 30),
            _record("g2", "2024-01-01", 31),
            _record("g3", "2024-01-05", 35),
        ])
        assert summary.records[1].adg == "N/A"
        assert summary.records[2].adg == "1.00"
        assert summary.average == "1.00"

    def test_weight_loss_gives_negative_adg(self):
        summary = calculate_adg([
            _record("g1", "2024-01-01", 50),
            _record("g2", "2024-01-05", 48),
        ])
        assert summary.records[1].adg == "-0.50"

    def test_ties_round_away_from_zero(self):
        # 1 kg over 8 days is exactly 0.125
        summary = calculate_adg([
            _record("g1", "2024-01-01", 100),
            _record("g2", "2024-01-09", 101),
        ])
        assert summary.records[1].adg == "0.13"
        assert summary.average == "0.13"

    def test_negative_tie_rounds_away_from_zero(self):
        summary = calculate_adg([
            _record("g1", "2024-01-01", 101),
            _record("g2", "2024-01-09", 100),
        ])
        assert summary.records[1].adg == "-0.13"

    def test_average_of_rounded_values_rounds_half_up(self):
        summary = calculate_adg([
            _record("g1", "2024-01-01", 100),
            _record("g2", "2024-01-09", 101),
            _record("g3", "2024-01-11", 101.24),
        ])
        # 0.13 and 0.12 average to 0.125
        assert [r.adg for r in summary.records] == ["N/A", "0.13", "0.12"]
        assert summary.average == "0.13"

    def test_to_dict(self):
        summary = calculate_adg([
            _record("g1", "2024-01-01", 30),
            _record("g2", "2024-01-03", 31),
        ])
        assert summary.to_dict() == {
            "average": "0.50",
            "records": [
                {"id": "g1", "date": "2024-01-01", "weight": 30, "adg": "N/A"},
                {"id": "g2", "date": "2024-01-03", "weight": 31, "adg": "0.50"},
            ],
        }


class TestLatestWeight:

    def test_latest_by_date_not_by_position(self):
        records = [_record("b", "2024-02-01", 60), _record("a", "2024-01-01", 40)]
        assert latest_weight(records) == 60

    def test_no_records(self):
        assert latest_weight(None) is None


def test_format_date():
    assert format_date(date(2024, 1, 2)) == "2024-01-02"
    assert format_date(None) == ""
