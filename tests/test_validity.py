# This project was developed with assistance from AI tools.
"""Unit tests for derived passport / PCC status and age calculation."""

from datetime import date, timedelta

import pytest

from recruitflow.enums import PassportStatus, PCCStatus
from recruitflow.schemas.candidate import PassportData, PCCData
from recruitflow.services.compliance.validity import (
    age_in_years,
    passport_status,
    passport_validity_days,
    pcc_age_days,
    pcc_status,
)

from .factories import TODAY, make_passport, make_pcc

# ---------------------------------------------------------------------------
# Passport
# ---------------------------------------------------------------------------


class TestPassportStatus:
    def test_valid_well_beyond_warning_window(self):
        assert passport_status(make_passport(expiry_in_days=181), TODAY) == PassportStatus.VALID

    def test_expiry_exactly_at_warning_days_is_expiring(self):
        assert passport_status(make_passport(expiry_in_days=180), TODAY) == PassportStatus.EXPIRING

    def test_expiring_today_is_not_yet_expired(self):
        assert passport_status(make_passport(expiry_in_days=0), TODAY) == PassportStatus.EXPIRING

    def test_one_day_past_expiry_is_expired(self):
        assert passport_status(make_passport(expiry_in_days=-1), TODAY) == PassportStatus.EXPIRED

    def test_custom_warning_window(self):
        passport = make_passport(expiry_in_days=200)
        assert passport_status(passport, TODAY, warning_days=90) == PassportStatus.VALID
        assert passport_status(passport, TODAY, warning_days=365) == PassportStatus.EXPIRING

    def test_missing_expiry_is_invalid(self):
        assert passport_status(PassportData(), TODAY) == PassportStatus.INVALID

    def test_issued_in_future_is_invalid(self):
        passport = make_passport(issued_date=TODAY + timedelta(days=3))
        assert passport_status(passport, TODAY) == PassportStatus.INVALID

    def test_expiry_before_issue_is_invalid(self):
        passport = PassportData(issued_date=date(2025, 1, 1), expiry_date=date(2024, 1, 1))
        assert passport_status(passport, TODAY) == PassportStatus.INVALID

    def test_validity_days(self):
        assert passport_validity_days(make_passport(expiry_in_days=42), TODAY) == 42
        assert passport_validity_days(PassportData(), TODAY) is None


# ---------------------------------------------------------------------------
# Police clearance
# ---------------------------------------------------------------------------


class TestPccStatus:
    @pytest.mark.parametrize(
        "age_days,expected",
        [
            (0, PCCStatus.VALID),
            (149, PCCStatus.VALID),
            (150, PCCStatus.EXPIRING),
            (180, PCCStatus.EXPIRING),
            (181, PCCStatus.EXPIRED),
            (200, PCCStatus.EXPIRED),
        ],
    )
    def test_age_thresholds(self, age_days, expected):
        assert pcc_status(make_pcc(age_days), TODAY) == expected

    def test_missing_issue_date_is_invalid(self):
        assert pcc_status(PCCData(), TODAY) == PCCStatus.INVALID

    def test_future_issue_date_is_invalid(self):
        assert pcc_status(make_pcc(age_days=-2), TODAY) == PCCStatus.INVALID

    def test_age_days(self):
        assert pcc_age_days(make_pcc(45), TODAY) == 45
        assert pcc_age_days(PCCData(), TODAY) is None


# ---------------------------------------------------------------------------
# Age
# ---------------------------------------------------------------------------


class TestAgeInYears:
    def test_birthday_not_yet_reached(self):
        assert age_in_years(date(2000, 6, 1), date(2026, 3, 1)) == 25

    def test_on_birthday(self):
        assert age_in_years(date(2000, 3, 1), date(2026, 3, 1)) == 26

    def test_day_before_birthday(self):
        assert age_in_years(date(2000, 3, 2), date(2026, 3, 1)) == 25
