# This project was developed with assistance from AI tools.
"""Derived passport and police-clearance status.

Pure functions of the recorded dates and the evaluation date. Status is
never stored on the candidate; every decision recomputes it so a record
saved months ago cannot carry a stale VALID.
"""

from datetime import date

from ...enums import PassportStatus, PCCStatus
from ...schemas.candidate import PassportData, PCCData


def passport_validity_days(passport: PassportData, today: date) -> int | None:
    """Days until expiry (negative once expired), or None without an expiry date."""
    if passport.expiry_date is None:
        return None
    return (passport.expiry_date - today).days


def passport_status(
    passport: PassportData,
    today: date,
    warning_days: int = 180,
) -> PassportStatus:
    """Classify a passport.

    INVALID when the dates are unusable (no expiry, issued in the future, or
    expiring before issue). A passport expiring today is still EXPIRING;
    the day after it is EXPIRED.
    """
    if passport.expiry_date is None:
        return PassportStatus.INVALID
    if passport.issued_date is not None and (
        passport.issued_date > today or passport.expiry_date <= passport.issued_date
    ):
        return PassportStatus.INVALID

    remaining = passport_validity_days(passport, today)
    if remaining < 0:
        return PassportStatus.EXPIRED
    if remaining <= warning_days:
        return PassportStatus.EXPIRING
    return PassportStatus.VALID


def pcc_age_days(pcc: PCCData, today: date) -> int | None:
    if pcc.issued_date is None:
        return None
    return (today - pcc.issued_date).days


def pcc_status(
    pcc: PCCData,
    today: date,
    validity_days: int = 180,
    warning_days: int = 150,
) -> PCCStatus:
    """Classify a police clearance certificate by its age.

    EXPIRED strictly after ``validity_days``; EXPIRING from ``warning_days``
    onwards. A missing or future issue date is INVALID.
    """
    age = pcc_age_days(pcc, today)
    if age is None or age < 0:
        return PCCStatus.INVALID
    if age > validity_days:
        return PCCStatus.EXPIRED
    if age >= warning_days:
        return PCCStatus.EXPIRING
    return PCCStatus.VALID


def age_in_years(dob: date, today: date) -> int:
    """Whole years elapsed since ``dob``."""
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years
