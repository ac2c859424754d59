"""Human-readable employee login ids.

Format: ``[company initials][name initials][joining year][serial]``,
e.g. ``OIJODO20220001``.
"""

from __future__ import annotations


def name_initials(full_name: str) -> str:
    """First two letters of the first and last name, padded with X to 4 chars."""

    parts = (full_name or "").split()
    if len(parts) >= 2:
        first = parts[0][:2].upper().ljust(2, "X")
        last = parts[-1][:2].upper().ljust(2, "X")
        return (first + last)[:4]
    if len(parts) == 1:
        return parts[0][:4].upper().ljust(4, "X")
    return "XXXX"


def build_login_id(*, company_initials: str, full_name: str, joining_year: int, serial: int) -> str:
    return f"{company_initials.upper()[:2]}{name_initials(full_name)}{joining_year}{serial:04d}"
