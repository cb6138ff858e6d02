"""Fiscal year domain service."""

import logging
from datetime import date
from typing import Optional

from compta.database.base import Database
from compta.domain.entities import EntryStatus, FiscalYear, FiscalYearStatus
from compta.domain.errors import (
    ClosedFiscalYearError,
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    fiscal_year_not_found,
)

logger = logging.getLogger(__name__)


class FiscalYearService:
    """Service for opening, finding and closing fiscal years."""

    def __init__(self, db: Database):
        self.db = db

    def create_fiscal_year(
        self,
        year: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        """Open a fiscal year.

        Defaults to the calendar year when dates are omitted.

        Raises:
            ValidationError: If start_date is not before end_date
            ConflictError: If the year exists or overlaps another fiscal year
        """
        start_date = start_date or date(year, 1, 1)
        end_date = end_date or date(year, 12, 31)
        if start_date >= end_date:
            raise ValidationError("Fiscal year start date must be before its end date")

        if self.db.get_fiscal_year(year) is not None:
            raise ConflictError(f"Fiscal year {year} already exists")

        for existing in self.db.list_fiscal_years():
            if start_date <= existing.end_date and existing.start_date <= end_date:
                raise ConflictError(
                    f"Fiscal year {year} overlaps existing fiscal year {existing.year}"
                )

        return self.db.create_fiscal_year(year=year, start_date=start_date, end_date=end_date)

    def get_fiscal_year(self, year: int) -> Optional[FiscalYear]:
        return self.db.get_fiscal_year(year)

    def list_fiscal_years(self) -> list[FiscalYear]:
        return self.db.list_fiscal_years()

    def find_for_date(self, day: date) -> Optional[FiscalYear]:
        """Return the fiscal year containing a date, if any."""
        for fiscal_year in self.db.list_fiscal_years():
            if fiscal_year.contains(day):
                return fiscal_year
        return None

    def check_open_for_posting(self, day: date) -> None:
        """Ensure entries may be dated on a day.

        Postings are unrestricted until a first fiscal year is defined.
        After that, the date must fall in an open fiscal year.

        Raises:
            ValidationError: If no fiscal year covers the date
            ClosedFiscalYearError: If the covering fiscal year is closed
        """
        fiscal_years = self.db.list_fiscal_years()
        if not fiscal_years:
            return
        for fiscal_year in fiscal_years:
            if fiscal_year.contains(day):
                if fiscal_year.status == FiscalYearStatus.CLOSED:
                    raise ClosedFiscalYearError(
                        f"Fiscal year {fiscal_year.year} is closed; no entry can be dated {day}"
                    )
                return
        raise ValidationError(f"No fiscal year found for date {day}")

    def close_fiscal_year(self, year: int) -> None:
        """Close a fiscal year.

        Raises:
            NotFoundError: If the year doesn't exist
            ConflictError: If it is already closed
            DependencyError: If Draft entries remain in the year
        """
        fiscal_year = self.db.get_fiscal_year(year)
        if fiscal_year is None:
            raise NotFoundError(fiscal_year_not_found(year))
        if fiscal_year.status == FiscalYearStatus.CLOSED:
            raise ConflictError(f"Fiscal year {year} is already closed")

        drafts = self.db.list_entries(
            start_date=fiscal_year.start_date,
            end_date=fiscal_year.end_date,
            status=EntryStatus.DRAFT,
        )
        if drafts:
            raise DependencyError(
                f"Cannot close fiscal year {year}: {len(drafts)} draft "
                f"entr{'ies' if len(drafts) != 1 else 'y'} must be validated or deleted first"
            )

        self.db.close_fiscal_year(year)
        logger.info("Fiscal year %s closed", year)
