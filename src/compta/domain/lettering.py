"""Lettering of third-party account lines."""

import logging
from typing import Optional, Sequence

from compta.database.base import Database
from compta.domain.entities import EntryStatus, PostedLine
from compta.domain.entry import check_balance
from compta.domain.errors import (
    ConflictError,
    ImbalanceError,
    NotFoundError,
    UnknownAccountError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def lettering_code(index: int) -> str:
    """Return the lettering code at a position: 0 -> "AA", 1 -> "AB", ...

    Two-letter codes run out after "ZZ" and continue with "AAA".
    """
    length = 2
    while index >= 26**length:
        index -= 26**length
        length += 1
    letters = []
    for _ in range(length):
        index, remainder = divmod(index, 26)
        letters.append(chr(ord("A") + remainder))
    return "".join(reversed(letters))


class LetteringService:
    """Service matching debit and credit lines of a letterable account."""

    def __init__(self, db: Database):
        self.db = db

    def next_code(self, account_number: str) -> str:
        """Return the first lettering code not yet used on an account."""
        used = set(self.db.list_lettering_codes(account_number))
        index = 0
        while lettering_code(index) in used:
            index += 1
        return lettering_code(index)

    def letter_lines(self, line_ids: Sequence[int], code: Optional[str] = None) -> str:
        """Letter a group of lines that settle each other.

        Args:
            line_ids: Entry line IDs
            code: Lettering code (defaults to the next free code)

        Returns:
            The lettering code applied

        Raises:
            NotFoundError: If a line doesn't exist
            ValidationError: If lines are not validated, span several accounts
                or the account is not letterable
            ConflictError: If a line is already lettered or the code is taken
            ImbalanceError: If the lines don't balance within 0.01
        """
        line_ids = list(dict.fromkeys(line_ids))
        if len(line_ids) < 2:
            raise ValidationError("Lettering needs at least 2 lines")

        lines = self.db.get_posted_lines(line_ids)
        missing = set(line_ids) - {line.line_id for line in lines}
        if missing:
            raise NotFoundError(f"Entry lines not found: {', '.join(map(str, sorted(missing)))}")

        for line in lines:
            if line.status != EntryStatus.VALIDATED:
                raise ValidationError(f"Line {line.line_id} belongs to a draft entry")
            if line.lettering_code is not None:
                raise ConflictError(
                    f"Line {line.line_id} is already lettered '{line.lettering_code}'"
                )

        account_numbers = {line.account_number for line in lines}
        if len(account_numbers) > 1:
            raise ValidationError(
                f"Lines span several accounts: {', '.join(sorted(account_numbers))}"
            )
        account_number = account_numbers.pop()
        account = self.db.get_account_by_number(account_number)
        if account is None:
            raise UnknownAccountError(account_number)
        if not account.is_letterable:
            raise ValidationError(f"Account {account_number} is not letterable")

        check = check_balance(lines)
        if not check.is_balanced:
            raise ImbalanceError(check.total_debit, check.total_credit)

        if code is None:
            code = self.next_code(account_number)
        else:
            code = code.strip().upper()
            if not code.isalpha():
                raise ValidationError(f"Invalid lettering code '{code}': letters only")
            if code in self.db.list_lettering_codes(account_number):
                raise ConflictError(f"Lettering code '{code}' is already used on {account_number}")

        self.db.set_lettering_code(line_ids, code)
        logger.info("Lettered %d lines on %s with '%s'", len(line_ids), account_number, code)
        return code

    def unletter(self, code: str, account_number: Optional[str] = None) -> int:
        """Remove a lettering code.

        Args:
            code: Lettering code
            account_number: Account the code belongs to; required when the
                same code is used on several accounts

        Returns:
            Number of lines cleared

        Raises:
            NotFoundError: If no line carries the code
            ValidationError: If the code is ambiguous
        """
        code = code.strip().upper()
        lines = self.db.find_lines_by_lettering_code(code)
        if account_number is not None:
            lines = [line for line in lines if line.account_number == account_number]
        if not lines:
            raise NotFoundError(f"Lettering code '{code}' not found")

        account_numbers = {line.account_number for line in lines}
        if len(account_numbers) > 1:
            raise ValidationError(
                f"Lettering code '{code}' is used on several accounts "
                f"({', '.join(sorted(account_numbers))}); specify the account"
            )

        self.db.set_lettering_code([line.line_id for line in lines], None)
        logger.info("Removed lettering '%s' from %d lines", code, len(lines))
        return len(lines)

    def list_unlettered(self, account_number: str) -> list[PostedLine]:
        """List validated lines of an account that carry no lettering code.

        Raises:
            UnknownAccountError: If the account doesn't exist
        """
        if self.db.get_account_by_number(account_number) is None:
            raise UnknownAccountError(account_number)
        return [
            line
            for line in self.db.find_validated_lines(account_number=account_number)
            if line.lettering_code is None
        ]
