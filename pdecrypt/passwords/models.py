"""Value types used by the candidate generator."""

from dataclasses import dataclass
from datetime import date

from pdecrypt.utils.exceptions import InvalidDateError


@dataclass(frozen=True)
class BirthDate:
    """A validated Gregorian (CE) date of birth."""

    day: int
    month: int
    year: int

    def __post_init__(self) -> None:
        if not 1000 <= self.year <= 9999:
            raise InvalidDateError(f"Year must have four digits: {self.year}")
        try:
            date(self.year, self.month, self.day)
        except ValueError as e:
            raise InvalidDateError(
                f"Invalid date {self.day:02d}/{self.month:02d}/{self.year}: {str(e)}"
            ) from e

    def __str__(self) -> str:
        return f"{self.day:02d}/{self.month:02d}/{self.year:04d}"
