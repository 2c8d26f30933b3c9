"""Candidate password generation from a date of birth and a citizen ID.

Statements from Thai banks and insurers are usually protected with some
rendering of the holder's date of birth, either in the Common Era or the
Buddhist Era calendar, or with part of the citizen ID. The rules below
enumerate the renderings seen in practice, in a fixed order, so the same
inputs always produce the same list.
"""

from typing import Callable, Iterable, List

from pdecrypt.config.settings import BUDDHIST_ERA_OFFSET, CITIZEN_ID_LENGTH
from pdecrypt.passwords.models import BirthDate
from pdecrypt.utils.exceptions import InvalidDateError
from pdecrypt.utils.logger import get_logger
from pdecrypt.utils.validators import parse_citizen_id

logger = get_logger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

Rule = Callable[[BirthDate, str], Iterable[str]]


def era_years(birth_date: BirthDate) -> List[int]:
    """Return the birth year in Buddhist Era then Common Era."""
    return [birth_date.year + BUDDHIST_ERA_OFFSET, birth_date.year]


def _day_month(birth_date: BirthDate) -> str:
    return f"{birth_date.day:02d}{birth_date.month:02d}"


def _day_month_name(birth_date: BirthDate) -> str:
    return f"{birth_date.day:02d}{MONTH_ABBREVIATIONS[birth_date.month - 1]}"


def citizen_id_rule(birth_date: BirthDate, citizen_id: str) -> Iterable[str]:
    yield citizen_id


def day_first_rule(birth_date: BirthDate, citizen_id: str) -> Iterable[str]:
    """DDMMYYYY, DDMMYY, DDMonYYYY and DDMonYY for each era."""
    for year in era_years(birth_date):
        short_year = f"{year % 100:02d}"
        yield f"{_day_month(birth_date)}{year:04d}"
        yield f"{_day_month(birth_date)}{short_year}"
        yield f"{_day_month_name(birth_date)}{year:04d}"
        yield f"{_day_month_name(birth_date)}{short_year}"


def year_first_rule(birth_date: BirthDate, citizen_id: str) -> Iterable[str]:
    """YYYYMMDD, Common Era first."""
    for year in reversed(era_years(birth_date)):
        yield f"{year:04d}{birth_date.month:02d}{birth_date.day:02d}"


def citizen_id_suffix_rule(birth_date: BirthDate, citizen_id: str) -> Iterable[str]:
    yield citizen_id[-4:]
    yield citizen_id[-6:]


def combined_rule(birth_date: BirthDate, citizen_id: str) -> Iterable[str]:
    """Citizen ID and the CE DDMMYYYY date joined in both orders."""
    date_part = f"{_day_month(birth_date)}{birth_date.year:04d}"
    yield f"{citizen_id}{date_part}"
    yield f"{date_part}{citizen_id}"


RULES: List[Rule] = [
    citizen_id_rule,
    day_first_rule,
    year_first_rule,
    citizen_id_suffix_rule,
    combined_rule,
]


def dedupe(candidates: Iterable[str]) -> List[str]:
    """Remove exact duplicates, keeping the first occurrence of each."""
    return list(dict.fromkeys(candidates))


def generate_candidates(
    birth_date: BirthDate,
    citizen_id: str,
    length: int = CITIZEN_ID_LENGTH
) -> List[str]:
    """Generate the ordered candidate password list.

    Args:
        birth_date: Validated date of birth in CE.
        citizen_id: Citizen ID; spaces and dashes are ignored.
        length: Required number of citizen ID digits.

    Returns:
        Non-empty list of distinct candidate passwords in rule order.

    Raises:
        InvalidDateError: If birth_date is not a BirthDate.
        InvalidCitizenIdError: If citizen_id is malformed.
    """
    if not isinstance(birth_date, BirthDate):
        raise InvalidDateError("Date of birth must be a BirthDate")

    citizen_id = parse_citizen_id(citizen_id, length)

    candidates = dedupe(
        candidate
        for rule in RULES
        for candidate in rule(birth_date, citizen_id)
    )

    logger.debug(f"Generated {len(candidates)} candidate passwords")
    return candidates
