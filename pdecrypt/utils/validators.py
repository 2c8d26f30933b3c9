"""Validation utilities for user input and file system paths."""

import os
import re

from pdecrypt.config.settings import (
    BUDDHIST_ERA_OFFSET,
    BUDDHIST_ERA_THRESHOLD,
    CITIZEN_ID_LENGTH,
)
from pdecrypt.passwords.models import BirthDate
from pdecrypt.utils.exceptions import (
    DirectoryUnreadableError,
    InvalidCitizenIdError,
    InvalidDateError,
    ValidationError,
)

DATE_PATTERN = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")


def parse_birth_date(text: str) -> BirthDate:
    """Parse a DD/MM/YYYY date of birth.

    Years from 2400 upwards are taken as Buddhist Era and converted to CE
    before the calendar check.

    Args:
        text: Date string such as ``27/12/1994`` or ``27/12/2537``.

    Returns:
        Validated BirthDate in CE.

    Raises:
        InvalidDateError: If the text is not a real DD/MM/YYYY date.
    """
    if not isinstance(text, str):
        raise InvalidDateError("Date of birth must be a string")

    match = DATE_PATTERN.match(text.strip())
    if match is None:
        raise InvalidDateError(f"Date of birth must be in DD/MM/YYYY format: {text!r}")

    day, month, year = (int(part) for part in match.groups())
    if year >= BUDDHIST_ERA_THRESHOLD:
        year -= BUDDHIST_ERA_OFFSET

    return BirthDate(day=day, month=month, year=year)


def parse_citizen_id(text: str, length: int = CITIZEN_ID_LENGTH) -> str:
    """Normalize and validate a citizen ID number.

    Spaces and dashes are removed, so ``1-2345-67890-12-3`` is accepted.

    Args:
        text: Citizen ID as typed by the user.
        length: Required number of digits.

    Returns:
        The ID as a string of digits.

    Raises:
        InvalidCitizenIdError: If the ID has the wrong length or characters.
    """
    if not isinstance(text, str):
        raise InvalidCitizenIdError("Citizen ID must be a string")

    digits = re.sub(r"[\s-]", "", text)

    if len(digits) != length:
        raise InvalidCitizenIdError(
            f"Citizen ID must have {length} digits, got {len(digits)}"
        )

    if not (digits.isascii() and digits.isdigit()):
        raise InvalidCitizenIdError("Citizen ID must contain digits only")

    return digits


def validate_input_directory(dir_path: str) -> None:
    """Validate that a directory exists and can be listed.

    Args:
        dir_path: Path to the directory to validate.

    Raises:
        DirectoryUnreadableError: If the directory is missing or unreadable.
    """
    if not dir_path:
        raise DirectoryUnreadableError("Input directory path cannot be empty")

    if not os.path.exists(dir_path):
        raise DirectoryUnreadableError(f"Input directory does not exist: {dir_path}")

    if not os.path.isdir(dir_path):
        raise DirectoryUnreadableError(f"Input path is not a directory: {dir_path}")

    if not os.access(dir_path, os.R_OK | os.X_OK):
        raise DirectoryUnreadableError(f"Input directory is not readable: {dir_path}")


def validate_directory_path(dir_path: str) -> None:
    """Validate that a directory path exists and is writable, creating it if needed.

    Args:
        dir_path: Path to the directory to validate.

    Raises:
        ValidationError: If directory path is invalid.
    """
    if not dir_path:
        raise ValidationError("Directory path cannot be empty")

    if not os.path.exists(dir_path):
        try:
            os.makedirs(dir_path, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"Cannot create directory {dir_path}: {str(e)}") from e

    if not os.path.isdir(dir_path):
        raise ValidationError(f"Path is not a directory: {dir_path}")

    if not os.access(dir_path, os.W_OK):
        raise ValidationError(f"Directory is not writable: {dir_path}")


def validate_password_list(passwords: object) -> None:
    """Validate a candidate password list.

    Args:
        passwords: Value loaded from the password list store.

    Raises:
        ValidationError: If the list is empty or holds non-string entries.
    """
    if not isinstance(passwords, list):
        raise ValidationError("Password list must be a list")

    if not passwords:
        raise ValidationError("Password list cannot be empty")

    for password in passwords:
        if not isinstance(password, str) or len(password.strip()) == 0:
            raise ValidationError("Password list entries must be non-empty strings")
