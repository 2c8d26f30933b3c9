"""Persistent store for the generated candidate password list."""

import json
import os
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pdecrypt.config.settings import DEFAULT_PW_LIST_FILE
from pdecrypt.utils.exceptions import ConfigCorruptError, ConfigMissingError, ValidationError
from pdecrypt.utils.logger import get_logger
from pdecrypt.utils.validators import validate_password_list

logger = get_logger(__name__)

PW_LIST_KEY = "pw_list"


@dataclass
class PasswordList:
    """Ordered candidate passwords for the single configured profile."""

    passwords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {PW_LIST_KEY: list(self.passwords)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PasswordList":
        if not isinstance(data, dict) or PW_LIST_KEY not in data:
            raise ConfigCorruptError(f"Password list is missing the '{PW_LIST_KEY}' key")
        try:
            validate_password_list(data[PW_LIST_KEY])
        except ValidationError as e:
            raise ConfigCorruptError(str(e)) from e
        return cls(passwords=list(data[PW_LIST_KEY]))

    def __len__(self) -> int:
        return len(self.passwords)

    def __iter__(self):
        return iter(self.passwords)


def save_password_list(password_list: PasswordList, file_path: str = DEFAULT_PW_LIST_FILE) -> str:
    """Write the password list to disk, replacing any previous list.

    The file is written to a temporary sibling first and moved into place,
    so an interrupted write leaves the previous list untouched.

    Args:
        password_list: Password list to persist.
        file_path: Destination JSON file.

    Returns:
        Path of the written file.
    """
    validate_password_list(password_list.passwords)

    directory = os.path.dirname(os.path.abspath(file_path))
    if not os.path.isdir(directory):
        logger.debug(f"Creating directory: {directory}")
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=".pw_list_", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(password_list.to_dict(), f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, file_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    logger.info(f"Saved {len(password_list)} candidate passwords to {file_path}")
    return file_path


def load_password_list(file_path: str = DEFAULT_PW_LIST_FILE) -> PasswordList:
    """Load the password list written by ``pdecrypt init``.

    Args:
        file_path: JSON file holding the list.

    Returns:
        Loaded PasswordList.

    Raises:
        ConfigMissingError: If the file does not exist.
        ConfigCorruptError: If the file cannot be parsed or holds no passwords.
    """
    if not os.path.exists(file_path):
        raise ConfigMissingError(
            f"Password list not found: {file_path}. Run 'pdecrypt init DD/MM/YYYY CITIZEN_ID' first"
        )

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigCorruptError(f"Failed to read password list {file_path}: {str(e)}") from e

    password_list = PasswordList.from_dict(data)
    logger.debug(f"Loaded {len(password_list)} candidate passwords from {file_path}")
    return password_list
