"""Configuration settings for the PDF decryption tool."""

import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

# File Paths
PDECRYPT_HOME = os.path.expanduser(os.getenv("PDECRYPT_HOME", "~/.pdecrypt"))
DEFAULT_PW_LIST_FILE = os.path.expanduser(
    os.getenv("PDECRYPT_PW_LIST", os.path.join(PDECRYPT_HOME, "pw_list.json"))
)
LOGS_DIR = os.path.expanduser(os.getenv("LOGS_DIR", os.path.join(PDECRYPT_HOME, "logs")))

# PDF Processing Configuration
SUPPORTED_PDF_FORMATS = [".pdf"]
OUTPUT_DIR_SUFFIX = "_pdfs_decrypted_"
OUTPUT_DIR_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Citizen ID Configuration
CITIZEN_ID_LENGTH = 13

# Buddhist Era years run 543 years ahead of the Common Era
BUDDHIST_ERA_OFFSET = 543
BUDDHIST_ERA_THRESHOLD = 2400

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "False").lower() == "true"


@dataclass
class Settings:
    """Configuration settings class."""

    # Password list store
    pw_list_file: str = DEFAULT_PW_LIST_FILE
    home_dir: str = PDECRYPT_HOME

    # Logging
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT
    log_to_file: bool = LOG_TO_FILE
    logs_dir: str = LOGS_DIR

    # Batch processing
    supported_pdf_formats: List[str] = field(default_factory=lambda: SUPPORTED_PDF_FORMATS.copy())
    output_dir_suffix: str = OUTPUT_DIR_SUFFIX
    citizen_id_length: int = CITIZEN_ID_LENGTH

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        home_dir = os.path.expanduser(os.getenv("PDECRYPT_HOME", "~/.pdecrypt"))
        return cls(
            pw_list_file=os.path.expanduser(
                os.getenv("PDECRYPT_PW_LIST", os.path.join(home_dir, "pw_list.json"))
            ),
            home_dir=home_dir,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_to_file=os.getenv("LOG_TO_FILE", "False").lower() == "true",
            logs_dir=os.path.expanduser(os.getenv("LOGS_DIR", os.path.join(home_dir, "logs"))),
        )

    def validate(self) -> bool:
        """Validate settings."""
        return (
            len(self.pw_list_file) > 0 and
            self.citizen_id_length > 0 and
            len(self.supported_pdf_formats) > 0 and
            all(ext.startswith(".") for ext in self.supported_pdf_formats)
        )

    def get_log_level(self) -> str:
        """Get log level as string."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() in valid_levels:
            return self.log_level.upper()
        return "INFO"

    def create_directories(self) -> None:
        """Create necessary directories."""
        directories = [
            self.home_dir,
            self.logs_dir,
            os.path.dirname(os.path.abspath(self.pw_list_file)),
        ]
        for directory in directories:
            os.makedirs(directory, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create settings from dictionary."""
        return cls(**data)

    def update(self, data: Dict[str, Any]) -> None:
        """Update settings from dictionary, ignoring unknown keys and None values."""
        for key, value in data.items():
            if value is not None and hasattr(self, key):
                setattr(self, key, value)

