"""Exception hierarchy for the PDF decryption tool."""


class PDecryptError(Exception):
    """Base class for all errors raised by pdecrypt."""
    pass


class ValidationError(PDecryptError):
    """Custom exception for validation errors."""
    pass


class InvalidDateError(ValidationError):
    """Date of birth is malformed or not a real calendar date."""
    pass


class InvalidCitizenIdError(ValidationError):
    """Citizen ID does not have the expected digit layout."""
    pass


class DirectoryUnreadableError(ValidationError):
    """Input directory is missing or cannot be listed."""
    pass


class ConfigMissingError(PDecryptError):
    """Password list has not been initialised."""
    pass


class ConfigCorruptError(ConfigMissingError):
    """Password list exists but cannot be used."""
    pass


class DocumentError(PDecryptError):
    """Base class for per-document failures."""
    pass


class WrongPasswordError(DocumentError):
    """Password did not open the document."""
    pass


class MalformedDocumentError(DocumentError):
    """Document cannot be parsed or decrypted regardless of password."""
    pass


class OutputWriteError(DocumentError):
    """Decrypted output could not be written."""
    pass


class ReportExportError(PDecryptError):
    """Batch report could not be exported."""
    pass
