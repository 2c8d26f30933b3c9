"""PDF decryption utilities backed by PyPDF2."""

import io
from typing import Dict

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError

from pdecrypt.utils.exceptions import MalformedDocumentError, WrongPasswordError
from pdecrypt.utils.logger import get_logger


class PDFDecryptor:
    """Attempts to open a PDF with a single password.

    Any object with the same ``is_encrypted`` / ``try_decrypt`` methods can
    stand in for this class in ``BatchDecryptor``.
    """

    def __init__(self) -> None:
        """Initialize PDF decryptor."""
        self.logger = get_logger(__name__)

    def _open(self, data: bytes) -> PdfReader:
        try:
            return PdfReader(io.BytesIO(data))
        except PdfReadError as e:
            raise MalformedDocumentError(f"PDF read error: {str(e)}") from e
        except Exception as e:
            raise MalformedDocumentError(f"Unexpected error while reading PDF: {str(e)}") from e

    def is_encrypted(self, data: bytes) -> bool:
        """Check if PDF content is encrypted.

        Args:
            data: Raw PDF bytes.

        Returns:
            True if PDF is encrypted, False otherwise.

        Raises:
            MalformedDocumentError: If PDF cannot be read.
        """
        return self._open(data).is_encrypted

    def try_decrypt(self, data: bytes, password: str) -> bytes:
        """Decrypt PDF content with one password.

        Args:
            data: Raw encrypted PDF bytes.
            password: Password to try.

        Returns:
            Bytes of an equivalent PDF without encryption.

        Raises:
            WrongPasswordError: If the password does not open the document.
            MalformedDocumentError: If the document cannot be read or its
                encryption is not supported.
        """
        reader = self._open(data)

        if not reader.is_encrypted:
            raise MalformedDocumentError("PDF is not encrypted")

        try:
            result = reader.decrypt(password)
        except Exception as e:
            raise MalformedDocumentError(f"Unsupported PDF encryption: {str(e)}") from e

        if not result:
            raise WrongPasswordError("Password does not open the document")

        try:
            return self._rewrite(reader)
        except Exception as e:
            raise MalformedDocumentError(f"Failed to rebuild decrypted PDF: {str(e)}") from e

    def _rewrite(self, reader: PdfReader) -> bytes:
        writer = PdfWriter()

        for page in reader.pages:
            writer.add_page(page)

        metadata = self.get_metadata(reader)
        if metadata:
            writer.add_metadata(metadata)

        output = io.BytesIO()
        writer.write(output)
        return output.getvalue()

    def get_metadata(self, reader: PdfReader) -> Dict[str, str]:
        """Extract string-valued document information entries.

        Args:
            reader: Decrypted PdfReader object.

        Returns:
            Dictionary mapping info keys such as ``/Title`` to their values.
        """
        try:
            metadata = reader.metadata
            if not metadata:
                return {}
            # item access resolves indirect references
            return {
                str(key): metadata[key]
                for key in metadata
                if isinstance(metadata[key], str)
            }
        except Exception as e:
            self.logger.warning(f"Failed to extract PDF metadata: {str(e)}")
            return {}
