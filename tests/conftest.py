"""Pytest configuration and fixtures for the PDF decryption tool."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
from PyPDF2 import PdfWriter

from pdecrypt.config.settings import Settings
from pdecrypt.utils.exceptions import MalformedDocumentError, WrongPasswordError


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_settings(temp_dir):
    """Create settings whose files all live in the temporary directory."""
    home = temp_dir / "home"
    return Settings(
        pw_list_file=str(home / "pw_list.json"),
        home_dir=str(home),
        log_level="INFO",
        logs_dir=str(home / "logs"),
    )


def build_pdf(
    title: str = "Statement",
    password: Optional[str] = None,
    pages: int = 1,
    owner_password: Optional[str] = None
) -> bytes:
    """Build a small PDF, optionally RC4-encrypted with password."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=72, height=72)
    writer.add_metadata({"/Title": title})
    if password is not None:
        writer.encrypt(password, owner_password)
    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


@pytest.fixture
def pdf_factory():
    """Return the build_pdf helper."""
    return build_pdf


@pytest.fixture
def input_dir(temp_dir):
    """Create an empty input directory."""
    path = temp_dir / "statements"
    path.mkdir()
    return path


class FakeDecryptor:
    """In-memory stand-in for PDFDecryptor.

    File contents use a tiny text format: ``ENC:<password>:<body>`` for an
    encrypted file, ``PLAIN:<body>`` for an unencrypted one and anything
    else for a malformed document.
    """

    def __init__(self) -> None:
        self.attempts: List[Tuple[bytes, str]] = []

    @staticmethod
    def _parse(data: bytes) -> Dict[str, bytes]:
        if data.startswith(b"PLAIN:"):
            return {"body": data[len(b"PLAIN:"):]}
        if data.startswith(b"ENC:"):
            _, password, body = data.split(b":", 2)
            return {"password": password, "body": body}
        raise MalformedDocumentError("not a PDF")

    def is_encrypted(self, data: bytes) -> bool:
        return "password" in self._parse(data)

    def try_decrypt(self, data: bytes, password: str) -> bytes:
        self.attempts.append((data, password))
        parsed = self._parse(data)
        if parsed.get("password") != password.encode():
            raise WrongPasswordError("wrong password")
        return b"DECRYPTED:" + parsed["body"]


@pytest.fixture
def fake_decryptor():
    """Create a fake decryptor that records every attempt."""
    return FakeDecryptor()
