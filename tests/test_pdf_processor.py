"""Tests for the PyPDF2-backed decryptor."""

import io
from unittest.mock import patch

import pytest
from PyPDF2 import PdfReader

from pdecrypt.pdf_processor.decryptor import PDFDecryptor
from pdecrypt.utils.exceptions import MalformedDocumentError, WrongPasswordError


class TestPDFDecryptor:
    """Test cases for PDFDecryptor class."""

    def test_is_encrypted(self, pdf_factory):
        decryptor = PDFDecryptor()

        assert decryptor.is_encrypted(pdf_factory(password="15061990")) is True
        assert decryptor.is_encrypted(pdf_factory()) is False

    def test_is_encrypted_malformed(self):
        with pytest.raises(MalformedDocumentError):
            PDFDecryptor().is_encrypted(b"Not a PDF file")

    def test_decrypt_success(self, pdf_factory):
        """Test the decrypted copy is unencrypted and keeps pages and title."""
        data = pdf_factory(title="June statement", password="15061990", pages=3)

        decrypted = PDFDecryptor().try_decrypt(data, "15061990")

        reader = PdfReader(io.BytesIO(decrypted))
        assert reader.is_encrypted is False
        assert len(reader.pages) == 3
        assert reader.metadata.title == "June statement"

    def test_decrypt_with_wrong_password(self, pdf_factory):
        data = pdf_factory(password="15061990")

        with pytest.raises(WrongPasswordError):
            PDFDecryptor().try_decrypt(data, "19900615")

    def test_wrong_then_right_password(self, pdf_factory):
        """Test a failed attempt does not affect the next one."""
        decryptor = PDFDecryptor()
        data = pdf_factory(password="150690")

        with pytest.raises(WrongPasswordError):
            decryptor.try_decrypt(data, "15061990")
        assert decryptor.try_decrypt(data, "150690").startswith(b"%PDF")

    def test_decrypt_corrupted_file(self):
        with pytest.raises(MalformedDocumentError):
            PDFDecryptor().try_decrypt(b"%PDF-1.4\n1 0 obj\n<<\n/Type /Catalog\n", "x")

    def test_decrypt_unencrypted_file(self, pdf_factory):
        with pytest.raises(MalformedDocumentError):
            PDFDecryptor().try_decrypt(pdf_factory(), "x")

    def test_unsupported_encryption(self, pdf_factory):
        """Test decryption errors from PyPDF2 are reported as malformed."""
        data = pdf_factory(password="15061990")

        with patch("pdecrypt.pdf_processor.decryptor.PdfReader.decrypt", side_effect=NotImplementedError("AES-256")):
            with pytest.raises(MalformedDocumentError, match="Unsupported"):
                PDFDecryptor().try_decrypt(data, "15061990")

    def test_get_metadata(self, pdf_factory):
        reader = PdfReader(io.BytesIO(pdf_factory(title="Statement")))
        assert PDFDecryptor().get_metadata(reader)["/Title"] == "Statement"
