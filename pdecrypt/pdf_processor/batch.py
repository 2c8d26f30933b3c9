"""Batch decryption of every PDF file in a directory."""

import os
import shutil
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from pdecrypt.config.settings import SUPPORTED_PDF_FORMATS
from pdecrypt.pdf_processor.decryptor import PDFDecryptor
from pdecrypt.utils.exceptions import (
    DirectoryUnreadableError,
    MalformedDocumentError,
    OutputWriteError,
    ValidationError,
    WrongPasswordError,
)
from pdecrypt.utils.logger import get_logger
from pdecrypt.utils.validators import (
    validate_directory_path,
    validate_input_directory,
    validate_password_list,
)


class FileStatus(Enum):
    """Terminal outcome of one file in a batch run."""

    DECRYPTED = "decrypted"
    PASSTHROUGH = "pass-through"
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True)
class FileJob:
    """An input PDF and the path its decrypted copy is written to."""

    input_path: Path
    output_path: Path

    @property
    def name(self) -> str:
        return self.input_path.name


@dataclass
class FileResult:
    """Outcome of processing one FileJob."""

    job: FileJob
    status: FileStatus
    password: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status in (FileStatus.DECRYPTED, FileStatus.PASSTHROUGH)


@dataclass
class BatchReport:
    """Per-file outcomes of a batch run."""

    input_dir: Path
    output_dir: Path
    results: List[FileResult] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def _with_status(self, status: FileStatus) -> List[FileResult]:
        return [result for result in self.results if result.status == status]

    @property
    def decrypted(self) -> List[FileResult]:
        return self._with_status(FileStatus.DECRYPTED)

    @property
    def passthrough(self) -> List[FileResult]:
        return self._with_status(FileStatus.PASSTHROUGH)

    @property
    def failed(self) -> List[FileResult]:
        return self._with_status(FileStatus.FAILED)

    @property
    def errors(self) -> List[FileResult]:
        return self._with_status(FileStatus.ERROR)

    def summary(self) -> Dict[str, int]:
        """Count outcomes.

        ``decrypted`` includes pass-through copies; ``failed`` includes
        files that could not be read, parsed or written.
        """
        return {
            "total": len(self.results),
            "decrypted": len(self.decrypted) + len(self.passthrough),
            "passthrough": len(self.passthrough),
            "failed": len(self.failed) + len(self.errors),
            "skipped": len(self.skipped),
        }


def write_atomic(path: Path, data: bytes) -> None:
    """Write bytes to path through a temporary sibling file.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise OutputWriteError(f"Failed to write {path}: {str(e)}") from e


class BatchDecryptor:
    """Tries a fixed candidate list against every PDF in a directory."""

    def __init__(
        self,
        candidates: Sequence[str],
        decryptor: Optional[PDFDecryptor] = None,
        supported_formats: Sequence[str] = tuple(SUPPORTED_PDF_FORMATS)
    ) -> None:
        """Initialize the batch decryptor.

        Args:
            candidates: Ordered candidate passwords, tried first to last.
            decryptor: Decryption capability; defaults to PDFDecryptor.
            supported_formats: File extensions treated as PDFs.

        Raises:
            ValidationError: If the candidate list is empty.
        """
        candidates = list(candidates)
        validate_password_list(candidates)

        self.logger = get_logger(__name__)
        self.candidates = tuple(candidates)
        self.decryptor = decryptor or PDFDecryptor()
        self.supported_formats = tuple(ext.lower() for ext in supported_formats)

    def is_supported(self, path: Path) -> bool:
        return path.suffix.lower() in self.supported_formats

    def scan_jobs(self, input_dir: Path, output_dir: Path) -> List[FileJob]:
        """List the PDF files of input_dir as jobs, sorted by name.

        Raises:
            DirectoryUnreadableError: If input_dir cannot be listed.
        """
        return self._jobs_for(self._list_files(input_dir), output_dir)

    def _jobs_for(self, files: List[Path], output_dir: Path) -> List[FileJob]:
        return [
            FileJob(input_path=path, output_path=output_dir / path.name)
            for path in files
            if self.is_supported(path)
        ]

    def _list_files(self, input_dir: Path) -> List[Path]:
        validate_input_directory(str(input_dir))
        try:
            return sorted(
                (entry for entry in input_dir.iterdir() if entry.is_file()),
                key=lambda entry: entry.name
            )
        except OSError as e:
            raise DirectoryUnreadableError(f"Cannot list {input_dir}: {str(e)}") from e

    def decrypt_all(self, input_dir: Union[str, Path], output_dir: Union[str, Path]) -> BatchReport:
        """Decrypt every PDF in input_dir into output_dir.

        Per-file failures are recorded in the report and never stop the run.

        Args:
            input_dir: Directory holding the encrypted statements.
            output_dir: Directory receiving decrypted copies; created if absent.

        Returns:
            BatchReport with one result per PDF file.

        Raises:
            DirectoryUnreadableError: If input_dir cannot be listed.
            ValidationError: If output_dir cannot be created or written.
        """
        input_dir = Path(input_dir)
        output_dir = Path(output_dir)

        files = self._list_files(input_dir)

        if input_dir.resolve() == output_dir.resolve():
            raise ValidationError("Output directory must differ from the input directory")

        validate_directory_path(str(output_dir))

        report = BatchReport(input_dir=input_dir, output_dir=output_dir)
        report.skipped = [path.name for path in files if not self.is_supported(path)]
        jobs = self._jobs_for(files, output_dir)
        for name in report.skipped:
            self.logger.debug(f"Skipping non-PDF file: {name}")

        if not jobs:
            self.logger.warning(f"No PDF files found in {input_dir}")

        self.logger.info(f"Found {len(jobs)} PDF files in {input_dir}")

        for job in jobs:
            result = self.process_file(job)
            report.results.append(result)

        summary = report.summary()
        self.logger.info(
            f"Decrypted {summary['decrypted']}/{summary['total']} files "
            f"({summary['failed']} failed, {summary['skipped']} skipped)"
        )
        return report

    def process_file(self, job: FileJob) -> FileResult:
        """Run the candidate list against one file.

        An empty password is tried first, then the candidates in order; the
        first one that opens the file wins. A file that is not encrypted is
        copied unchanged.
        """
        self.logger.info(f"Trying to decrypt file: {job.input_path}")

        try:
            data = job.input_path.read_bytes()
        except OSError as e:
            self.logger.error(f"Failed to read {job.input_path}: {str(e)}")
            return FileResult(job=job, status=FileStatus.ERROR, error=str(e))

        try:
            if not self.decryptor.is_encrypted(data):
                return self._pass_through(job)

            # owner-password-only files open with an empty user password
            for password in ("",) + self.candidates:
                try:
                    decrypted = self.decryptor.try_decrypt(data, password)
                except WrongPasswordError:
                    continue

                if password:
                    self.logger.debug(f"Decrypting file with password: {password}")
                else:
                    self.logger.info(f"PDF {job.name} has no user password")
                write_atomic(job.output_path, decrypted)
                self.logger.info(f"Wrote decrypted file: {job.output_path}")
                return FileResult(job=job, status=FileStatus.DECRYPTED, password=password)

        except MalformedDocumentError as e:
            self.logger.error(f"Cannot decrypt {job.name}: {str(e)}")
            return FileResult(job=job, status=FileStatus.ERROR, error=str(e))
        except OutputWriteError as e:
            self.logger.error(str(e))
            return FileResult(job=job, status=FileStatus.ERROR, error=str(e))

        self.logger.warning(f"Failed to find password for file: {job.input_path}")
        return FileResult(
            job=job,
            status=FileStatus.FAILED,
            error=f"None of {len(self.candidates)} candidate passwords matched"
        )

    def _pass_through(self, job: FileJob) -> FileResult:
        self.logger.info(f"PDF {job.name} is not encrypted, copying unchanged")
        try:
            shutil.copyfile(job.input_path, job.output_path)
        except OSError as e:
            raise OutputWriteError(f"Failed to copy {job.input_path}: {str(e)}") from e
        return FileResult(job=job, status=FileStatus.PASSTHROUGH)
