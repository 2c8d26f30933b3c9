"""Excel export of batch decryption outcomes."""

import os
from datetime import datetime
from typing import Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows
from openpyxl.worksheet.worksheet import Worksheet

from pdecrypt.pdf_processor.batch import BatchReport
from pdecrypt.utils.exceptions import ReportExportError, ValidationError
from pdecrypt.utils.logger import get_logger
from pdecrypt.utils.validators import validate_directory_path

RESULT_COLUMNS = ["File", "Status", "Password", "Output", "Error"]


class ReportExporter:
    """Writes a BatchReport to an xlsx workbook."""

    def __init__(self, include_passwords: bool = False) -> None:
        """Initialize the exporter.

        Args:
            include_passwords: Whether the matching password is written in
                clear; otherwise only its position in the candidate list
                is recorded as ``#N``.
        """
        self.logger = get_logger(__name__)
        self.include_passwords = include_passwords

        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.header_alignment = Alignment(horizontal="center", vertical="center")

    def results_to_dataframe(self, report: BatchReport, candidates=None) -> pd.DataFrame:
        """Convert per-file results to a DataFrame with RESULT_COLUMNS."""
        rows = []
        for result in report.results:
            rows.append({
                "File": result.job.name,
                "Status": result.status.value,
                "Password": self._password_label(result.password, candidates),
                "Output": str(result.job.output_path) if result.succeeded else "",
                "Error": result.error or "",
            })
        for name in report.skipped:
            rows.append({
                "File": name,
                "Status": "skipped",
                "Password": "",
                "Output": "",
                "Error": "",
            })
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def _password_label(self, password: Optional[str], candidates) -> str:
        if password is None:
            return ""
        if password == "":
            return "(none)"
        if self.include_passwords:
            return password
        if candidates and password in candidates:
            return f"#{list(candidates).index(password) + 1}"
        return "yes"

    def summary_to_dataframe(self, report: BatchReport) -> pd.DataFrame:
        summary = report.summary()
        rows = [
            ("Input directory", str(report.input_dir)),
            ("Output directory", str(report.output_dir)),
            ("Generated", datetime.now().strftime("%Y-%m-%d %H:%M:%S")),
        ]
        rows.extend((key.capitalize(), value) for key, value in summary.items())
        return pd.DataFrame(rows, columns=["Item", "Value"])

    def _write_sheet(self, workbook: Workbook, df: pd.DataFrame, sheet_name: str) -> Worksheet:
        worksheet = workbook.create_sheet(title=sheet_name)

        for row_num, row in enumerate(dataframe_to_rows(df, index=False, header=True), 1):
            for col_num, value in enumerate(row, 1):
                cell = worksheet.cell(row=row_num, column=col_num, value=value)
                if row_num == 1:
                    cell.font = self.header_font
                    cell.fill = self.header_fill
                    cell.alignment = self.header_alignment

        for col_idx in range(1, worksheet.max_column + 1):
            max_length = max(
                (len(str(cell.value)) for cell in worksheet[get_column_letter(col_idx)] if cell.value is not None),
                default=0
            )
            worksheet.column_dimensions[get_column_letter(col_idx)].width = min(max_length + 2, 60)

        return worksheet

    def export(self, report: BatchReport, output_path: str, candidates=None) -> str:
        """Write the report to an Excel file.

        Args:
            report: Batch outcome to export.
            output_path: Destination ``.xlsx`` file.
            candidates: Candidate list, used to label matching passwords.

        Returns:
            Path to the written workbook.

        Raises:
            ReportExportError: If the workbook cannot be written.
        """
        if not output_path.endswith(".xlsx"):
            output_path = f"{output_path}.xlsx"

        try:
            validate_directory_path(os.path.dirname(os.path.abspath(output_path)))

            workbook = Workbook()
            if "Sheet" in workbook.sheetnames:
                workbook.remove(workbook["Sheet"])

            self._write_sheet(workbook, self.results_to_dataframe(report, candidates), "Results")
            self._write_sheet(workbook, self.summary_to_dataframe(report), "Summary")

            workbook.save(output_path)
        except (OSError, ValidationError) as e:
            raise ReportExportError(f"Failed to export report to {output_path}: {str(e)}") from e

        self.logger.info(f"Batch report written: {output_path}")
        return output_path
