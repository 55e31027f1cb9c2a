"""Serialize a ReportData into downloadable files."""

from __future__ import annotations

import csv
import io

import pandas as pd

from .service import ROW_FIELDS, SUMMARY_FIELDS, ReportData

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def report_to_csv(data: ReportData) -> bytes:
    """Daily rows only; utf-8-sig so Excel detects the encoding."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=ROW_FIELDS)
    writer.writeheader()
    for row in data.rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def report_to_xlsx(data: ReportData) -> bytes:
    """Two sheets: Attendance (daily rows) and Summary."""

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(data.rows, columns=ROW_FIELDS).to_excel(writer, index=False, sheet_name="Attendance")
        pd.DataFrame(data.summary, columns=SUMMARY_FIELDS).to_excel(writer, index=False, sheet_name="Summary")
    return output.getvalue()
