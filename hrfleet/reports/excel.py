from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from hrfleet.reports.renderer import ColumnTotal, Placeholder, ReportSheet

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_thin = Side(style="thin", color="E9ECEF")
_thin_dark = Side(style="thin", color="DEE2E6")
CELL_BORDER = Border(top=_thin, bottom=_thin, left=_thin, right=_thin)
HEADER_BORDER = Border(top=_thin_dark, bottom=_thin_dark, left=_thin_dark, right=_thin_dark)

TITLE_FONT = Font(bold=True, size=16, color="0000FF")
SUBHEADER_FONT = Font(bold=True, size=11)
TABLE_HEADER_FONT = Font(bold=True, size=10)
CELL_FONT = Font(size=10)

LIGHT_FILL = PatternFill(fill_type="solid", fgColor="F8F9FA")
HEADER_FILL = PatternFill(fill_type="solid", fgColor="F1F3F5")
CENTER = Alignment(horizontal="center")


def _style(cell, font, fill=None, border=CELL_BORDER, align=None) -> None:
    cell.font = font
    cell.border = border
    if fill is not None:
        cell.fill = fill
    if align is not None:
        cell.alignment = align


def _write_title(ws, row: int, text: str, span: int) -> None:
    cell = ws.cell(row=row, column=1, value=text)
    _style(cell, TITLE_FONT, LIGHT_FILL, align=CENTER)
    if span > 1:
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)


def write_workbook(sheet: ReportSheet) -> bytes:
    """Lay the report out on a single worksheet and return the xlsx bytes."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Report"

    _write_title(ws, 1, sheet.title, sheet.title_span)

    row = 3
    for label, value in sheet.meta:
        _style(ws.cell(row=row, column=1, value=label), SUBHEADER_FONT, LIGHT_FILL)
        _style(ws.cell(row=row, column=2, value=value), CELL_FONT)
        row += 1

    row += 1
    for col, title in enumerate(sheet.header, start=1):
        _style(
            ws.cell(row=row, column=col, value=title),
            TABLE_HEADER_FONT,
            HEADER_FILL,
            HEADER_BORDER,
            CENTER,
        )
    row += 1

    first_data_row = row
    for values in sheet.rows:
        col = 1
        for value in values:
            if isinstance(value, Placeholder):
                cell = ws.cell(row=row, column=col, value=value.text)
                _style(cell, CELL_FONT, align=CENTER)
                ws.merge_cells(
                    start_row=row,
                    start_column=col,
                    end_row=row,
                    end_column=col + value.span - 1,
                )
                col += value.span
                continue
            cell = ws.cell(row=row, column=col, value=value)
            _style(cell, CELL_FONT, align=CENTER if isinstance(value, int) else None)
            col += 1
        row += 1
    last_data_row = row - 1

    if sheet.totals:
        row += 1
        for col, value in enumerate(sheet.totals, start=1):
            if value is None:
                continue
            if isinstance(value, ColumnTotal):
                letter = get_column_letter(value.column + 1)
                if last_data_row >= first_data_row:
                    value = f"=SUM({letter}{first_data_row}:{letter}{last_data_row})"
                else:
                    value = 0
            _style(ws.cell(row=row, column=col, value=value), SUBHEADER_FONT, LIGHT_FILL, align=CENTER)
        row += 1

    if sheet.summary:
        row += 2
        if sheet.summary_title:
            _write_title(ws, row, sheet.summary_title, 3)
            row += 1
        for label, value in sheet.summary:
            _style(ws.cell(row=row, column=1, value=label), SUBHEADER_FONT, LIGHT_FILL)
            _style(ws.cell(row=row, column=2, value=value), CELL_FONT)
            row += 1

    for col, width in enumerate(sheet.column_widths, start=1):
        ws.column_dimensions[get_column_letter(col)].width = width

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
