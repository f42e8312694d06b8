import io
import logging

import openpyxl
from django.template.loader import render_to_string
from xhtml2pdf import pisa

from .exceptions import ExportError
from .rules import format_long_time

logger = logging.getLogger(__name__)

EXCEL_HEADERS = ['Room', 'Start Time', 'Staff', 'Student']


def _slot_row(slot):
    return [
        slot.room_id,
        format_long_time(slot.start_time),
        slot.staff_id,
        slot.student_id or '',
    ]


def export_slots_excel(slots):
    """Returns the slots as the bytes of an .xlsx workbook."""
    output = io.BytesIO()
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Slots"

    header_style = openpyxl.styles.Font(bold=True)
    sheet.append(EXCEL_HEADERS)
    for cell in sheet[1]:
        cell.font = header_style

    for slot in slots:
        sheet.append(_slot_row(slot))

    workbook.save(output)
    return output.getvalue()


def export_slots_pdf(slots, title="Slots", generated_on=None):
    html_content = render_to_string('slots/slots_pdf.html', {
        'title': title,
        'headers': EXCEL_HEADERS,
        'rows': [_slot_row(slot) for slot in slots],
        'generated_on': generated_on.strftime('%d/%m/%Y') if generated_on else '',
    })

    pdf_file_buffer = io.BytesIO()
    try:
        pisa_status = pisa.CreatePDF(html_content, dest=pdf_file_buffer, encoding='UTF-8')
    except Exception as e:
        logger.exception("PDF rendering failed")
        raise ExportError(f"Error generating the PDF: {e}") from e

    if pisa_status.err:
        raise ExportError("Internal xhtml2pdf error while generating the PDF.")

    return pdf_file_buffer.getvalue()
