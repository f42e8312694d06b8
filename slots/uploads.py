"""
Bulk slot creation from a .csv or .xlsx file.

The file needs a ``room_id`` and a ``start_time`` column. Every row goes
through the same create workflow as the form, so the per-day quotas apply.
"""
import io
import logging

import pandas as pd

from .exceptions import UploadError
from .workflows import create_slot

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['room_id', 'start_time']


def read_slots_file(uploaded_file):
    file_extension = uploaded_file.name.rsplit('.', 1)[-1].lower()
    try:
        if file_extension == 'csv':
            df = pd.read_csv(io.StringIO(uploaded_file.read().decode('utf-8')), dtype=str)
        elif file_extension == 'xlsx':
            df = pd.read_excel(io.BytesIO(uploaded_file.read()), dtype=str)
        else:
            raise UploadError("Unsupported file format. Use .csv or .xlsx.")
    except (UnicodeDecodeError, ValueError, pd.errors.ParserError) as e:
        raise UploadError(f"The file could not be read: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise UploadError(f"The file must contain the columns: {', '.join(REQUIRED_COLUMNS)}")
    return df


def upload_slots(uploaded_file, staff_id):
    """Returns (created_count, errors), one error string per rejected row."""
    df = read_slots_file(uploaded_file)

    created = 0
    errors = []
    for index, row in df.iterrows():
        row_number = index + 2  # header is row 1
        room_id = str(row['room_id']).strip() if pd.notna(row['room_id']) else ''
        start_time = pd.to_datetime(row['start_time'], errors='coerce')

        if not room_id:
            errors.append(f"Row {row_number}: the room is empty")
            continue
        if pd.isna(start_time):
            errors.append(f"Row {row_number}: invalid start time {row['start_time']}")
            continue

        if start_time.tzinfo is not None:
            # Slot times are campus wall clock times, keep the local time and drop the offset
            start_time = start_time.tz_localize(None)
        start_time = start_time.to_pydatetime().replace(second=0, microsecond=0)
        if start_time.minute:
            errors.append(f"Row {row_number}: Slots start on the hour.")
            continue

        result = create_slot(room_id, staff_id, start_time)
        if result.ok:
            created += 1
        else:
            errors.append(f"Row {row_number}: " + " ".join(v.message for v in result.violations))

    logger.info("Upload by %s: %d created, %d rejected", staff_id, created, len(errors))
    return created, errors
