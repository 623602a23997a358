"""
Lazy CSV record source
"""

import csv
from pathlib import Path
from typing import Dict, Iterator, Union

from core.exceptions import LocalIOError, ParseError
import logging

logger = logging.getLogger(__name__)


def normalize_header(name: str) -> str:
    """'Organization Id' -> 'organization_id'"""
    return name.strip().lower().replace(" ", "_")


def iter_csv_records(csv_path: Union[str, Path], encoding: str = "utf-8-sig") -> Iterator[Dict[str, str]]:
    """
    Yield one record per data row of ``csv_path``.

    The header row names the fields. Values are passed through as text:
    no trimming and no null coercion, an empty field stays ``""``.
    Blank lines are skipped.

    Raises:
        ParseError: A row's field count differs from the header's, or the
            file is not valid CSV
        LocalIOError: The file cannot be opened
    """
    csv_path = Path(csv_path)

    try:
        handle = open(csv_path, newline="", encoding=encoding)
    except OSError as e:
        raise LocalIOError(
            "Cannot open CSV file",
            context={"file_path": str(csv_path)},
            original_exception=e
        )

    with handle:
        reader = csv.reader(handle)
        try:
            header = next(reader, None)
            if header is None:
                logger.warning(f"CSV file is empty: {csv_path}")
                return

            fields = [normalize_header(name) for name in header]

            for row in reader:
                if not row:
                    continue

                if len(row) != len(fields):
                    raise ParseError(
                        "Row field count does not match header",
                        context={
                            "file_path": str(csv_path),
                            "line_number": reader.line_num,
                            "expected_fields": len(fields),
                            "actual_fields": len(row)
                        }
                    )

                yield dict(zip(fields, row))

        except csv.Error as e:
            raise ParseError(
                "Malformed CSV",
                context={"file_path": str(csv_path), "line_number": reader.line_num},
                original_exception=e
            )

        except UnicodeDecodeError as e:
            raise ParseError(
                f"CSV file is not valid {encoding}",
                context={"file_path": str(csv_path), "line_number": reader.line_num},
                original_exception=e
            )
