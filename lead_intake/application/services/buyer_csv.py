"""CSV layout shared by buyer export and import.

Columns are positional and identical in both directions, so an exported file
can be re-imported after blanking the ID column. Import ignores the id,
status, owner and timestamp columns.
"""

import csv
import io
from typing import Any, Iterable

from lead_intake.domain.entities import Buyer
from lead_intake.domain.exceptions import ValidationFailedError

EXPORT_HEADERS = [
    "ID",
    "Full Name",
    "Email",
    "Phone",
    "City",
    "Property Type",
    "BHK",
    "Purpose",
    "Budget Min",
    "Budget Max",
    "Timeline",
    "Source",
    "Status",
    "Notes",
    "Tags",
    "Owner ID",
    "Created At",
    "Updated At",
]

# Column positions read back on import
_IMPORT_COLUMNS: dict[str, int] = {
    "fullName": 1,
    "email": 2,
    "phone": 3,
    "city": 4,
    "propertyType": 5,
    "bhk": 6,
    "purpose": 7,
    "budgetMin": 8,
    "budgetMax": 9,
    "timeline": 10,
    "source": 11,
    "notes": 13,
}
_TAGS_COLUMN = 14

TAG_SEPARATOR = ", "


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def buyer_to_row(buyer: Buyer) -> list[str]:
    return [
        buyer.id,
        buyer.full_name,
        _cell(buyer.email),
        buyer.phone,
        _cell(buyer.city),
        _cell(buyer.property_type),
        _cell(buyer.bhk),
        _cell(buyer.purpose),
        _cell(buyer.budget_min),
        _cell(buyer.budget_max),
        _cell(buyer.timeline),
        _cell(buyer.source),
        _cell(buyer.status),
        _cell(buyer.notes),
        TAG_SEPARATOR.join(buyer.tags),
        _cell(buyer.owner_id),
        buyer.created_at.isoformat(),
        buyer.updated_at.isoformat(),
    ]


def serialize_buyers(buyers: Iterable[Buyer]) -> str:
    """Render buyers as CSV text with a header line and standard quoting."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for buyer in buyers:
        writer.writerow(buyer_to_row(buyer))
    return buffer.getvalue()


def parse_data_rows(text: str) -> list[tuple[int, list[str]]]:
    """Split CSV text into ``(row_number, columns)`` pairs for the data rows.

    Blank records are dropped before numbering. Row numbers are 1-based and
    count the header line, so the first data row is row 2.

    Raises ``ValidationFailedError`` unless there is a header and at least
    one data row.
    """
    records = [
        [column.strip() for column in record]
        for record in csv.reader(io.StringIO(text.lstrip("\ufeff")))
        if any(column.strip() for column in record)
    ]
    if len(records) < 2:
        raise ValidationFailedError.single(
            "file", "CSV file must have header and at least one data row"
        )
    return [(index + 2, columns) for index, columns in enumerate(records[1:])]


def row_to_payload(columns: list[str]) -> dict[str, Any]:
    """Map positional columns onto payload fields; missing columns are blank."""

    def column(position: int) -> str:
        return columns[position] if position < len(columns) else ""

    payload: dict[str, Any] = {name: column(pos) for name, pos in _IMPORT_COLUMNS.items()}
    raw_tags = column(_TAGS_COLUMN)
    payload["tags"] = [tag.strip() for tag in raw_tags.split(",") if tag.strip()] if raw_tags else []
    return payload
