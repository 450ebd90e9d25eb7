import csv
import logging
from typing import List

from ..core.records import DEFAULT_TTL, DomainRecord, RecordOptions, new_domain_record
from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("Type", "Name", "Data")


class CSVParser:
    def __init__(self, csv_path: str):
        self.csv_path = csv_path

    def parse(self) -> List[DomainRecord]:
        """Parse CSV file and validate records.

        Any invalid row aborts the parse: a dropped row would otherwise be
        deleted by a full replace.
        """
        records = []

        with open(self.csv_path, "r", newline="") as f:
            reader = csv.DictReader(f)

            missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(
                    f"CSV must contain {', '.join(repr(c) for c in REQUIRED_COLUMNS)} columns"
                )

            for row_num, row in enumerate(reader, start=2):
                try:
                    records.append(self._parse_row(row))
                except ValidationError as e:
                    raise ValidationError(f"row {row_num}: {e}") from e

        logger.info(f"Successfully parsed {len(records)} records from CSV")
        return records

    def _parse_row(self, row) -> DomainRecord:
        return new_domain_record(
            row["Name"] or "",
            row["Type"] or "",
            row["Data"] or "",
            self._int(row, "TTL", DEFAULT_TTL),
            RecordOptions(
                priority=self._int(row, "Priority", 0),
                weight=self._int(row, "Weight", 0),
                port=self._int(row, "Port", 0),
                service=(row.get("Service") or "").strip(),
                protocol=(row.get("Protocol") or "").strip(),
            ),
        )

    @staticmethod
    def _int(row, column: str, default: int) -> int:
        value = (row.get(column) or "").strip()
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            raise ValidationError(f"{column.lower()} must be an integer, got '{value}'") from None
