"""CSV export and import of buyer records.

Export is scoped by the access policy (admins see everything, other users
their own records). Import is a fold over the data rows: each row is
validated and written in its own transaction, so one bad row never aborts
the batch and rows written before a failure stay committed.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from lead_intake.application.interfaces import BuyerRepository, BuyerUnitOfWork
from lead_intake.application.schemas.buyer import BuyerImportRow
from lead_intake.application.schemas.validation import parse_model
from lead_intake.application.services.buyer_csv import (
    parse_data_rows,
    row_to_payload,
    serialize_buyers,
)
from lead_intake.application.services.history_recorder import HistoryRecorder
from lead_intake.domain import access_policy
from lead_intake.domain.entities import Buyer, BuyerStatus, Principal
from lead_intake.domain.exceptions import StoreUnavailableError, ValidationFailedError

logger = logging.getLogger(__name__)


@dataclass
class CsvExport:
    content: str
    filename: str
    row_count: int
    media_type: str = "text/csv"


@dataclass(frozen=True)
class RowFailure:
    """Why a single import row was rejected."""

    row_number: int
    message: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.message}"


@dataclass
class ImportReport:
    created: list[Buyer] = field(default_factory=list)
    failures: list[RowFailure] = field(default_factory=list)

    @property
    def success(self) -> int:
        return len(self.created)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def errors(self) -> list[str]:
        return [str(f) for f in self.failures]

    @property
    def message(self) -> str:
        return f"Import completed. {self.success} successful, {self.failed} failed."


class BulkTransferService:
    """Moves buyers in and out of the system as CSV text."""

    def __init__(self, repository: BuyerRepository, unit_of_work: BuyerUnitOfWork):
        self._repository = repository
        self._unit_of_work = unit_of_work

    async def export_csv(self, principal: Principal) -> CsvExport:
        buyers = await self._repository.get_all(
            owner_id=access_policy.list_scope_owner_id(principal)
        )
        scope = access_policy.export_scope_label(principal)
        today = datetime.now(timezone.utc).date().isoformat()
        logger.info("Exporting %d buyers for %s (%s)", len(buyers), principal.email, scope)
        return CsvExport(
            content=serialize_buyers(buyers),
            filename=f"buyers-export-{scope}-{today}.csv",
            row_count=len(buyers),
        )

    async def import_csv(self, principal: Principal, text: str) -> ImportReport:
        """Import every data row of ``text`` as a buyer owned by ``principal``.

        Raises ``ValidationFailedError`` before touching storage when the
        file has no data rows.
        """
        rows = parse_data_rows(text)
        report = ImportReport()

        for row_number, columns in rows:
            try:
                payload = parse_model(BuyerImportRow, row_to_payload(columns))
            except ValidationFailedError as exc:
                report.failures.append(RowFailure(row_number, exc.summary()))
                logger.info("Import row %d rejected: %s", row_number, exc.summary())
                continue

            try:
                created = await self._insert_row(payload, principal)
            except StoreUnavailableError as exc:
                logger.error("Import row %d failed to persist: %s", row_number, exc.cause)
                report.failures.append(RowFailure(row_number, "Failed to save row"))
                continue
            report.created.append(created)

        logger.info(
            "Import by %s finished: %d successful, %d failed",
            principal.email,
            report.success,
            report.failed,
        )
        return report

    async def _insert_row(self, payload: BuyerImportRow, principal: Principal) -> Buyer:
        buyer = Buyer(**payload.to_fields(), owner_id=principal.id, status=BuyerStatus.NEW)
        buyer.updated_at = buyer.created_at
        async with self._unit_of_work.begin() as scope:
            created = await scope.buyers.create(buyer)
            await HistoryRecorder(scope.history).record_created(created, principal.id)
        return created
