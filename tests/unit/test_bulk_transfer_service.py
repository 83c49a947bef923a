"""Unit tests for CSV export and import of buyers."""

import csv
import io

import pytest

from lead_intake.application.schemas import BuyerCreate
from lead_intake.application.services import BulkTransferService, BuyerService, HistoryRecorder
from lead_intake.application.services.buyer_csv import EXPORT_HEADERS
from lead_intake.domain.entities import Source
from lead_intake.domain.exceptions import ValidationFailedError

HEADER = ",".join(EXPORT_HEADERS)


def _row(name: str, phone: str, *, tags: str = "", notes: str = "", source: str = "") -> str:
    columns = [
        "",  # id
        name,
        f"{name.split()[0].lower()}@example.com",
        phone,
        "Panchkula",
        "Villa",
        "3",
        "Buy",
        "4000000",
        "6000000",
        "3-6m",
        source,
        "",  # status
        notes,
        tags,
    ]
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="").writerow(columns)
    return buffer.getvalue()


@pytest.fixture
def service(buyer_repo, unit_of_work) -> BulkTransferService:
    return BulkTransferService(buyer_repo, unit_of_work)


@pytest.fixture
def buyer_service(buyer_repo, history_repo) -> BuyerService:
    return BuyerService(buyer_repo, HistoryRecorder(history_repo))


@pytest.mark.asyncio
async def test_partial_import_reports_bad_rows(service, buyer_repo, history_repo, alice):
    text = "\n".join(
        [
            HEADER,
            _row("Anil Sharma", "9811111111"),
            _row("Bina Gupta", "9822222222"),
            _row("Chetan Rao", "12"),
            _row("Divya Nair", "9844444444"),
            _row("Esha Singh", "9855555555"),
        ]
    )

    report = await service.import_csv(alice, text)

    assert report.success == 4
    assert report.failed == 1
    assert report.errors == ["Row 4: phone: Phone must be 10-15 digits"]
    assert report.message == "Import completed. 4 successful, 1 failed."
    assert len(await buyer_repo.get_all()) == 4
    assert len(history_repo.entries) == 4


@pytest.mark.asyncio
async def test_imported_rows_are_owned_by_importer(service, buyer_repo, bob):
    text = "\n".join([HEADER, _row("Farah Khan", "9866666666", tags="hot, , nri ,")])

    report = await service.import_csv(bob, text)

    [buyer] = report.created
    assert buyer.owner_id == bob.id
    assert buyer.source is Source.IMPORT
    assert buyer.tags == ["hot", "nri"]
    assert buyer.created_at == buyer.updated_at


@pytest.mark.asyncio
async def test_row_that_fails_to_save_is_reported(service, buyer_repo, alice):
    buyer_repo.fail_for_phones.add("9822222222")
    text = "\n".join(
        [HEADER, _row("Anil Sharma", "9811111111"), _row("Bina Gupta", "9822222222")]
    )

    report = await service.import_csv(alice, text)

    assert report.success == 1
    assert report.errors == ["Row 3: Failed to save row"]


@pytest.mark.asyncio
async def test_each_valid_row_gets_its_own_scope(service, unit_of_work, alice):
    text = "\n".join(
        [HEADER, _row("Anil Sharma", "9811111111"), _row("Bad", "x"), _row("Bina Gupta", "9822222222")]
    )

    await service.import_csv(alice, text)

    assert unit_of_work.scopes_opened == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", HEADER, HEADER + "\n\n  \n"])
async def test_file_without_data_rows_is_rejected(service, text, alice):
    with pytest.raises(ValidationFailedError) as exc_info:
        await service.import_csv(alice, text)
    assert exc_info.value.message == "CSV file must have header and at least one data row"


@pytest.mark.asyncio
async def test_blank_records_are_skipped_before_numbering(service, alice):
    text = "\n".join([HEADER, "", _row("Anil Sharma", "9811111111"), _row("B", "9833333333")])

    report = await service.import_csv(alice, text)

    assert report.errors == ["Row 3: fullName: Name must be at least 2 characters"]


@pytest.mark.asyncio
async def test_export_is_scoped(service, buyer_service, alice, bob, admin, buyer_payload):
    await buyer_service.create_buyer(BuyerCreate(**buyer_payload), alice)
    await buyer_service.create_buyer(BuyerCreate(**{**buyer_payload, "fullName": "Meena"}), bob)

    own = await service.export_csv(alice)
    everyone = await service.export_csv(admin)

    assert own.row_count == 1
    assert own.filename.startswith("buyers-export-user-owned-")
    assert everyone.row_count == 2
    assert everyone.filename.startswith("buyers-export-admin-all-")
    assert everyone.media_type == "text/csv"


@pytest.mark.asyncio
async def test_export_quotes_and_joins_tags(service, buyer_service, alice, buyer_payload):
    await buyer_service.create_buyer(
        BuyerCreate(**{**buyer_payload, "notes": 'Said "call later", twice'}), alice
    )

    export = await service.export_csv(alice)

    lines = export.content.splitlines()
    assert lines[0] == HEADER
    [record] = list(csv.reader(io.StringIO(export.content)))[1:]
    assert record[13] == 'Said "call later", twice'
    assert record[14] == "hot, nri"
    assert record[15] == alice.id


@pytest.mark.asyncio
async def test_exported_file_can_be_imported_back(service, buyer_service, buyer_repo, alice, bob, buyer_payload):
    original = await buyer_service.create_buyer(BuyerCreate(**buyer_payload), alice)
    export = await service.export_csv(alice)

    report = await service.import_csv(bob, export.content)

    assert report.success == 1
    [copy] = report.created
    assert copy.id != original.id
    assert copy.owner_id == bob.id
    for attr in ("full_name", "email", "phone", "city", "property_type", "bhk", "purpose",
                 "budget_min", "budget_max", "timeline", "source", "notes", "tags"):
        assert getattr(copy, attr) == getattr(original, attr)
    assert len(await buyer_repo.get_all()) == 2


@pytest.mark.asyncio
async def test_byte_order_mark_is_ignored(service, alice):
    text = "\ufeff" + "\n".join([HEADER, _row("Anil Sharma", "9811111111")])

    report = await service.import_csv(alice, text)

    assert report.success == 1
