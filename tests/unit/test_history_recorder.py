"""Unit tests for the best-effort HistoryRecorder."""

import pytest

from lead_intake.application.services import HistoryRecorder
from lead_intake.domain.entities import (
    BuyerCreated,
    BuyerStatus,
    StatusChanged,
    change_from_diff,
)


@pytest.mark.asyncio
async def test_status_change_noop_when_equal(history_repo):
    recorder = HistoryRecorder(history_repo)

    result = await recorder.record_status_change(
        "b1", "u1", BuyerStatus.CONTACTED, BuyerStatus.CONTACTED
    )

    assert result is None
    assert history_repo.entries == []


@pytest.mark.asyncio
async def test_failure_is_logged_not_raised(history_repo, caplog):
    history_repo.fail = True
    recorder = HistoryRecorder(history_repo)

    with caplog.at_level("WARNING"):
        result = await recorder.record_status_change(
            "b1", "u1", BuyerStatus.NEW, BuyerStatus.DROPPED
        )

    assert result is None
    assert "Failed to log updated history for buyer b1" in caplog.text


@pytest.mark.asyncio
async def test_list_for_returns_newest_first(history_repo):
    recorder = HistoryRecorder(history_repo)
    await recorder.record("b1", "u1", BuyerCreated(snapshot={"fullName": "A"}))
    await recorder.record_status_change("b1", "u1", BuyerStatus.NEW, BuyerStatus.VISITED)
    await recorder.record("b2", "u1", BuyerCreated(snapshot={}))

    entries = await recorder.list_for("b1")

    assert [e.diff["action"] for e in entries] == ["updated", "created"]


def test_diff_round_trips_to_the_tagged_change():
    change = StatusChanged(BuyerStatus.NEW, BuyerStatus.NEGOTIATION)
    assert change_from_diff(change.to_diff()) == change

    created = BuyerCreated(snapshot={"fullName": "Ravi"})
    assert change_from_diff(created.to_diff()) == created

    with pytest.raises(ValueError):
        change_from_diff({"action": "deleted"})
