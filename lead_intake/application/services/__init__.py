from .buyer_service import BuyerDetail, BuyerService
from .bulk_transfer_service import BulkTransferService, CsvExport, ImportReport, RowFailure
from .history_recorder import HistoryRecorder
from .principal_resolver import PrincipalResolver
from .user_admin_service import UserAdminService, UserDeletion

__all__ = [
    "BuyerDetail",
    "BuyerService",
    "BulkTransferService",
    "CsvExport",
    "ImportReport",
    "RowFailure",
    "HistoryRecorder",
    "PrincipalResolver",
    "UserAdminService",
    "UserDeletion",
]
