"""
Bars API Backend - Request Helpers
===================================

Small pure functions shared by the services:

    remove_blank_fields:  {"name": "", "city": "X"} → {"city": "X"}
    require_ownership:    raises OwnershipError unless requester owns record
"""

from typing import Any, Dict

from bars_api.exceptions import OwnershipError


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def remove_blank_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of `payload` without blank values.

    Blank means None, "" or a whitespace-only string. 0 and False are
    real values and are kept. The input dict is not modified.
    """
    return {key: value for key, value in payload.items() if not _is_blank(value)}


def require_ownership(requester: Any, record: Any) -> None:
    """
    Raise OwnershipError unless `record.owner_id` equals `requester.id`.

    Called between the fetch and the write; it must stay synchronous so the
    write is never issued once this has raised.
    """
    if record.owner_id != requester.id:
        raise OwnershipError(
            context={
                "record_id": str(getattr(record, "id", "")),
                "requester_id": str(requester.id),
            }
        )
