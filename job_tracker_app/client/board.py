"""
Client-side view state for the application list.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .compound_sort import order, toggle_priority
from .tracker_client import TrackerClient

logger = logging.getLogger(__name__)

STATUSES = ["Saved", "Applied", "Interview", "Offer", "Rejected"]
SORT_FIELDS = ["appliedDate", "createdAt", "company", "status"]


@dataclass
class SortState:
    """Priority statuses plus the base sort mirrored from the server query."""
    priority_statuses: List[str] = field(default_factory=list)
    sort_field: str = "appliedDate"
    sort_direction: str = "desc"

    def toggle(self, status: str) -> None:
        self.priority_statuses = toggle_priority(self.priority_statuses, status)

    def set_sort(self, sort_field: Optional[str] = None, sort_direction: Optional[str] = None) -> None:
        if sort_field is not None:
            self.sort_field = sort_field if sort_field in SORT_FIELDS else "appliedDate"
        if sort_direction is not None:
            self.sort_direction = "asc" if sort_direction.strip() == "asc" else "desc"

    def query_params(self) -> Dict[str, str]:
        return {"sort_by": self.sort_field, "sort_direction": self.sort_direction}

    def apply(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return order(records, self.priority_statuses, self.sort_field, self.sort_direction)


class ApplicationBoard:
    """
    Loaded listing plus the filter and sort controls that drive it.

    Filter and base-sort changes re-fetch; priority toggles only re-order.
    """

    def __init__(self, client: TrackerClient, sort_state: Optional[SortState] = None):
        self.client = client
        self.sort_state = sort_state or SortState()
        self.filter_statuses: List[str] = []
        self.search: str = ""
        self.records: List[Dict[str, Any]] = []
        self.visible: List[Dict[str, Any]] = []

    def refresh(self) -> List[Dict[str, Any]]:
        self.records = self.client.list_applications(
            statuses=self.filter_statuses,
            q=self.search,
            **self.sort_state.query_params(),
        )
        logger.debug("Loaded %d applications", len(self.records))
        return self._reorder()

    def _reorder(self) -> List[Dict[str, Any]]:
        self.visible = self.sort_state.apply(self.records)
        return self.visible

    def set_filter(self, statuses: Optional[List[str]] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        if statuses is not None:
            self.filter_statuses = list(statuses)
        if search is not None:
            self.search = search
        return self.refresh()

    def set_sort(self, sort_field: Optional[str] = None, sort_direction: Optional[str] = None) -> List[Dict[str, Any]]:
        self.sort_state.set_sort(sort_field, sort_direction)
        return self.refresh()

    def toggle_priority(self, status: str) -> List[Dict[str, Any]]:
        self.sort_state.toggle(status)
        return self._reorder()

    def counts(self) -> Dict[str, int]:
        counts = {status: 0 for status in STATUSES}
        for record in self.records:
            if record.get("status") in counts:
                counts[record["status"]] += 1
        counts["Total"] = len(self.records)
        return counts
