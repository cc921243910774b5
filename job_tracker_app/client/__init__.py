from .board import ApplicationBoard, SortState
from .compound_sort import compound_comparator, order, toggle_priority
from .tracker_client import TrackerClient, TrackerClientError

__all__ = [
    "ApplicationBoard",
    "SortState",
    "TrackerClient",
    "TrackerClientError",
    "compound_comparator",
    "order",
    "toggle_priority",
]
