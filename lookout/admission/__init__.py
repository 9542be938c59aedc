# lookout/admission/__init__.py
from .filter import is_ignored_request, should_keep, should_keep_batch

__all__ = [
    "is_ignored_request",
    "should_keep",
    "should_keep_batch",
]
