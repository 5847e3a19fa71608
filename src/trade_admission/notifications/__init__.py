"""Admission notifications."""

from .notifier import AdmissionNotifier, TradeResultNotification

__all__ = [
    "AdmissionNotifier",
    "TradeResultNotification",
]
