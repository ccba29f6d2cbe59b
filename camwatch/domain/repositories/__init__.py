from .remote_store import (
    ChangeCallback,
    ChangeEvent,
    ChangeOperation,
    Filter,
    Identity,
    Order,
    Record,
    RemoteStore,
    StoreSubscription,
    filters_match,
)

__all__ = [
    "ChangeCallback",
    "ChangeEvent",
    "ChangeOperation",
    "Filter",
    "Identity",
    "Order",
    "Record",
    "RemoteStore",
    "StoreSubscription",
    "filters_match",
]
