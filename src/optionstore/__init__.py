"""optionstore.

Validated key-value option store for embedding in configuration holders.

Every read and write is gated by pluggable read/write validator callbacks;
bulk get/set, multi-key filtering and an attribute-style overlay are built on
top of a single presence check.
"""

from optionstore.core.exceptions import (
    OptionStoreException,
    RejectedWriteError,
    RejectionPolicy,
    StoreConfigError,
)
from optionstore.core.overlay import OptionOverlayMixin
from optionstore.core.store import KeyState, OptionStore, SetResult, ValidatorBinding
from optionstore.factory import build_store
from optionstore.models.store_config import StoreConfig, ValidatorRef

__version__ = "0.1.0"

__all__ = [
    "OptionStore",
    "OptionOverlayMixin",
    "ValidatorBinding",
    "KeyState",
    "SetResult",
    "RejectionPolicy",
    "OptionStoreException",
    "RejectedWriteError",
    "StoreConfigError",
    "StoreConfig",
    "ValidatorRef",
    "build_store",
]
