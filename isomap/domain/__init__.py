# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Run options, per-key resolution results and the ordered ISO map document.
# -----------------------------------------------------------------------------

from .models import (
    DEFAULT_OUTPUT,
    DEFAULT_VERSION_KEYS,
    NULL_SENTINEL,
    FailureReason,
    IsoMap,
    ResolutionResult,
    RunOptions,
)

__all__ = [
    "DEFAULT_OUTPUT", "DEFAULT_VERSION_KEYS", "NULL_SENTINEL",
    "FailureReason", "IsoMap", "ResolutionResult", "RunOptions",
]
