"""Top-level package for normalign.

This package normalizes text while tracking, for every resulting character,
the byte span of the original input it descends from. The main entry points
are `NormalizedString` and `NormalizationPipeline`.
"""

from loguru import logger

from .errors import (
    CallbackError,
    ContractViolation,
    HandleExpired,
    NormalizationError,
    PatternError,
    PipelineStepError,
    RangeError,
)
from .pipeline import NormalizationPipeline
from .text import (
    CanonicalForm,
    NormalizedString,
    NormalizedStringRefMut,
    Regex,
    SplitDelimiterBehavior,
    borrow,
)

logger.disable("normalign")

__all__ = [
    "NormalizedString",
    "NormalizedStringRefMut",
    "NormalizationPipeline",
    "borrow",
    "Regex",
    "SplitDelimiterBehavior",
    "CanonicalForm",
    "NormalizationError",
    "RangeError",
    "PatternError",
    "CallbackError",
    "ContractViolation",
    "HandleExpired",
    "PipelineStepError",
    "__version__",
]

__version__ = "0.1.0"
