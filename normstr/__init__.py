from .normalizer import (
    NormalizedString,
    OffsetReferential,
    Range,
    Change,
    ChangeKind,
    Alignment,
    PreconditionError,
    get_range_of,
)
