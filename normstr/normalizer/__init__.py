from .normalizer import NormalizedString, OffsetReferential, Range, get_range_of
from .mod import Alignment, Change, ChangeKind
from .errors import PreconditionError
