from ..normalizer import NormalizedString
from .base import Normalizer


class Strip(Normalizer):
    strip_left: bool
    strip_right: bool

    def __init__(self,
                 strip_left: bool = True,
                 strip_right: bool = True):
        self.strip_left = strip_left
        self.strip_right = strip_right

    def normalize(self, normalized: NormalizedString):
        if self.strip_left and self.strip_right:
            normalized.strip()
        elif self.strip_left:
            normalized.lstrip()
        elif self.strip_right:
            normalized.rstrip()

    def __repr__(self):
        return f"Strip(strip_left={self.strip_left}, strip_right={self.strip_right})"


class StripAccents(Normalizer):
    """Removes non-spacing marks. Usually used after :class:`NFD`."""
    def normalize(self, normalized: NormalizedString):
        normalized.remove_accents()
