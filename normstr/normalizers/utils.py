from typing import Callable, List, Union

from ..normalizer import NormalizedString
from .base import Normalizer


class Sequence(Normalizer):
    """Apply a list of normalizers one after the other, on the same :class:`NormalizedString`."""
    def __init__(self, normalizers: List[Normalizer]):
        self.normalizers = list(normalizers)

    def normalize(self, normalized: NormalizedString):
        for normalizer in self.normalizers:
            normalizer.normalize(normalized)

    def __len__(self):
        return len(self.normalizers)

    def __getitem__(self, index):
        return self.normalizers[index]

    def __repr__(self):
        return "Sequence([{}])".format(", ".join(repr(n) for n in self.normalizers))


class Lowercase(Normalizer):
    def normalize(self, normalized: NormalizedString):
        normalized.lowercase()


class Uppercase(Normalizer):
    def normalize(self, normalized: NormalizedString):
        normalized.uppercase()


class Filter(Normalizer):
    """
    Remove chars from the string

    Args:
        char: remove every occurrence of this single char
        predicate: keep only the chars for which it returns True (exclusive with ``char``)
    """
    def __init__(self, char: str = None, predicate: Callable[[str], bool] = None):
        if (char is None) == (predicate is None):
            raise ValueError("Filter needs exactly one of `char` or `predicate`")
        self.char = char
        self.predicate = predicate

    def normalize(self, normalized: NormalizedString):
        keep: Union[str, Callable[[str], bool]] = self.char if self.char is not None else self.predicate
        normalized.filter(keep)

    def __repr__(self):
        if self.char is not None:
            return f"Filter(char={self.char!r})"
        return f"Filter(predicate={self.predicate!r})"


if __name__ == '__main__':
    from .unicode import NFD
    from .strip import StripAccents
    normalizer = Sequence([NFD(), StripAccents(), Lowercase()])
    ns = NormalizedString("Héllò hôw are ü?")
    normalizer.normalize(ns)
    print(f"str: {ns.get()}, alignments: {ns.alignments}")
    print(len(ns.get()), len(ns.alignments))
