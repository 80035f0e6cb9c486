from ..normalizer import NormalizedString


class Normalizer:
    """
    Base class for all normalizers

    This class is not supposed to be instantiated directly. Subclasses implement
    :meth:`normalize`, which rewrites a :class:`~normstr.NormalizedString` in-place.
    """
    def normalize(self, normalized: NormalizedString) -> None:
        """
        Normalize a :class:`~normstr.NormalizedString` in-place

        This method allows to modify a :class:`~normstr.NormalizedString` to
        keep track of the alignment information. If you just want to see the result
        of the normalization on a raw string, you can use
        :meth:`~normstr.normalizers.Normalizer.normalize_str`

        Args:
            normalized (:class:`~normstr.NormalizedString`):
                The normalized string on which to apply this
                :class:`~normstr.normalizers.Normalizer`
        """
        raise NotImplementedError

    def normalize_str(self, sequence: str) -> str:
        """
        Normalize the given string

        This method provides a way to visualize the effect of a
        :class:`~normstr.normalizers.Normalizer` but it does not keep track of the alignment
        information. If you need to get/convert offsets, you can use
        :meth:`~normstr.normalizers.Normalizer.normalize`

        Args:
            sequence (:obj:`str`):
                A string to normalize

        Returns:
            :obj:`str`: A string after normalization
        """
        nstr = NormalizedString(sequence)
        self.normalize(nstr)
        return nstr.get()

    def __repr__(self):
        return f"{type(self).__name__}()"
