from ..normalizer import NormalizedString
from .base import Normalizer


# Unicode 规范化实现 --------------------------------------------------------
class NFD(Normalizer):
    def normalize(self, nstr: NormalizedString) -> None:
        nstr.nfd()


class NFKD(Normalizer):
    def normalize(self, nstr: NormalizedString) -> None:
        nstr.nfkd()


class NFC(Normalizer):
    def normalize(self, nstr: NormalizedString) -> None:
        nstr.nfc()


class NFKC(Normalizer):
    def normalize(self, nstr: NormalizedString) -> None:
        nstr.nfkc()


# NMT 规范化实现 ----------------------------------------------------------
# 直接删除的控制字符
NMT_REMOVED = frozenset(chr(code) for code in (
    0x0001, 0x0002, 0x0003, 0x0004, 0x0005, 0x0006, 0x0007, 0x0008,
    0x000B, 0x000E, 0x000F, 0x0010, 0x0011, 0x0012, 0x0013, 0x0014,
    0x0015, 0x0016, 0x0017, 0x0018, 0x0019, 0x001A, 0x001B, 0x001C,
    0x001D, 0x001E, 0x001F, 0x007F, 0x008F, 0x009F,
))

# 替换成普通空格的特殊空白
NMT_SPACES = frozenset(chr(code) for code in (
    0x0009, 0x000A, 0x000C, 0x000D,
    0x1680, 0x200B, 0x200C, 0x200D, 0x200E, 0x200F,
    0x2028, 0x2029, 0x2581, 0xFEFF, 0xFFFD,
))


def do_nmt(c: str) -> str:
    """处理控制字符和特殊空格，返回空字符串表示删除"""
    if c in NMT_REMOVED:
        return ''
    if c in NMT_SPACES:
        return ' '
    return c


class Nmt(Normalizer):
    def normalize(self, nstr: NormalizedString) -> None:
        nstr.map(do_nmt)
