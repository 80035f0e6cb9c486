import copy
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union, Optional, List, Tuple, Iterable, Callable

from .errors import PreconditionError
from .mod import Alignment, Change, ChangeKind
from . import unicode

logger = logging.getLogger(__name__)

# range(1, 4)、slice(1, 4)、(1, 4) 都表示左闭右开的 [1, 4)
Bounds = Union[range, slice, Tuple[int, int]]


class OffsetReferential(Enum):
    ORIGINAL = auto()   # 原始str的偏移参考系
    NORMALIZED = auto() # norm str的偏移参考系
# range_orig = Range.Original(slice(3, 5))  # 基于原始字符串的3-5字符范围
# range_norm = Range.Normalized(range(1, 4))  # 基于规范化字符串的1-4字符范围


class Range:
    '''
    统一处理不同参考系的查询范围
    通过referential明确所属参考系，只用于查询，不会被保存
    '''
    def __init__(self, referential: OffsetReferential, bounds: Bounds):
        self.referential = referential
        self.bounds = bounds

    @classmethod
    def Original(cls, bounds: Bounds):
        return cls(OffsetReferential.ORIGINAL, bounds)

    @classmethod
    def Normalized(cls, bounds: Bounds):
        return cls(OffsetReferential.NORMALIZED, bounds)

    def __repr__(self):
        return f"Range({self.referential.name if isinstance(self.referential, OffsetReferential) else self.referential!r}, {self.bounds!r})"


def _resolve_bounds(bounds: Bounds, max_len: int) -> Optional[Tuple[int, int]]:
    """统一解析 range/slice/tuple 的边界，越界、反向或者空区间返回None"""
    if isinstance(bounds, slice):
        if bounds.step not in (None, 1):
            raise PreconditionError("Only step=1 slices are supported")
        start = bounds.start if bounds.start is not None else 0
        stop = bounds.stop if bounds.stop is not None else max_len
    elif isinstance(bounds, range):
        if bounds.step != 1:
            raise PreconditionError("Only step=1 ranges are supported")
        start, stop = bounds.start, bounds.stop
    elif isinstance(bounds, tuple) and len(bounds) == 2:
        start, stop = bounds
    else:
        raise TypeError("Unsupported bounds type: {}".format(type(bounds).__name__))

    if start < 0 or stop > max_len or start >= stop:
        return None
    return start, stop


def _check_referential(rng: Range) -> None:
    if not isinstance(rng, Range) or not isinstance(rng.referential, OffsetReferential):
        raise PreconditionError("Invalid referential: {!r}".format(getattr(rng, "referential", rng)))


@dataclass
class NormalizedString:
    """
    同时保存原始字符串和规范化字符串，并用 alignments 维护两者之间的字符级对齐。

    alignments:
        核心作用：
            记录规范化字符串每个字符(code point)对应原始字符串的字符范围，实现双向偏移转换。
        技术细节：
            结构：列表中的每个元素是二元组 (start, end)，左闭右开
            索引：每个元素对应规范化字符串的一个字符（不是字节）
            不变量：len(alignments) == len(normalized)，任何修改操作之后都成立
        示例说明：
            原始字符串："café"
            规范化操作：NFD分解后得到"cafe\\u0301"
            此时alignments的结构：
                [
                    (0, 1),  # 'c'
                    (1, 2),  # 'a'
                    (2, 3),  # 'f'
                    (3, 4),  # 'e' -> 原始的 'é'
                    (3, 4),  # 组合符号 -> 也指向原始的 'é'
                ]

    所有修改操作都是原地修改，并返回 self 以便链式调用：
        NormalizedString("  Héllo  ").nfd().remove_accents().lowercase().strip()
    需要两个独立分支时先 copy()。
    """
    original: str
    normalized: str
    alignments: List[Alignment]

    def __init__(self, sequence: str):
        self.original = sequence
        self.normalized = sequence
        self.alignments = [(i, i + 1) for i in range(len(sequence))]

    # region Core Methods
    def get(self) -> str:
        return self.normalized

    def get_original(self) -> str:
        return self.original

    @classmethod
    def set(cls,
            sequence: str,
            normalized: str,
            alignments: List[Alignment]) -> 'NormalizedString':
        if len(normalized) != len(alignments):
            raise PreconditionError(
                "alignments must have one entry per normalized char, got {} for {}".format(
                    len(alignments), len(normalized))
            )
        new = cls(sequence)
        new.normalized = normalized
        new.alignments = list(alignments)
        return new

    def copy(self) -> 'NormalizedString':
        return copy.deepcopy(self)

    # endregion

    # region Transformation Methods
    def transform(self, changes: Iterable[Change], initial_offset: int = 0) -> 'NormalizedString':
        """
        用一组 Change 重写规范化字符串，同时更新对齐信息

        initial_offset: 旧对齐表开头有多少个字符在新字符串里没有任何对应（例如被 lstrip 掉的空白），直接丢弃。
        旧对齐表中最后一个 Change 之后剩下的项同样丢弃。

        游标 cursor 指向旧对齐表中下一个还没被消耗的项：
            CARRIED   -> 取 alignments[cursor]，cursor += 1
            INSERTED  -> 复制前一个新字符的对齐；在最前面插入时是 (0, 0)
            MERGED(n) -> alignments[cursor:cursor+n+1] 的包围区间 (min start, max end)，cursor += n+1
        """
        prior = self.alignments
        if initial_offset < 0 or initial_offset > len(prior):
            raise PreconditionError(
                "initial_offset must be within [0, {}], got {}".format(len(prior), initial_offset)
            )

        new_norm = []
        new_align = []
        cursor = initial_offset

        for i, change in enumerate(changes):
            if len(change.char) != 1:
                raise PreconditionError("Change #{} must carry exactly one char, got {!r}".format(i, change.char))

            if change.kind is ChangeKind.INSERTED:
                align = new_align[-1] if new_align else (0, 0)
            else:
                if change.kind is ChangeKind.MERGED and change.count < 1:
                    raise PreconditionError("Change #{} merges {} chars, must be at least 1".format(i, change.count))
                end = cursor + change.consumed
                if end > len(prior):
                    raise PreconditionError(
                        "Change #{} needs alignments up to {}, only {} available".format(i, end, len(prior))
                    )
                if change.kind is ChangeKind.CARRIED:
                    align = prior[cursor]
                else:
                    merged = prior[cursor:end]
                    align = (min(start for start, _ in merged), max(stop for _, stop in merged))
                cursor = end

            new_norm.append(change.char)
            new_align.append(align)

        self.normalized = ''.join(new_norm)
        self.alignments = new_align
        return self

    def nfd(self) -> 'NormalizedString':
        return self._apply_unicode_normalization('NFD')

    def nfkd(self) -> 'NormalizedString':
        return self._apply_unicode_normalization('NFKD')

    def nfc(self) -> 'NormalizedString':
        return self._apply_unicode_normalization('NFC')

    def nfkc(self) -> 'NormalizedString':
        return self._apply_unicode_normalization('NFKC')

    def normalize(self, form: str) -> 'NormalizedString':
        """按名字应用规范化形式：'nfd'/'NFC'/..."""
        return self._apply_unicode_normalization(form)

    def _apply_unicode_normalization(self, form: str) -> 'NormalizedString':
        """应用Unicode规范化并维护字符级对齐"""
        form = unicode.check_form(form)
        if unicode.is_normalized(form, self.normalized):
            logger.debug("%s: already normalized, nothing to do", form)
            return self

        changes = []
        for source, target in unicode.segment_clusters(form, self.normalized):
            changes.extend(_cluster_changes(source, target))
        return self.transform(changes)

    def map(self, func: Callable[[str], str]) -> 'NormalizedString':
        """
        按字符映射，func 返回 0 个、1 个或多个字符

        多个字符：第一个延续原来的对齐，其余视为插入。
        空字符串：该字符被删除，处理方式和 filter 相同。
        """
        changes = []
        removed = 0
        initial_offset = 0
        last_carrier = None     # 最后一个消耗旧对齐项的 Change 的下标

        for char in self.normalized:
            new_chars = func(char)
            if not new_chars:
                removed += 1
                continue

            if removed and not changes:
                # 开头被删除的字符没有前面的字符可以合并
                initial_offset = removed
                first = Change.carried(new_chars[0])
            elif removed:
                first = Change.merged(new_chars[0], removed)
            else:
                first = Change.carried(new_chars[0])
            removed = 0

            last_carrier = len(changes)
            changes.append(first)
            changes.extend(Change.inserted(c) for c in new_chars[1:])

        if removed and last_carrier is not None:
            # 末尾被删除的字符合并到最后一个保留的字符
            carrier = changes[last_carrier]
            changes[last_carrier] = Change.merged(carrier.char, carrier.count + removed)

        return self.transform(changes, initial_offset)

    def filter(self, keep: Union[str, Callable[[str], bool]]) -> 'NormalizedString':
        """
        过滤字符

        keep 是单个字符时删除所有该字符；是函数时只保留 keep(c) 为 True 的字符。
        被删除的一段字符合并到它后面第一个保留的字符：
            NormalizedString("hello").filter("l") -> "heo"，'o' 对应原始的 [2, 5)
        开头的一段通过 initial_offset 丢弃，结尾的一段合并到最后一个保留的字符。
        """
        if isinstance(keep, str):
            if len(keep) != 1:
                raise PreconditionError("filter expects a single char, got {!r}".format(keep))
            target = keep
            predicate = lambda c: c != target
        else:
            predicate = keep
        return self.map(lambda c: c if predicate(c) else '')

    def lowercase(self) -> 'NormalizedString':
        """小写化并维护对齐"""
        return self.map(lambda c: c.lower())

    def uppercase(self) -> 'NormalizedString':
        """大写化并维护对齐"""
        return self.map(lambda c: c.upper())

    def remove_accents(self) -> 'NormalizedString':
        """
        删除所有非间距组合标记(Mn)

        被删除的标记合并到它前面的基础字符上，所以 "e\\u0301" -> "e" 之后 'e' 仍然覆盖原来的整个簇。
        开头没有基础字符的标记通过 initial_offset 丢弃。
        """
        changes = []
        initial_offset = 0
        for char in self.normalized:
            if unicode.is_nonspacing_mark(char):
                if changes:
                    last = changes[-1]
                    changes[-1] = Change.merged(last.char, last.count + 1)
                else:
                    initial_offset += 1
            else:
                changes.append(Change.carried(char))
        return self.transform(changes, initial_offset)

    def lstrip(self) -> 'NormalizedString':
        """只去除左侧空白"""
        return self._lrstrip(True, False)

    def rstrip(self) -> 'NormalizedString':
        """只去除右侧空白"""
        return self._lrstrip(False, True)

    def strip(self) -> 'NormalizedString':
        return self._lrstrip(True, True)

    def _lrstrip(self, left: bool, right: bool) -> 'NormalizedString':
        chars = self.normalized
        leading = 0
        trailing = 0

        if left:
            while leading < len(chars) and unicode.is_whitespace(chars[leading]):
                leading += 1
        if right:
            while trailing < len(chars) - leading and unicode.is_whitespace(chars[len(chars) - 1 - trailing]):
                trailing += 1

        if leading == 0 and trailing == 0:
            return self

        logger.debug("strip: %d leading, %d trailing whitespace chars", leading, trailing)
        # 左侧空白通过 initial_offset 丢弃，右侧空白是剩下的尾部，transform 会直接丢弃
        kept = chars[leading:len(chars) - trailing]
        return self.transform((Change.carried(c) for c in kept), leading)

    def truncate(self, at: int) -> 'NormalizedString':
        """
        只保留规范化字符串的前 at 个字符，后面的部分直接丢弃（不会返回）

        原始字符串在最后一个保留字符的对齐终点处截断。
        保留的对齐项原样保留，不会重建成恒等映射 (i, i + 1)：两者只在没有做过任何变换时相同。
        """
        if not isinstance(at, int) or at < 0:
            raise PreconditionError("Truncation point must be a non-negative integer, got {!r}".format(at))
        if at > len(self.normalized):
            raise PreconditionError(
                "Truncation point {} is beyond the normalized length {}".format(at, len(self.normalized))
            )

        self.normalized = self.normalized[:at]
        self.alignments = self.alignments[:at]
        original_at = self.alignments[-1][1] if self.alignments else 0
        self.original = self.original[:original_at]
        logger.debug("truncate: kept %d normalized / %d original chars", at, original_at)
        return self

    def merge_with(self, other: 'NormalizedString') -> 'NormalizedString':
        """把 other 拼接到后面，other 本身不会被修改"""
        shift = len(self.original)
        self.original += other.original
        self.normalized += other.normalized
        self.alignments = self.alignments + [(start + shift, end + shift) for start, end in other.alignments]
        return self

    # endregion

    # region 偏移转换与取子串
    def convert_offsets(self, rng: Range) -> Optional[range]:
        """
        把一个参考系中的范围转换到另一个参考系，无效的范围返回 None

        ORIGINAL -> NORMALIZED：线性扫描，返回能完整覆盖该原始范围的最小规范化范围
        NORMALIZED -> ORIGINAL：直接查表，range(alignments[start][0], alignments[stop - 1][1])
        """
        _check_referential(rng)

        if rng.referential == OffsetReferential.ORIGINAL:
            resolved = _resolve_bounds(rng.bounds, len(self.original))
            if resolved is None:
                return None
            original_start, original_end = resolved

            first = last = None
            for i, (start, end) in enumerate(self.alignments):
                if start >= original_end:
                    continue
                # 零宽对齐（开头插入的字符）只在落在范围起点时计入
                if end > original_start or start == end == original_start:
                    if first is None:
                        first = i
                    last = i
            if first is None:
                return None
            return range(first, last + 1)

        resolved = _resolve_bounds(rng.bounds, len(self.alignments))
        if resolved is None:
            return None
        start, stop = resolved
        return range(self.alignments[start][0], self.alignments[stop - 1][1])

    def original_offsets(self, bounds: Bounds) -> Optional[range]:
        """
        在对齐表中找出所有 span 完全落在 bounds 内的项，返回从第一个到最后一个的原始范围

        相当于把一个原始坐标的窗口向内收缩到规范化字符的边界。
        超出对齐表整体覆盖范围时返回 None。
        """
        if not self.alignments:
            return None
        covered_start = self.alignments[0][0]
        covered_end = self.alignments[-1][1]
        resolved = _resolve_bounds(bounds, covered_end)
        if resolved is None:
            return None
        start, stop = resolved
        if start < covered_start:
            return None

        selected = [(a_start, a_end) for a_start, a_end in self.alignments if a_start >= start and a_end <= stop]
        if not selected:
            return None
        return range(selected[0][0], selected[-1][1])

    def get_range(self, rng: Range) -> str:
        """
        根据范围类型获取规范化字符串的对应子串，范围无效时返回空字符串
        """
        _check_referential(rng)
        if rng.referential == OffsetReferential.ORIGINAL:
            converted = self.convert_offsets(rng)
            if converted is None:
                return ''
            return get_range_of(self.normalized, converted)
        return get_range_of(self.normalized, rng.bounds)

    def get_range_original(self, rng: Range) -> str:
        """获取原始字符串的对应子串，范围无效时返回空字符串"""
        _check_referential(rng)
        if rng.referential == OffsetReferential.NORMALIZED:
            converted = self.convert_offsets(rng)
            if converted is None:
                return ''
            return get_range_of(self.original, converted)
        return get_range_of(self.original, rng.bounds)
    # endregion

    def __len__(self) -> int:
        return len(self.normalized)

    def len(self) -> int:
        """返回字符数，不是字节数"""
        return len(self.normalized)

    def len_original(self) -> int:
        """返回字符数，不是字节数"""
        return len(self.original)

    def is_empty(self):
        return len(self.normalized) == 0


def _cluster_changes(source: str, target: str) -> List[Change]:
    """一个规范化簇：source 有 m 个字符，规范化后 target 有 k 个字符"""
    m, k = len(source), len(target)
    if k >= m:
        # 分解（或一一对应）：前 m 个字符延续原来的对齐，多出来的是插入
        return [Change.carried(c) for c in target[:m]] + [Change.inserted(c) for c in target[m:]]
    # 组合：第一个字符吸收被合并掉的 m - k 个字符
    return [Change.merged(target[0], m - k)] + [Change.carried(c) for c in target[1:]]


# region Utility Functions
def get_range_of(s: str, rng: Bounds) -> str:
    """按字符下标取子串，越界、反向或者空区间返回空字符串"""
    resolved = _resolve_bounds(rng, len(s))
    if resolved is None:
        return ''
    start, stop = resolved
    return s[start:stop]
# endregion


if __name__ == '__main__':
    print("+----------------- nfd ----------------+")
    ns = NormalizedString("café")
    ns.nfd()
    print(f"str: {ns.get()!r}, alignment: {ns.alignments}")   # [(0, 1), (1, 2), (2, 3), (3, 4), (3, 4)]

    print("+----------------- filter ----------------+")
    ns = NormalizedString("a1b2c3").filter(lambda c: not c.isdigit())
    print(f"str: {ns.get()}, alignment: {ns.alignments}")  # abc    [(0, 1), (1, 3), (3, 6)]

    print("+----------------- original_range ----------------+")
    ns = NormalizedString("Hello_______ World!")
    ns.filter('_').lowercase()
    print(ns.get_range_original(Range.Normalized(range(0, 5))))    # Hello
