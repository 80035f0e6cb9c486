from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

# 一个规范化字符对应的原始字符区间，左闭右开
Alignment = Tuple[int, int]


class ChangeKind(Enum):
    CARRIED = auto()    # 延续一个旧的对齐项（字符本身可以被改写）
    INSERTED = auto()   # 新插入的字符，没有自己的原始字符
    MERGED = auto()     # 吸收了 count 个被删除的字符，再加上自己


@dataclass(frozen=True)
class Change:
    """
    transform 的输入单元：新规范化字符串中的一个字符，以及它和旧对齐表的关系

    也可以用一个有符号整数表示（见 from_delta）：0 表示不变，1 表示插入，-N 表示合并了 N 个被删除的字符。
    大于 1 的插入值没有额外含义，统一当作 INSERTED。
    """
    char: str
    kind: ChangeKind = ChangeKind.CARRIED
    count: int = 0

    @classmethod
    def carried(cls, char: str) -> 'Change':
        return cls(char)

    @classmethod
    def inserted(cls, char: str) -> 'Change':
        return cls(char, ChangeKind.INSERTED)

    @classmethod
    def merged(cls, char: str, count: int) -> 'Change':
        return cls(char, ChangeKind.MERGED, count)

    @classmethod
    def from_delta(cls, char: str, delta: int) -> 'Change':
        """兼容旧的整数编码"""
        if delta > 0:
            return cls.inserted(char)
        if delta == 0:
            return cls.carried(char)
        return cls.merged(char, -delta)

    @property
    def delta(self) -> int:
        if self.kind is ChangeKind.INSERTED:
            return 1
        if self.kind is ChangeKind.MERGED:
            return -self.count
        return 0

    @property
    def consumed(self) -> int:
        """这个字符会消耗多少个旧对齐项"""
        if self.kind is ChangeKind.INSERTED:
            return 0
        if self.kind is ChangeKind.MERGED:
            return self.count + 1
        return 1

    def __str__(self) -> str:
        return f"Change(char={self.char!r}, kind={self.kind.name}, count={self.count})"


if __name__ == '__main__':
    print(Change.from_delta('é', 0))    # CARRIED
    print(Change.from_delta('\u0301', 3))   # INSERTED，3 被当作 1
    print(Change.from_delta('o', -2).consumed)  # 3
