import logging
import unicodedata
from typing import List, Tuple

from .errors import PreconditionError

logger = logging.getLogger(__name__)

FORMS = ("NFC", "NFD", "NFKC", "NFKD")


def check_form(form: str) -> str:
    name = form.upper() if isinstance(form, str) else form
    if name not in FORMS:
        raise PreconditionError(
            "{} is not a known unicode normalization form. Available are {}".format(form, FORMS)
        )
    return name


def is_normalized(form: str, text: str) -> bool:
    return unicodedata.is_normalized(check_form(form), text)


def is_starter(char: str) -> bool:
    return unicodedata.combining(char) == 0


def is_nonspacing_mark(char: str) -> bool:
    """Mn: 非间距组合标记（重音等）"""
    return unicodedata.category(char) == "Mn"


# str.isspace 把信息分隔符 U+001C..U+001F 也当作空白，Unicode 的 White_Space 属性不包含它们
INFORMATION_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_whitespace(char: str) -> bool:
    """Unicode White_Space 属性"""
    return char.isspace() and char not in INFORMATION_SEPARATORS


def segment_clusters(form: str, text: str) -> List[Tuple[str, str]]:
    """
    把text切成规范化簇，返回 [(原簇, 规范化后的簇), ...]

    簇 = 一个 starter 加上后面紧跟的 non-starter（组合标记）。
    相邻两个簇如果分开规范化和合起来规范化的结果不同（例如韩文字母 ᄀ + ᅡ -> 가），就合并成一个簇。
    所有簇的结果拼起来一定等于 unicodedata.normalize(form, text)。

    例如 segment_clusters("NFD", "\\u00e9!") == [("\\u00e9", "e\\u0301"), ("!", "!")]
    """
    form = check_form(form)
    if not text:
        return []

    # 第一步：按 starter 切分
    chunks = []
    start = 0
    for i in range(1, len(text)):
        if is_starter(text[i]):
            chunks.append(text[start:i])
            start = i
    chunks.append(text[start:])

    # 第二步：合并互相影响的相邻簇
    clusters = []
    pending, pending_out = chunks[0], unicodedata.normalize(form, chunks[0])
    for chunk in chunks[1:]:
        out = unicodedata.normalize(form, chunk)
        joined = pending + chunk
        joined_out = unicodedata.normalize(form, joined)
        if joined_out == pending_out + out:
            clusters.append((pending, pending_out))
            pending, pending_out = chunk, out
        else:
            pending, pending_out = joined, joined_out
    clusters.append((pending, pending_out))

    expected = unicodedata.normalize(form, text)
    if ''.join(out for _, out in clusters) != expected:
        # 极少见：跨越多个簇的重排，退化成整个字符串一个簇
        logger.warning("Could not segment %r into %s clusters, using a single cluster", text, form)
        return [(text, expected)]
    return clusters
