import random
import string
import unicodedata
from typing import Optional

MASK_CHAR = "_"

CN_PUNCTUATION = frozenset(
    "！？｡＂＃＄％＆＇（）＊＋，－／：；＜＝＞＠［＼］＾＿｀｛｜｝～"
    "｟｠｢｣､、〃》「」『』【】〔〕〖〗〘〙〚〛〜〝〞〟〰〾〿–—‘’‛“”„‟…‧﹏"
    "。《〈〉·"
)
_KEEP_PUNCTUATION = CN_PUNCTUATION | frozenset(string.punctuation)

# Recitation levels: share of characters hidden, in percent.
MASK_LEVELS = {
    "无": 0,
    "轻": 30,
    "中": 60,
    "重": 80,
    "全": 100,
}
MASK_LEVEL_ALIASES = {
    "none": "无",
    "light": "轻",
    "medium": "中",
    "heavy": "重",
    "full": "全",
}


def resolve_mask_level(level: str) -> int:
    """Return the masking percentage for a level label or its English alias."""
    key = MASK_LEVEL_ALIASES.get(level.strip().lower(), level.strip())
    if key not in MASK_LEVELS:
        raise ValueError(f"Unknown mask level: {level!r}")
    return MASK_LEVELS[key]


def _maskable(ch: str) -> bool:
    if ch in _KEEP_PUNCTUATION or ch.isspace():
        return False
    return not unicodedata.category(ch).startswith("C")


def mask_content(text: str, level: int, rng: Optional[random.Random] = None) -> str:
    """
    Hide roughly ``level`` percent of the characters of ``text`` for recitation.

    Punctuation, whitespace and control characters are always kept so the
    shape of the text stays readable.
    """
    if not text or level <= 0:
        return text or ""
    rng = rng or random.Random()
    masked: list[str] = []
    for ch in text:
        if _maskable(ch) and rng.random() * 100 < level:
            masked.append(MASK_CHAR)
        else:
            masked.append(ch)
    return "".join(masked)
