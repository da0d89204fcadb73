"""
Bangla script character classes shared by the normalizer and the sanitizer.

All values are regular-expression character-class bodies (no brackets) so
they can be combined, e.g. ``f"[{LETTER}]"``.
"""

# Whole Bengali block
LETTER = "\u0980-\u09ff"

# Signs that attach to the preceding base character: candrabindu, anusvara,
# visarga, nukta, vowel signs, virama, au length mark, vocalic vowel signs
DEPENDENT_MARK = "\u0981-\u0983\u09bc\u09be-\u09cc\u09cd\u09d7\u09e2\u09e3"

DIGIT = "\u09e6-\u09ef"

# Zero-width non-joiner / joiner; meaningful inside Bangla conjuncts
JOINER = "\u200c\u200d"

# Zero-width space, word joiner, BOM, soft hyphen
ZERO_WIDTH = "\u200b\u2060\ufeff\u00ad"

NBSP = "\u00a0"
DANDA = "\u0964"
VISARGA = "\u0983"
