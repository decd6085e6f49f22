import re
from typing import List, Mapping

MACRO_PATTERN = re.compile(r'\$([A-Za-z0-9_]+|\{[A-Za-z0-9_.]+\})')
PATTERN_SEPARATORS = re.compile(r'[,\s]+')


def split_patterns(patterns) -> List[str]:
    """
    Splits a comma and/or whitespace separated list of patterns into individual tokens.
    None and blank strings produce an empty list.
    """
    if not patterns:
        return []
    return [token for token in PATTERN_SEPARATORS.split(patterns) if token]


def replace_macro(text, variables: Mapping[str, str]):
    """
    Replaces `$NAME` and `${NAME}` references in the text with values from the provided mapping.
    References to names missing in the mapping are left untouched.
    """
    if not text:
        return text

    def resolve(match):
        key = match.group(1)
        if key.startswith('{'):
            key = key[1:-1]
        value = variables.get(key)
        return match.group(0) if value is None else str(value)

    return MACRO_PATTERN.sub(resolve, text)
