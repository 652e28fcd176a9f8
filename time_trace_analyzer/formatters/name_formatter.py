"""
Shortening of long symbol and path names for tabular display.
"""

MAX_NAME_LENGTH = 100
HEAD_LENGTH = 24
ELLIPSIS = "..."


def shorten_name(name: str, max_length: int = MAX_NAME_LENGTH, head_length: int = HEAD_LENGTH) -> str:
    """
    Replace the middle of an overlong name with "...".

    The beginning (usually the namespace or top directory) and the end (the
    function signature or file name) stay readable.

    Example:
        "std::__1::basic_string<...very long...>::append(char const*)" keeps its
        first 24 characters and as much of its tail as fits into 100 characters.
    """
    if len(name) <= max_length:
        return name
    tail_length = max_length - head_length - len(ELLIPSIS)
    return name[:head_length] + ELLIPSIS + name[len(name) - tail_length:]
