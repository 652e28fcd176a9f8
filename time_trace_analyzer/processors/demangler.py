"""
Best-effort demangling of backend symbol names, memoized per analysis run.
"""

from typing import Callable, Dict, Optional

import itanium_demangler


def decode_itanium(symbol: str) -> Optional[str]:
    """
    Decode an Itanium C++ ABI mangled name.

    Returns:
        Human-readable name, or None if `symbol` is not a mangled name
    """
    node = itanium_demangler.parse(symbol)
    if node is None:
        return None
    return str(node)


class SymbolDemangler:
    """
    Demangles symbol names, decoding each distinct name at most once.

    The cache belongs to the demangler instance; one instance is created per
    analysis run.
    """

    def __init__(self, decoder: Callable[[str], Optional[str]] = decode_itanium):
        self.decoder = decoder
        self.cache: Dict[str, str] = {}

    @staticmethod
    def unwrap(raw: str) -> str:
        """Strip the parentheses the compiler puts around some pass details."""
        return raw.lstrip('(').rstrip(')')

    def demangle(self, raw: str) -> str:
        """
        Return the readable form of `raw`, or the unwrapped name if it cannot be decoded.

        Example:
            "(_Z3fooi)" -> "foo(int)"
        """
        symbol = self.unwrap(raw)

        cached = self.cache.get(symbol)
        if cached is not None:
            return cached

        try:
            demangled = self.decoder(symbol)
        except Exception:
            # The decoder rejects constructs it does not support; keep the raw name
            demangled = None

        result = demangled or symbol
        self.cache[symbol] = result
        return result
