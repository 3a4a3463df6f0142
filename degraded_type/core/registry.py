# /degraded_type/core/registry.py

from typing import Callable, Dict

GLYPH_FALLBACKS: Dict[str, Callable] = {}

class MissingGlyphError(LookupError):
    """Raised when a character has no glyph and the active policy refuses to substitute one."""
    def __init__(self, char: str):
        super().__init__(f"No glyph for character {char!r} (U+{ord(char):04X})" if len(char) == 1 else f"No glyph for {char!r}")
        self.char = char

def register_glyph_fallback(name: str):
    """Decorator to register a new missing-glyph policy."""
    def decorator(func: Callable):
        if name in GLYPH_FALLBACKS:
            raise ValueError(f"Glyph fallback '{name}' is already registered.")
        GLYPH_FALLBACKS[name] = func
        return func
    return decorator

def get_glyph_fallback(name: str) -> Callable:
    try:
        return GLYPH_FALLBACKS[name]
    except KeyError:
        raise ValueError(f"Unknown glyph fallback '{name}'. Available: {sorted(GLYPH_FALLBACKS)}") from None
