"""UI-agnostic find/replace and syntax-highlighting engine for text editors."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "highlight",
    "runtime",
    "search",
]

__version__ = "0.1.0"
