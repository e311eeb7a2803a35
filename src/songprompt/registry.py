from .optimizers.base import LanguageOptimizer
from .optimizers.japanese import BasicJapaneseOptimizer

_LANGUAGE_OPTIMIZERS: list[type[LanguageOptimizer]] = [
    BasicJapaneseOptimizer,
]


def get_language_optimizer(language: str) -> LanguageOptimizer | None:
    """Return an instantiated built-in optimizer for *language*.

    Returns None when no built-in optimizer covers the language; most
    languages need no rewriting.
    """
    for cls in _LANGUAGE_OPTIMIZERS:
        if cls.can_handle(language):
            return cls()
    return None
