from .wordlist import WordList, load_bundled, FALLBACK_WORDS, BUNDLED_WORDS

__all__ = ["WordList", "load_bundled", "FALLBACK_WORDS", "BUNDLED_WORDS"]
