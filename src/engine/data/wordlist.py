# Word-membership predicate backed by a plain-text word list (one word per line).

import logging
from pathlib import Path
from typing import Iterable, Optional, Set

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 10

# Used when the word list cannot be read
FALLBACK_WORDS = (
    'THE', 'AND', 'FOR', 'ARE', 'BUT', 'NOT', 'YOU', 'ALL', 'CAN', 'HER',
    'CAT', 'DOG', 'RUN', 'JUMP', 'PLAY', 'WORD', 'GAME', 'TEST',
)

BUNDLED_WORDS = Path(__file__).parent / "words.txt"


def _normalize(words: Iterable[str]) -> Set[str]:
    result = set()
    for word in words:
        word = word.strip().upper()
        if MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH and word.isalpha():
            result.add(word)
    return result


class WordList:
    '''
    Set-backed dictionary. Until one of the load methods has run, every word
    is rejected, so detection degrades to "no words" instead of failing.
    '''

    def __init__(self, words: Optional[Iterable[str]] = None):
        self._words: Optional[Set[str]] = None
        if words is not None:
            self.load_words(words)

    @property
    def loaded(self) -> bool:
        return self._words is not None

    def load_words(self, words: Iterable[str]) -> int:
        self._words = _normalize(words)
        return len(self._words)

    def load_file(self, path) -> int:
        '''
        Load words from a text file. A missing or unreadable file installs the
        small fallback list instead of raising.
        '''
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to load word list from %s (%s); using fallback words", path, e)
            return self.load_words(FALLBACK_WORDS)
        count = self.load_words(text.splitlines())
        logger.info("Loaded %d words from %s", count, path)
        return count

    def contains(self, word: str) -> bool:
        if self._words is None:
            return False
        return word.upper() in self._words

    __call__ = contains

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def __len__(self) -> int:
        return len(self._words) if self._words else 0


def load_bundled() -> WordList:
    '''Word list shipped with the package.'''
    words = WordList()
    words.load_file(BUNDLED_WORDS)
    return words
