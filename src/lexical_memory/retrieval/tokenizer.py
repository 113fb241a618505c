"""
Tokenizer for the lexical memory index.

Single responsibility: turn raw text into the ordered list of normalized
terms used as index keys. No stemming - "cat" and "cats" stay distinct.
"""

import re

# English + Spanish
STOP_WORDS: frozenset[str] = frozenset({
    # English
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "from",
    "had", "has", "have", "he", "her", "his", "how", "i", "if", "in", "into",
    "is", "it", "its", "just", "me", "my", "no", "nor", "not", "of", "on",
    "or", "our", "out", "own", "say", "she", "so", "some", "than", "that",
    "the", "their", "them", "then", "there", "these", "they", "this", "to",
    "too", "up", "us", "very", "was", "we", "what", "when", "where", "which",
    "while", "who", "whom", "why", "will", "with", "you", "your",
    # Spanish
    "un", "una", "unos", "unas", "el", "la", "los", "las", "de", "del", "al",
    "y", "o", "pero", "que", "en", "es", "por", "con", "para", "se", "lo",
    "le", "les", "su", "sus", "como", "más", "ya", "este", "esta", "estos",
    "estas", "ese", "esa", "esos", "esas", "aquel", "aquella", "mi", "tu",
    "nos", "nuestro", "nuestra", "nuestros", "nuestras", "han", "ha", "hay",
    "fue", "ser", "estar", "son", "están", "era", "sin", "sobre", "también",
    "muy", "tiene", "tienen", "todo", "toda", "todos", "todas", "otro",
    "otra", "otros", "otras", "entre", "desde", "hasta", "durante",
})

MIN_TOKEN_LENGTH = 2

# Anything outside ASCII alphanumerics and the accented letters we keep
# becomes a separator.
_NON_TERM_RE = re.compile(r"[^a-z0-9áéíóúñüàèìòùâêîôû\s]")


def tokenize(text: str | None) -> list[str]:
    """
    Split text into normalized terms.

    Lowercases, replaces non-term characters with whitespace, splits,
    and drops short tokens and stopwords. Order and repeats are kept
    because term frequency depends on them.

    Args:
        text: Raw text (None is treated as empty)

    Returns:
        Ordered list of terms, possibly empty
    """
    if not text:
        return []

    cleaned = _NON_TERM_RE.sub(" ", text.lower())
    return [
        token
        for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]
