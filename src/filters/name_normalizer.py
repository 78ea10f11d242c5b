# src/filters/name_normalizer.py

"""Canonical product names and search tokens."""

import logging
import string

logger = logging.getLogger("price_stats.filters")

# Catalogue codes embedded in labels: ASCII upper-case letters,
# digits and underscore only (e.g. "A01_1", "2017", "UHT").
CODE_TOKEN_CHARS: frozenset[str] = frozenset(
    string.ascii_uppercase + string.digits + "_"
)


class NameNormalizer:
    """Turn raw table labels into canonical names and match tokens."""

    @staticmethod
    def is_code_token(token: str) -> bool:
        """Return True for tokens built only from code characters."""
        return bool(token) and set(token) <= CODE_TOKEN_CHARS

    @staticmethod
    def canonical_name(raw_name: object) -> str:
        """Collapse whitespace and drop embedded code tokens.

        ``"Молоко   UHT  2,5%"`` becomes ``"Молоко 2,5%"``.
        """
        if raw_name is None:
            return ""
        tokens = str(raw_name).split()
        kept = [
            t for t in tokens if not NameNormalizer.is_code_token(t)
        ]
        if len(kept) != len(tokens):
            logger.debug(
                "Dropped code tokens from '%s'", raw_name,
            )
        return " ".join(kept)

    @staticmethod
    def search_tokens(name: str) -> set[str]:
        """Lower-cased tokens of *name*, split on whitespace and commas."""
        return set(name.lower().replace(",", " ").split())

    @staticmethod
    def matches(name: str, term: str) -> bool:
        """Exact, case-insensitive token membership of *term* in *name*."""
        needle = term.strip().lower()
        if not needle:
            return False
        return needle in NameNormalizer.search_tokens(name)
