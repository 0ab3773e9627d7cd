"""
Timeline Article Store

Reference implementation of the read endpoints the timeline calendar
consumes. Articles live in memory, optionally seeded from a JSON file.

RESPONSIBILITY: answer month, range-count and year queries
MUST NOT: render, route pages, or know about widgets
"""

from .store import ArticleStore, StoredArticle

__all__ = ['ArticleStore', 'StoredArticle']
