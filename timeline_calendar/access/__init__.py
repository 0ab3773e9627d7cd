"""
Data Access Layer

RESPONSIBILITY: fetch and hold Article Store data for widgets
OUTPUTS: ArticleSummary lists, SparklineDataset, year lists

WHAT THIS LAYER MUST NOT DO:
============================
- Raise transport or decode failures to widgets
- Let a superseded response overwrite newer state
- Merge datasets across fetches
"""

from .client import ArticleStoreClient, ARTICLES_PATH, RANGE_COUNTS_PATH, YEARS_PATH
from .sources import (
    LatestWinsGate, LoadOutcome, MonthArticlesSource, RangeCountsSource, YearListSource,
)

__all__ = [
    'ArticleStoreClient',
    'ARTICLES_PATH',
    'RANGE_COUNTS_PATH',
    'YEARS_PATH',
    'LatestWinsGate',
    'LoadOutcome',
    'MonthArticlesSource',
    'RangeCountsSource',
    'YearListSource',
]
