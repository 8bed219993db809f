"""Market Catalog — статический справочник инструментов и цен."""

from .market_catalog import MarketCatalog, PriceLookup, default_catalog

__all__ = [
    "MarketCatalog",
    "PriceLookup",
    "default_catalog",
]
