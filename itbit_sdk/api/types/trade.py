"""Trade and funding history query types for the itBit REST API."""

from dataclasses import dataclass
from typing import Any, Optional

from ..validation import validate_page_size


@dataclass
class TradesParams:
    """Query parameters for GET /wallets/{walletId}/trades."""

    range_start: Optional[str] = None
    range_end: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None

    def to_query_params(self) -> dict:
        """Convert to query parameters dict."""
        params: dict[str, Any] = {}
        if self.range_start is not None:
            params["rangeStart"] = self.range_start
        if self.range_end is not None:
            params["rangeEnd"] = self.range_end
        if self.page is not None:
            params["page"] = self.page
        if self.per_page is not None:
            validate_page_size(self.per_page)
            params["perPage"] = self.per_page
        return params


@dataclass
class PageParams:
    """Plain pagination for wallet and funding history listings."""

    page: Optional[int] = None
    per_page: Optional[int] = None

    def to_query_params(self) -> dict:
        params: dict[str, Any] = {}
        if self.page is not None:
            params["page"] = self.page
        if self.per_page is not None:
            validate_page_size(self.per_page)
            params["perPage"] = self.per_page
        return params
