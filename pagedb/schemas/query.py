from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from pagedb.engine.schema import Filter, SortLevel


class QueryUpdate(BaseModel):
    """Omitted lists are left as they are."""

    filters: Optional[List[Filter]] = None
    sorts: Optional[List[SortLevel]] = None
