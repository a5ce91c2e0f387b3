from typing import Dict, Any, List, Optional
from pydantic import BaseModel


class OrdersPage(BaseModel):
    """One page of the orders collection endpoint."""

    orders: List[Dict[str, Any]]
    next_page_info: Optional[str] = None
