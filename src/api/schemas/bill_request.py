"""Request schemas for Bill API"""

from pydantic import Field
from src.app.use_cases.base_dto import CamelModel


class CreateBillRequestSchema(CamelModel):
    """Request schema for POST /bills/create"""

    order_id: int = Field(..., description="Order to bill")
