# src/printlite/adapters/api/schemas.py
"""
Request Schemas - Inbound Payload Shapes

Pydantic models for the payloads the storefront and admin panel send.
They check structure and basic types (camelCase keys, integers, lists);
business rules such as option values, customer details and page ranges are
validated further in the application layer.

Files that USE this module:
- printlite.adapters.api.handlers (validates every inbound payload)
- tests.test_handlers (unit tests)

Files that this module USES:
- pydantic (BaseModel, Field)
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)


class FileDetailIn(_Request):
    name: str = Field(..., min_length=1, description="Uploaded file name")
    size: int = Field(0, ge=0, description="File size in bytes")
    pages: int = Field(..., ge=1, description="Page count of the file")


class PrintSettingsIn(_Request):
    paper_type: Optional[str] = Field(None, alias="paperType", description="standard/premium/glossy or 70gsm/90gsm/120gsm")
    color_option: Optional[str] = Field(None, alias="colorOption", description="blackAndWhite or color")
    print_sides: Optional[str] = Field(None, alias="printSides", description="single or double")
    binding: Optional[str] = Field(None, description="none, spiral or staple")
    copies: int = Field(1, ge=1, description="Number of copies")
    paper_size: Optional[str] = Field(None, alias="paperSize", description="A4, A3 or Letter")


class OrderCreateRequest(_Request):
    customer_name: str = Field(..., alias="customerName")
    email: str = Field(...)
    phone: str = Field(...)
    delivery_address: str = Field(..., alias="deliveryAddress")
    file_details: List[FileDetailIn] = Field(default_factory=list, alias="fileDetails")
    page_range: Optional[str] = Field(None, alias="pageRange", description="e.g. 1-5,8; omit for all pages")
    print_settings: PrintSettingsIn = Field(default_factory=PrintSettingsIn, alias="printSettings")
    payment_method: str = Field(..., alias="paymentMethod", description="upi, card or cash")
    special_instructions: Optional[str] = Field(None, alias="specialInstructions")
    user_id: Optional[Union[int, str]] = Field(None, alias="userId")


class PriceQuoteRequest(_Request):
    """Quick quote (no tax). ``paperType`` here is the sheet size."""
    pages: int = Field(..., description="Pages per copy")
    copies: int = Field(1, ge=1)
    paper_type: Optional[str] = Field(None, alias="paperType")
    print_type: Optional[str] = Field(None, alias="printType")
    paper_quality: Optional[str] = Field(None, alias="paperQuality")
    sides: Optional[str] = Field(None)
    binding: Optional[str] = Field(None)


class StatusUpdateRequest(_Request):
    order_id: int = Field(..., alias="orderId")
    new_status: str = Field(..., validation_alias=AliasChoices("newStatus", "status"))
    admin_notes: Optional[str] = Field(None, alias="adminNotes")


class PaymentStatusRequest(_Request):
    order_id: int = Field(..., alias="orderId")
    payment_status: str = Field(..., alias="paymentStatus")
