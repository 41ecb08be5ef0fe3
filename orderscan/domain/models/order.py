from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OrderItem(BaseModel):
    """A single purchase-order line read from a spreadsheet or pasted text."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    vendor_name: str = Field(..., description="외주처 (예: 위드맘, 씨엘로)")
    product_name: str = Field(..., description="품명")
    product_code: Optional[str] = Field(default=None, description="제품코드 (F열, 숫자와 문자 조합)")
    quantity: str = Field(..., description="수량")
    delivery_date: Optional[str] = Field(default=None, description="납기요청일 (예: 12월 28일)")
    notes: Optional[str] = Field(default=None, description="특이사항")


class VendorGroup(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    vendor_name: str
    items: List[OrderItem] = Field(default_factory=list)


def carry_down_vendor_names(rows: List[Any]) -> List[Any]:
    """Fill blank ``vendorName`` values with the nearest preceding vendor.

    Mirrors a merged vendor cell in the source spreadsheet. Rows ahead of the
    first named vendor, and entries that are not objects, are returned unchanged.
    """
    filled: List[Any] = []
    last_vendor: Optional[str] = None
    for row in rows:
        if not isinstance(row, dict):
            filled.append(row)
            continue
        vendor = row.get("vendorName")
        if isinstance(vendor, str) and vendor.strip():
            last_vendor = vendor
            filled.append(row)
        elif last_vendor is not None:
            filled.append({**row, "vendorName": last_vendor})
        else:
            filled.append(row)
    return filled


def group_orders_by_vendor(orders: List[OrderItem]) -> List[VendorGroup]:
    groups: Dict[str, VendorGroup] = {}
    for order in orders:
        if order.vendor_name not in groups:
            groups[order.vendor_name] = VendorGroup(vendor_name=order.vendor_name)
        groups[order.vendor_name].items.append(order)
    return list(groups.values())
