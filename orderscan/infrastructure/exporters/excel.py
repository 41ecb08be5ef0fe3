import io
from typing import List

from orderscan.domain.models.order import OrderItem

ORDER_COLUMNS = [
    ("vendor_name", "외주처"),
    ("product_name", "품명"),
    ("product_code", "제품코드"),
    ("quantity", "수량"),
    ("delivery_date", "납기요청일"),
    ("notes", "특이사항"),
]


def export_orders_excel(orders: List[OrderItem]) -> io.BytesIO:
    import openpyxl
    from openpyxl.utils import get_column_letter

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "발주내역"

    headers = [label for _, label in ORDER_COLUMNS]
    ws.append(headers)

    rows = []
    for order in orders:
        # Missing optional values become empty cells
        row = [getattr(order, attr) or None for attr, _ in ORDER_COLUMNS]
        rows.append(row)
        ws.append(row)

    for idx, header in enumerate(headers):
        longest = max((len(row[idx] or "") for row in rows), default=0)
        ws.column_dimensions[get_column_letter(idx + 1)].width = max(len(header) * 2, longest, 8) + 2

    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer
