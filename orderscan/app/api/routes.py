import logging
from datetime import date
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse

from orderscan.domain.models.order import OrderItem, group_orders_by_vendor
from orderscan.domain.models.parts import DEFAULT_IMAGE_MIME_TYPE, to_data_url
from orderscan.infrastructure.exporters.excel import export_orders_excel
from orderscan.services.extraction import OrderExtractionAdapter

logger = logging.getLogger(__name__)

router = APIRouter()


def get_adapter(request: Request) -> OrderExtractionAdapter:
    return request.app.state.adapter


async def _resolve_input(
    text: Optional[str],
    image: Optional[UploadFile],
    image_data_url: Optional[str],
) -> Tuple[str, bool]:
    provided = [value for value in (text, image, image_data_url) if value]
    if len(provided) != 1:
        raise HTTPException(status_code=400, detail="Provide exactly one of 'text', 'image' or 'image_data_url'.")

    if text:
        return text, False
    if image_data_url:
        return image_data_url, True

    payload = await image.read()
    if not payload:
        raise HTTPException(status_code=400, detail=f"Uploaded file '{image.filename}' is empty.")
    mime_type = image.content_type or DEFAULT_IMAGE_MIME_TYPE
    logger.info(f"Received image upload '{image.filename}' ({mime_type}, {len(payload) / 1024:.1f}KB)")
    return to_data_url(payload, mime_type), True


async def _extract(
    adapter: OrderExtractionAdapter,
    text: Optional[str],
    image: Optional[UploadFile],
    image_data_url: Optional[str],
) -> List[OrderItem]:
    data, is_image = await _resolve_input(text, image, image_data_url)
    return await adapter.extract_orders(data, is_image=is_image)


@router.post("/orders/extract")
async def extract_orders(
    text: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    image_data_url: Optional[str] = Form(None),
    adapter: OrderExtractionAdapter = Depends(get_adapter),
):
    orders = await _extract(adapter, text, image, image_data_url)
    payload = {
        "orders": [order.model_dump(by_alias=True) for order in orders],
        "vendors": [
            {"vendorName": group.vendor_name, "count": len(group.items)}
            for group in group_orders_by_vendor(orders)
        ],
    }
    return JSONResponse(payload)


@router.post("/orders/extract/excel")
async def extract_orders_excel(
    text: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    image_data_url: Optional[str] = Form(None),
    adapter: OrderExtractionAdapter = Depends(get_adapter),
):
    orders = await _extract(adapter, text, image, image_data_url)
    excel_buffer = export_orders_excel(orders)
    filename = f"orders_{date.today().isoformat()}.xlsx"
    return StreamingResponse(
        excel_buffer,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
