from __future__ import annotations

from fastapi import APIRouter, Depends, status

from qrmenu.api.services import OrderingServices, get_services
from qrmenu.application import notices
from qrmenu.application.dto.requests import SubmitOrderRequest
from qrmenu.application.dto.responses import NoticeResponse, OrderPlacedResponse
from qrmenu.application.mappers.order_mapper import to_order_response
from qrmenu.application.mappers.session_mapper import to_cart_response

router = APIRouter()


@router.post(
    "/v1/sessions/{session_id}/orders",
    response_model=OrderPlacedResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_order(
    session_id: str,
    request_dto: SubmitOrderRequest,
    services: OrderingServices = Depends(get_services),
) -> OrderPlacedResponse:
    session = services.sessions.get(session_id)
    order = services.submit_order_use_case().execute(session=session, request_dto=request_dto)
    return OrderPlacedResponse(
        order=to_order_response(order),
        cart=to_cart_response(session.cart),
        notice=NoticeResponse(
            code="ORDER_PLACED",
            message=notices.ORDER_PLACED,
            autoDismissSeconds=notices.NOTICE_AUTO_DISMISS_SECONDS,
        ),
    )
