from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, Response, status

from qrmenu.api.services import OrderingServices, get_services
from qrmenu.application.dto.requests import ChangeQuantityRequest, UpdateViewRequest
from qrmenu.application.dto.responses import SessionResponse
from qrmenu.application.mappers.session_mapper import to_session_response
from qrmenu.application.session.state import OrderingSession

router = APIRouter()


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """Weak comparison of an If-None-Match list against the current tag."""
    if not if_none_match:
        return False
    for candidate in if_none_match.split(","):
        tag = candidate.strip()
        if tag == "*":
            return True
        if tag.startswith("W/"):
            tag = tag[2:]
        if tag == etag:
            return True
    return False


def _session_payload(
    session: OrderingSession,
    services: OrderingServices,
    response: Response,
) -> SessionResponse:
    response.headers["ETag"] = session.etag
    return to_session_response(session, services.display)


@router.post(
    "/v1/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def open_session(
    response: Response,
    table: str | None = Query(default=None, max_length=20),
    services: OrderingServices = Depends(get_services),
) -> SessionResponse:
    session = services.open_session_use_case().execute(table_param=table)
    return _session_payload(session, services, response)


@router.get("/v1/sessions/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
    services: OrderingServices = Depends(get_services),
) -> SessionResponse | Response:
    session = services.sessions.get(session_id)
    if etag_matches(if_none_match, session.etag):
        return Response(status_code=304, headers={"ETag": session.etag})
    return _session_payload(session, services, response)


@router.put("/v1/sessions/{session_id}/view", response_model=SessionResponse)
def update_view(
    session_id: str,
    request_dto: UpdateViewRequest,
    response: Response,
    services: OrderingServices = Depends(get_services),
) -> SessionResponse:
    session = services.sessions.get(session_id)
    session.select_view(category=request_dto.category, search=request_dto.search)
    return _session_payload(session, services, response)


@router.post(
    "/v1/sessions/{session_id}/cart/items/{item_id}/toggle",
    response_model=SessionResponse,
)
def toggle_item(
    session_id: str,
    item_id: str,
    response: Response,
    services: OrderingServices = Depends(get_services),
) -> SessionResponse:
    session = services.sessions.get(session_id)
    session.toggle(item_id)
    return _session_payload(session, services, response)


@router.post(
    "/v1/sessions/{session_id}/cart/items/{item_id}/quantity",
    response_model=SessionResponse,
)
def change_quantity(
    session_id: str,
    item_id: str,
    request_dto: ChangeQuantityRequest,
    response: Response,
    services: OrderingServices = Depends(get_services),
) -> SessionResponse:
    session = services.sessions.get(session_id)
    session.change_quantity(item_id, request_dto.delta)
    return _session_payload(session, services, response)


@router.delete("/v1/sessions/{session_id}/cart", response_model=SessionResponse)
def clear_cart(
    session_id: str,
    response: Response,
    services: OrderingServices = Depends(get_services),
) -> SessionResponse:
    session = services.sessions.get(session_id)
    session.clear_cart()
    return _session_payload(session, services, response)
