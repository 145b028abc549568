from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from qrmenu.api.services import OrderingServices, get_services
from qrmenu.application.dto.responses import CatalogRefreshResponse, MenuViewResponse
from qrmenu.application.mappers.catalog_mapper import to_menu_view_response
from qrmenu.application.mappers.session_mapper import catalog_notice
from qrmenu.domain.menu.view import ALL_CATEGORIES, project_items

router = APIRouter()


@router.get("/v1/menu", response_model=MenuViewResponse)
def get_menu(
    category: str = Query(default=ALL_CATEGORIES, min_length=1, max_length=50),
    search: str | None = Query(default=None, max_length=100),
    services: OrderingServices = Depends(get_services),
) -> MenuViewResponse:
    catalog = services.ensure_catalog()
    snapshot = catalog.snapshot
    active_category = category.strip().lower() or ALL_CATEGORIES
    return to_menu_view_response(
        snapshot=snapshot,
        visible_items=project_items(snapshot.items, active_category, search),
        active_category=active_category,
        search=search,
        display=services.display,
        notice=catalog_notice(snapshot),
    )


@router.post("/v1/catalog/refresh", response_model=CatalogRefreshResponse)
def refresh_catalog(services: OrderingServices = Depends(get_services)) -> CatalogRefreshResponse:
    snapshot = services.refresh_catalog()
    return CatalogRefreshResponse(
        itemCount=len(snapshot.items),
        categoryCount=len(snapshot.categories),
        categorySource=snapshot.category_source,
        loadedAt=snapshot.loaded_at,
        notice=catalog_notice(snapshot),
    )
