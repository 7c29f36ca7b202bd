"""Menu catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from scoop_pos.core.security import get_current_user, require_admin
from scoop_pos.db.session import get_db
from scoop_pos.models.menu import MENU_CATEGORIES, MenuItem
from scoop_pos.models.user import User
from scoop_pos.schemas.menu import MenuItemCreate, MenuItemResponse, MenuItemUpdate
from scoop_pos.services.menu_service import (
    MenuValidationError,
    create_menu_item,
    delete_menu_item,
    get_menu_item,
    list_menu_items,
    update_menu_item,
)

router: APIRouter = APIRouter()


def _get_or_404(db: Session, item_id: int) -> MenuItem:
    item = get_menu_item(db, item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    return item


@router.get("", response_model=list[MenuItemResponse])
def get_menu(
    category: str | None = Query(default=None),
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MenuItem]:
    """Catalog ordered by category then name."""
    return list_menu_items(db, category=category, search=search)


@router.get("/categories", response_model=list[str])
def get_categories(current_user: User = Depends(get_current_user)) -> list[str]:
    return list(MENU_CATEGORIES)


@router.get("/{item_id}", response_model=MenuItemResponse)
def get_menu_item_detail(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MenuItem:
    return _get_or_404(db, item_id)


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu(
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> MenuItem:
    try:
        return create_menu_item(
            db,
            name=payload.name,
            category=payload.category,
            price=payload.price,
            description=payload.description,
            in_stock=payload.in_stock,
            stock_quantity=payload.stock_quantity,
        )
    except MenuValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.patch("/{item_id}", response_model=MenuItemResponse)
def update_menu(
    item_id: int,
    payload: MenuItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> MenuItem:
    item = _get_or_404(db, item_id)
    try:
        return update_menu_item(db, item, payload.model_dump(exclude_unset=True))
    except MenuValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> Response:
    delete_menu_item(db, _get_or_404(db, item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
