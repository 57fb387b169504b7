# storefront/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import (
    AdminOrderOut,
    CategoryCreatedOut,
    CategoryIn,
    MessageOut,
    OrderStatusIn,
    ProductCreatedOut,
    ProductIn,
    UserDeletedOut,
    UserOut,
    UserUpdateIn,
)
from storefront.services.catalog_service import CatalogService
from storefront.services.order_service import OrderService
from storefront.services.user_service import UserService

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# users

@router.get("/users", response_model=List[UserOut])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()


@router.put("/users/{user_id}", response_model=MessageOut)
def update_user(user_id: int, payload: UserUpdateIn, db: Session = Depends(get_db)):
    UserService(db).update_user(user_id, payload)
    return {"message": "User updated successfully"}


@router.delete("/users/{user_id}", response_model=UserDeletedOut)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    counts = UserService(db).delete_user(user_id)
    return {"message": "User deleted successfully", "deleted_items": counts}


# orders

@router.get("/orders", response_model=List[AdminOrderOut])
def list_orders(db: Session = Depends(get_db)):
    return OrderService(db).list_all_orders()


@router.put("/orders/{order_id}", response_model=MessageOut)
def update_order(order_id: int, payload: OrderStatusIn, db: Session = Depends(get_db)):
    OrderService(db).update_status(order_id, payload.status, payload.payment_status)
    return {"message": "Order updated successfully"}


@router.delete("/orders/{order_id}", response_model=MessageOut)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    OrderService(db).delete_order(order_id)
    return {"message": "Order deleted successfully"}


# catalog

@router.post("/products", response_model=ProductCreatedOut, status_code=201)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    product = CatalogService(db).create_product(payload)
    return {"message": "Product created successfully", "product_id": product.id}


@router.put("/products/{product_id}", response_model=MessageOut)
def update_product(product_id: int, payload: ProductIn, db: Session = Depends(get_db)):
    CatalogService(db).update_product(product_id, payload)
    return {"message": "Product updated successfully"}


@router.delete("/products/{product_id}", response_model=MessageOut)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    CatalogService(db).delete_product(product_id)
    return {"message": "Product deleted successfully"}


@router.post("/categories", response_model=CategoryCreatedOut, status_code=201)
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    category = CatalogService(db).create_category(payload)
    return {"message": "Category added successfully", "category": category}
