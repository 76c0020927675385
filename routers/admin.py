from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import get_db
from errors import envelope
from routers.common import ListQuery
from security import require_admin
from services import AdminService

router = APIRouter(prefix="/admin", tags=["admin"])


def get_service(db: Database = Depends(get_db)) -> AdminService:
    return AdminService(db)


@router.get("/orders", dependencies=[Depends(require_admin)])
def admin_list_orders(query: ListQuery = Depends(), service: AdminService = Depends(get_service)):
    result = service.list_all_orders(query.page, query.limit, query.sort)
    return envelope("All orders fetched successfully", result)


# TODO: decide with the storefront owner whether this listing should sit behind require_admin like the others.
@router.get("/products")
def admin_list_products(query: ListQuery = Depends(), service: AdminService = Depends(get_service)):
    result = service.list_all_products(query.page, query.limit, query.sort)
    return envelope("All products fetched successfully", result)


@router.get("/users", dependencies=[Depends(require_admin)])
def admin_list_users(query: ListQuery = Depends(), service: AdminService = Depends(get_service)):
    result = service.list_all_users(query.page, query.limit, query.sort)
    return envelope("All users fetched successfully", result)
