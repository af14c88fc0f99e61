# backend/modules/tables/routes/table_routes.py

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from ..services.directory_service import DirectoryService
from ..schemas.table_schemas import (
    AreaCreate, AreaResponse, TableCreate, TableResponse
)

router = APIRouter(tags=["Areas & Tables"])


def get_directory_service(db: Session = Depends(get_db)) -> DirectoryService:
    """Dependency to get directory service instance"""
    return DirectoryService(db)


@router.get("/areas", response_model=List[AreaResponse])
async def list_areas(
    directory: DirectoryService = Depends(get_directory_service)
):
    """List seating areas in display order"""
    return directory.list_areas()


@router.post("/areas", response_model=AreaResponse,
             status_code=status.HTTP_201_CREATED)
async def create_area(
    area_data: AreaCreate,
    directory: DirectoryService = Depends(get_directory_service)
):
    return directory.create_area(area_data)


@router.get("/areas/{area_id}/tables", response_model=List[TableResponse])
async def list_tables(
    area_id: int,
    directory: DirectoryService = Depends(get_directory_service)
):
    """List the tables of an area with their occupancy"""
    return directory.list_tables(area_id)


@router.post("/areas/{area_id}/tables", response_model=TableResponse,
             status_code=status.HTTP_201_CREATED)
async def create_table(
    area_id: int,
    table_data: TableCreate,
    directory: DirectoryService = Depends(get_directory_service)
):
    return directory.create_table(area_id, table_data)


@router.get("/tables/{table_id}", response_model=TableResponse)
async def get_table(
    table_id: int,
    directory: DirectoryService = Depends(get_directory_service)
):
    return directory.get_table(table_id)
