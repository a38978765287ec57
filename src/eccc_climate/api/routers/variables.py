from __future__ import annotations

from fastapi import APIRouter

from eccc_climate.variables import list_variables

router = APIRouter()


@router.get("/{interval}", response_model=list[str])
def get_variables(interval: str) -> list[str]:
    """Columns expected from the hourly, daily or monthly collection."""
    return list_variables(interval)
