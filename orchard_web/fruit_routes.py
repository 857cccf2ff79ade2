"""
FastAPI routes for fruits.

Prefix: /api/fruits

Reads are public; create needs a session, update/delete need the session
user to own the fruit. All checks live in FruitService.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from orchard.fruits.service import FruitService

from .deps import get_fruit_service, read_json_body, session_token

router = APIRouter(prefix="/api/fruits", tags=["fruits"])


@router.get("")
async def list_fruits(service: FruitService = Depends(get_fruit_service)) -> Dict[str, Any]:
    fruits = {fruit.id: fruit.to_public() for fruit in service.list_fruits()}
    return {"message": "List of all fruits!", "fruits": fruits}


@router.get("/{fruit_id}")
async def get_fruit(fruit_id: str, service: FruitService = Depends(get_fruit_service)) -> Dict[str, Any]:
    fruit = service.get_fruit(fruit_id)
    return {"message": "Here is your fruit!", "fruit": fruit.to_public()}


@router.post("")
async def create_fruit(
    request: Request,
    service: FruitService = Depends(get_fruit_service),
    token: Optional[str] = Depends(session_token),
) -> Any:
    body = await read_json_body(request)
    fruit = service.create_fruit(token, body)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Created!", "fruit": fruit.to_public()},
    )


@router.put("/{fruit_id}")
async def update_fruit(
    fruit_id: str,
    request: Request,
    service: FruitService = Depends(get_fruit_service),
    token: Optional[str] = Depends(session_token),
) -> Any:
    body = await read_json_body(request)
    fruit = service.update_fruit(token, fruit_id, body)
    # Updates answer 201
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Updated!", "fruit": fruit.to_public()},
    )


@router.delete("/{fruit_id}")
async def delete_fruit(
    fruit_id: str,
    service: FruitService = Depends(get_fruit_service),
    token: Optional[str] = Depends(session_token),
) -> Response:
    service.delete_fruit(token, fruit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
