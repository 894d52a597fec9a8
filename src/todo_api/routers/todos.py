from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..gateways import TodoGateway, get_gateway
from ..schemas import TodoIn, TodoOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)

_NOT_FOUND = {404: {"description": "Todo not found"}}


def _not_found(todo_id: int) -> HTTPException:
    logger.info("Todo %s not found", todo_id)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every stored Todo item ordered by id.",
)
def list_todos(gateway: TodoGateway = Depends(get_gateway)) -> List[TodoOut]:
    return [TodoOut.from_record(r) for r in gateway.find_all()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item. Server assigns id and createdAt.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Validation error"},
    },
)
def create_todo(payload: TodoIn, gateway: TodoGateway = Depends(get_gateway)) -> TodoOut:
    """
    Create a new Todo. Any id or createdAt in the body is ignored.
    """
    created = gateway.save(payload.to_record())
    logger.info("Created todo %s", created["id"])
    return TodoOut.from_record(created)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={200: {"description": "Todo found"}, **_NOT_FOUND},
)
def get_todo(todo_id: int, gateway: TodoGateway = Depends(get_gateway)) -> TodoOut:
    item = gateway.find_by_id(todo_id)
    if item is None:
        raise _not_found(todo_id)
    return TodoOut.from_record(item)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Overwrite title and done of an existing Todo item. id and createdAt are kept.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Validation error"},
        **_NOT_FOUND,
    },
)
def update_todo(todo_id: int, payload: TodoIn, gateway: TodoGateway = Depends(get_gateway)) -> TodoOut:
    """
    Full update of title and done. A missing id yields 404 and nothing is written.
    """
    existing = gateway.find_by_id(todo_id)
    if existing is None:
        raise _not_found(todo_id)
    existing["title"] = payload.title
    existing["done"] = payload.done
    return TodoOut.from_record(gateway.save(existing))


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Toggle Todo",
    description="Flip the done flag of a Todo item.",
    responses={200: {"description": "Todo toggled"}, **_NOT_FOUND},
)
def toggle_todo(todo_id: int, gateway: TodoGateway = Depends(get_gateway)) -> TodoOut:
    existing = gateway.find_by_id(todo_id)
    if existing is None:
        raise _not_found(todo_id)
    existing["done"] = not existing["done"]
    return TodoOut.from_record(gateway.save(existing))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={204: {"description": "Todo deleted"}, **_NOT_FOUND},
)
def delete_todo(todo_id: int, gateway: TodoGateway = Depends(get_gateway)) -> Response:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    if not gateway.exists_by_id(todo_id):
        raise _not_found(todo_id)
    gateway.delete_by_id(todo_id)
    logger.info("Deleted todo %s", todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
