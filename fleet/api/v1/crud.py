"""Generic CRUD router factory shared by every persisted resource."""

import uuid

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from fleet.api.v1._authz import require
from fleet.core.dependencies import get_db_session
from fleet.core.exceptions import ValidationError
from fleet.resources import ResourceSpec
from fleet.schemas.common import PagedResponse
from fleet.services.crud_service import CrudService
from fleet.services.hateoas import HateoasService, delete_route, get_route, list_route, update_route
from fleet.services.pagination import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, PagingParameters


def build_crud_router(resource: ResourceSpec) -> APIRouter:
    """Expose list/get/create/update/delete routes for ``resource``."""
    router = APIRouter(prefix=resource.path, tags=[resource.tag])
    response_schema = resource.response_schema
    create_schema = resource.create_schema
    update_schema = resource.update_schema

    def _service(db: Session = Depends(get_db_session)) -> CrudService:
        return CrudService(db=db, resource=resource)

    def _present(entity, request: Request):
        item = response_schema.model_validate(entity)
        links = HateoasService(request.url_for).resource_links(resource.name, resource.identifier_of(entity))
        return item.model_copy(update={"links": links})

    @router.get(
        "",
        name=list_route(resource.name),
        response_model=PagedResponse[response_schema],
        dependencies=[Depends(require(resource.read_scope))],
    )
    def list_items(
        request: Request,
        page_number: int = Query(default=DEFAULT_PAGE_NUMBER, alias="pageNumber"),
        page_size: int = Query(default=DEFAULT_PAGE_SIZE, alias="pageSize"),
        service: CrudService = Depends(_service),
    ):
        page = service.list_page(PagingParameters(page_number=page_number, page_size=page_size))
        links = HateoasService(request.url_for).pagination_links(page, resource.name)
        return PagedResponse[response_schema](
            items=[response_schema.model_validate(entity) for entity in page.items],
            current_page=page.current_page,
            page_size=page.page_size,
            total_items=page.total_items,
            total_pages=page.total_pages,
            has_previous=page.has_previous,
            has_next=page.has_next,
            links=links,
        )

    @router.get(
        "/{item_id}",
        name=get_route(resource.name),
        response_model=response_schema,
        dependencies=[Depends(require(resource.read_scope))],
    )
    def get_item(item_id: uuid.UUID, request: Request, service: CrudService = Depends(_service)):
        return _present(service.get(item_id), request)

    @router.post(
        "",
        name=f"create_{resource.name}",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require(resource.write_scope))],
    )
    def create_item(
        payload: create_schema,
        request: Request,
        response: Response,
        service: CrudService = Depends(_service),
    ):
        entity = service.create(payload.model_dump())
        response.headers["Location"] = str(
            request.url_for(get_route(resource.name), item_id=str(resource.identifier_of(entity)))
        )
        return _present(entity, request)

    @router.put(
        "/{item_id}",
        name=update_route(resource.name),
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        dependencies=[Depends(require(resource.write_scope))],
    )
    def update_item(item_id: uuid.UUID, payload: update_schema, service: CrudService = Depends(_service)):
        if getattr(payload, resource.id_field) != item_id:
            raise ValidationError("The id in the URL does not match the id in the request body.")
        service.update(item_id, payload.model_dump(exclude={resource.id_field}))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{item_id}",
        name=delete_route(resource.name),
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        dependencies=[Depends(require(resource.write_scope))],
    )
    def delete_item(item_id: uuid.UUID, service: CrudService = Depends(_service)):
        service.delete(item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
