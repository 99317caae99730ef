"""FastAPI routes for the service catalog admin."""
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from ..schemas.services import Service, ServiceMutationOutcome, SyncReport
from ..shopify.admin_client import ShopifyAdminClient
from ..shopify.exceptions import ShopifyClientError, ShopifyGraphQLError
from ..shopify.products import fetch_product, update_product_title
from ..store.exceptions import (
    ServiceNotFoundError,
    ServiceStoreError,
    ValidationError,
)
from ..store.services import ServiceStore
from ..sync.bootstrap import DefinitionBootstrap
from ..sync.catalog_sync import RemoteCatalogSync
from ..sync.mutations import create_service, delete_service, update_service
from .auth import require_api_key
from .dependencies import (
    get_admin_client,
    get_catalog_sync,
    get_definition_bootstrap,
    get_service_store,
)


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["services"],
    dependencies=[Depends(require_api_key)],
)

SERVICES_PATH = "/api/v1/services"


class ServiceListResponse(BaseModel):
    services: list[Service] = Field(default_factory=list)


class ServiceResponse(BaseModel):
    service: Service


class DeleteResponse(BaseModel):
    success: bool
    remote_sync: str


def _form_values(
    title: Optional[str], description: Optional[str], image_url: Optional[str]
) -> dict[str, str]:
    return {
        "title": (title or "").strip(),
        "description": (description or "").strip(),
        "imageUrl": (image_url or "").strip(),
    }


def _errors_response(
    status_code: int, errors: dict[str, str], values: Optional[dict] = None
) -> JSONResponse:
    content: dict = {"errors": errors}
    if values is not None:
        content["values"] = values
    return JSONResponse(status_code=status_code, content=content)


def _redirect(outcome: ServiceMutationOutcome) -> RedirectResponse:
    response = RedirectResponse(SERVICES_PATH, status_code=status.HTTP_303_SEE_OTHER)
    if outcome.sync is not None:
        response.headers["X-Remote-Sync"] = outcome.sync.status.value
    return response


@router.get("/services", response_model=ServiceListResponse)
async def list_services(
    store: ServiceStore = Depends(get_service_store),
) -> ServiceListResponse:
    """List services, newest first."""
    return ServiceListResponse(services=store.list())


@router.post("/services", summary="Create a service")
async def create_service_action(
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    image_url: Annotated[Optional[str], Form(alias="imageUrl")] = None,
    store: ServiceStore = Depends(get_service_store),
    sync: RemoteCatalogSync = Depends(get_catalog_sync),
):
    """Create a service, then mirror it to a new Metaobject.

    Redirects to the service list once the local record is saved, whatever
    the Metaobject outcome.
    """
    values = _form_values(title, description, image_url)

    try:
        outcome = await create_service(store, sync, title, description, image_url)
    except ValidationError as exc:
        return _errors_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY, {exc.field: exc.message}, values
        )
    except ServiceStoreError as exc:
        logger.error("Failed to create service: %s", exc, exc_info=True)
        return _errors_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"title": "Failed to create service. Please try again."},
            values,
        )

    return _redirect(outcome)


@router.get("/services/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    store: ServiceStore = Depends(get_service_store),
) -> ServiceResponse:
    try:
        return ServiceResponse(service=store.get(service_id))
    except ServiceNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Service not found"
        )


@router.post("/services/{service_id}", summary="Update or delete a service")
async def service_action(
    service_id: int,
    intent: Annotated[Optional[str], Form()] = None,
    title: Annotated[Optional[str], Form()] = None,
    description: Annotated[Optional[str], Form()] = None,
    image_url: Annotated[Optional[str], Form(alias="imageUrl")] = None,
    store: ServiceStore = Depends(get_service_store),
    sync: RemoteCatalogSync = Depends(get_catalog_sync),
):
    """Edit-page action: ``intent=delete`` deletes, anything else updates."""
    if intent == "delete":
        try:
            outcome = await delete_service(store, sync, service_id)
        except ServiceNotFoundError:
            return _errors_response(
                status.HTTP_404_NOT_FOUND, {"form": "Service not found"}
            )
        except ServiceStoreError as exc:
            logger.error("Failed to delete service: %s", exc, exc_info=True)
            return _errors_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                {"form": "Failed to delete service. Please try again."},
            )
        return _redirect(outcome)

    if intent not in (None, "", "update"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid intent: {intent}",
        )

    values = _form_values(title, description, image_url)

    try:
        outcome = await update_service(
            store, sync, service_id, title, description, image_url
        )
    except ValidationError as exc:
        return _errors_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY, {exc.field: exc.message}, values
        )
    except ServiceNotFoundError:
        return _errors_response(
            status.HTTP_404_NOT_FOUND, {"form": "Service not found"}, values
        )
    except ServiceStoreError as exc:
        logger.error("Failed to update service: %s", exc, exc_info=True)
        return _errors_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"title": "Failed to update service. Please try again."},
            values,
        )

    return _redirect(outcome)


@router.delete("/services/{service_id}", response_model=DeleteResponse)
async def delete_service_action(
    service_id: int,
    store: ServiceStore = Depends(get_service_store),
    sync: RemoteCatalogSync = Depends(get_catalog_sync),
) -> DeleteResponse:
    """List-page delete."""
    try:
        outcome = await delete_service(store, sync, service_id)
    except ServiceNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Service not found"
        )
    except ServiceStoreError as exc:
        logger.error("Failed to delete service: %s", exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete service",
        )

    return DeleteResponse(success=True, remote_sync=outcome.sync.status.value)


@router.post("/setup", response_model=SyncReport, summary="Sync all services")
async def setup_action(
    bootstrap: DefinitionBootstrap = Depends(get_definition_bootstrap),
):
    """Ensure the zoo_service definition exists and backfill every service."""
    try:
        report = await bootstrap.backfill_all()
    except ServiceStoreError as exc:
        logger.error("Backfill aborted: %s", exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load services",
        )

    if not report.success:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=report.model_dump(),
        )
    return report


@router.post("/product-editor", summary="Fetch or rename a product")
async def product_editor_action(
    intent: Annotated[Optional[str], Form()] = None,
    product_id: Annotated[Optional[str], Form(alias="productId")] = None,
    title: Annotated[Optional[str], Form()] = None,
    client: ShopifyAdminClient = Depends(get_admin_client),
):
    if intent not in ("fetch", "save"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid intent"
        )

    if not product_id or not product_id.strip():
        return _errors_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            {"productId": "Product ID is required"},
        )

    try:
        if intent == "fetch":
            product = await fetch_product(client, product_id)
            if product is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
                )
            return {"product": product}

        new_title = (title or "").strip()
        if not new_title:
            return _errors_response(
                status.HTTP_422_UNPROCESSABLE_ENTITY, {"title": "Title is required"}
            )
        product = await update_product_title(client, product_id, new_title)
        return {"product": product, "saved": True}

    except ShopifyGraphQLError as exc:
        return _errors_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY, {"form": str(exc)}
        )
    except ShopifyClientError as exc:
        logger.error("Product editor request failed: %s", exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Shopify request failed"
        )
