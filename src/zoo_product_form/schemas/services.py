"""Pydantic models for services and their Shopify Metaobject mirror."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


METAOBJECT_TYPE = "zoo_service"


class Service(BaseModel):
    """Locally owned service record (source of truth)."""

    id: int = Field(..., description="Store-assigned identifier")
    title: str = Field(..., description="Non-empty service title")
    description: Optional[str] = Field(None, description="Optional description")
    image_url: Optional[str] = Field(None, description="Optional image URL")
    remote_ref: Optional[str] = Field(
        None,
        description="Metaobject GID (e.g., gid://shopify/Metaobject/123), set after first sync",
    )
    created_at: datetime
    updated_at: datetime

    @property
    def handle(self) -> str:
        """Stable Metaobject handle derived from the local id."""
        return f"service-{self.id}"


class MetaobjectFieldKeys(BaseModel):
    """Remote field keys used when mirroring a Service."""

    title: str = "title"
    description: str = "description"
    image: str = "image_url"


class AddressMode(str, Enum):
    REFERENCE = "reference"
    HANDLE = "handle"
    NEW_ENTRY = "new_entry"


class AddressBy(BaseModel):
    """How a metaobjectUpsert call addresses its remote entry."""

    mode: AddressMode
    value: Optional[str] = None
    metaobject_type: str = METAOBJECT_TYPE

    @classmethod
    def reference(cls, remote_ref: str) -> "AddressBy":
        return cls(mode=AddressMode.REFERENCE, value=remote_ref)

    @classmethod
    def handle(cls, handle: str) -> "AddressBy":
        return cls(mode=AddressMode.HANDLE, value=handle)

    @classmethod
    def new_entry(cls) -> "AddressBy":
        return cls(mode=AddressMode.NEW_ENTRY)

    @classmethod
    def for_service(cls, service: Service) -> "AddressBy":
        """Per-record policy: reuse the known reference, else let Shopify assign one."""
        if service.remote_ref:
            return cls.reference(service.remote_ref)
        return cls.new_entry()

    def to_handle_input(self) -> dict:
        """Convert to the MetaobjectHandleInput variable."""
        if self.mode == AddressMode.REFERENCE:
            return {"id": self.value}
        if self.mode == AddressMode.HANDLE:
            return {"type": self.metaobject_type, "handle": self.value}
        return {"type": self.metaobject_type}


class UserError(BaseModel):
    """Shopify userErrors entry."""

    field: Optional[list[str]] = None
    message: str


class SyncStatus(str, Enum):
    SYNCED = "synced"
    FAILED = "failed"
    SKIPPED = "skipped"


class RemoteSyncResult(BaseModel):
    """Secondary outcome of a best-effort mirror call."""

    status: SyncStatus
    remote_ref: Optional[str] = Field(None, description="Metaobject GID involved, if any")
    reference_persisted: bool = Field(
        False, description="True when the store was written with a new remote_ref"
    )
    service: Optional[Service] = Field(
        None, description="Record as re-read after the remote_ref write"
    )
    user_errors: list[UserError] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Transport/exception message")

    @property
    def ok(self) -> bool:
        return self.status != SyncStatus.FAILED

    def describe_failure(self) -> str:
        """Human-readable failure summary."""
        if self.user_errors:
            return ", ".join(e.message for e in self.user_errors)
        return self.error or "unknown error"


class ServiceMutationOutcome(BaseModel):
    """Two-phase outcome: authoritative local write plus mirror diagnostic."""

    service: Service
    sync: Optional[RemoteSyncResult] = None


class SyncLogLine(BaseModel):
    """Backfill progress line."""

    level: str = Field(..., description="info|success|error")
    message: str
    service_id: Optional[int] = None


class SyncReport(BaseModel):
    """Result of a catalog-wide backfill."""

    success: bool
    definition_id: Optional[str] = None
    total: int = 0
    success_count: int = 0
    error_count: int = 0
    log_lines: list[SyncLogLine] = Field(default_factory=list)
    fatal_error: Optional[str] = None
