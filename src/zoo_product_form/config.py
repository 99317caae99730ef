"""Environment-driven settings."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .schemas.services import MetaobjectFieldKeys


@dataclass(frozen=True)
class Settings:
    shop_domain: Optional[str] = None
    access_token: Optional[str] = None
    api_version: str = "2024-10"
    db_path: Path = Path("data/zoo.db")
    image_field_key: str = "image_url"
    admin_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            shop_domain=os.getenv("SHOPIFY_STORE_DOMAIN"),
            access_token=os.getenv("SHOPIFY_ADMIN_ACCESS_TOKEN"),
            api_version=os.getenv("SHOPIFY_API_VERSION", "2024-10"),
            db_path=Path(os.getenv("ZOO_DB_PATH", "data/zoo.db")),
            image_field_key=os.getenv("ZOO_IMAGE_FIELD_KEY", "image_url"),
            admin_api_key=os.getenv("ZOO_API_KEY"),
        )

    @property
    def shopify_configured(self) -> bool:
        return bool(self.shop_domain and self.access_token)

    @property
    def field_keys(self) -> MetaobjectFieldKeys:
        return MetaobjectFieldKeys(image=self.image_field_key)
