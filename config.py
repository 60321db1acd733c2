# config.py
import os
from functools import lru_cache
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    mongo_uri: Optional[str] = None
    mongo_db_name: str = "tripService"
    environment: str = "local"
    port: int = 8083
    log_level: str = "INFO"

    route_service_url_production: Optional[str] = None
    route_service_url_local: Optional[str] = None
    schedule_service_url_production: Optional[str] = None
    schedule_service_url_local: Optional[str] = None
    permit_service_url_production: Optional[str] = None
    permit_service_url_local: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            mongo_uri=os.getenv("MONGO_URI_TRIP"),
            mongo_db_name=os.getenv("MONGO_DB_NAME", "tripService"),
            environment=os.getenv("ENVIRONMENT", "local"),
            port=int(os.getenv("PORT", "8083")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            route_service_url_production=os.getenv("ROUTE_SERVICE_URL_PRODUCTION"),
            route_service_url_local=os.getenv("ROUTE_SERVICE_URL_LOCAL"),
            schedule_service_url_production=os.getenv("SCHEDULE_SERVICE_URL_PRODUCTION"),
            schedule_service_url_local=os.getenv("SCHEDULE_SERVICE_URL_LOCAL"),
            permit_service_url_production=os.getenv("PERMIT_SERVICE_URL_PRODUCTION"),
            permit_service_url_local=os.getenv("PERMIT_SERVICE_URL_LOCAL"),
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def upstream_urls(self) -> Dict[str, Optional[str]]:
        """Base URLs of the route, schedule and permit services for the current mode."""
        if self.is_production:
            return {
                "route": self.route_service_url_production,
                "schedule": self.schedule_service_url_production,
                "permit": self.permit_service_url_production,
            }
        return {
            "route": self.route_service_url_local,
            "schedule": self.schedule_service_url_local,
            "permit": self.permit_service_url_local,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
