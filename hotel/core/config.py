import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Загрузка переменных из .env
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


class Settings(BaseModel):
    project_name: str = "Hotel Management"
    database_url: str = "sqlite+aiosqlite:///./hotel.db"

    # Business calendar: "today" for check-in/check-out transitions
    hotel_timezone: str = "UTC"

    # Scheduler settings
    enable_room_status_sweep: bool = True
    room_status_sweep_interval_minutes: int = 5
    sweep_on_startup: bool = True

    # Availability: treat rooms in maintenance/cleaning as never available
    availability_checks_room_status: bool = False

    # Web
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    seed_demo_data: bool = False

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings(
    database_url=os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./hotel.db"),
    hotel_timezone=os.environ.get("HOTEL_TIMEZONE", "UTC"),
    enable_room_status_sweep=_env_bool("ENABLE_ROOM_STATUS_SWEEP", "true"),
    room_status_sweep_interval_minutes=int(
        os.environ.get("ROOM_STATUS_SWEEP_INTERVAL_MINUTES", "5")
    ),
    sweep_on_startup=_env_bool("SWEEP_ON_STARTUP", "true"),
    availability_checks_room_status=_env_bool(
        "AVAILABILITY_CHECKS_ROOM_STATUS", "false"
    ),
    cors_origins=os.environ.get(
        "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
    ),
    seed_demo_data=_env_bool("SEED_DEMO_DATA", "false"),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
