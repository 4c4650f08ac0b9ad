from dataclasses import dataclass
import os

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_name: str
    log_level: str
    default_output_path: str
    default_delimiter: str


def get_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "recordstats"),
        log_level=os.getenv("LOG_LEVEL", "WARNING"),
        default_output_path=os.getenv("DEFAULT_OUTPUT_PATH") or "report.txt",
        default_delimiter=os.getenv("DEFAULT_DELIMITER") or ",",
    )
