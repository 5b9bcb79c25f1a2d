from typing import Annotated, List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

load_dotenv()

DEFAULT_ORIGINS = [
    "http://localhost:8501",  # Local Streamlit
    "http://localhost:3000",  # Local dev
]


class GradingSettings(BaseSettings):
    """
    Grading configuration shared by every component.
    One pass threshold is used for both grading and feedback.
    """

    pass_threshold: float = Field(default=0.70, ge=0, le=1, validation_alias="PASS_THRESHOLD")
    marks_per_question: float = Field(default=1, ge=0, validation_alias="MARKS_PER_QUESTION")
    plagiarism_max_cases: int = Field(default=10, ge=1, validation_alias="PLAGIARISM_MAX_CASES")
    nltk_auto_download: bool = Field(default=False, validation_alias="NLTK_AUTO_DOWNLOAD")
    # Comma-separated in the environment
    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default=DEFAULT_ORIGINS, validation_alias="ALLOWED_ORIGINS"
    )
    rate_limit: str = Field(default="30/minute", validation_alias="RATE_LIMIT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            value = [o.strip() for o in value.split(",") if o.strip()]
        # If empty in .env, default to localhost for development
        return value or DEFAULT_ORIGINS

    @classmethod
    def from_env(cls) -> "GradingSettings":
        """Read settings from the environment (.env already loaded)"""
        return cls()
