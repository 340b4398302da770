"""simsurvey configuration."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """simsurvey app settings."""

    app_name: str = "simsurvey"
    debug: bool = False
    log_level: str = "INFO"

    # API
    cors_origins: str = "*"

    # ============== STORAGE ==============
    aws_region: str = "us-east-2"
    dynamodb_endpoint_url: str | None = None  # e.g. http://localhost:8000 for DynamoDB Local

    groups_table: str = "Groups"
    responses_table: str = "Responses"
    survey_status_table: str = "SurveyStatus"
    survey_counter_table: str = "SurveyCounter"
    projects_table: str = "Projects"
    questions_table: str = "Questions"

    # Singleton row keys
    survey_id: str = "my-survey"
    counter_key: str = "totalSurveys"

    # Completion notifications (skipped when unset)
    sns_topic_arn: str | None = None

    # ============== QUESTION DEFAULTS ==============
    default_font_face: str = "Arial"
    default_color_scheme: str = "#000000"
    default_pre_answer: str = "Thinking..."
    default_delay_seconds: float = 1.0

    class Config:
        env_prefix = "SIMSURVEY_"
        env_file = ".env"


settings = Settings()
