import os
from pathlib import Path
from typing import Optional

from aws_lambda_powertools.logging import Logger
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = Logger()


class AppConfig(BaseModel):
    """Application configuration."""

    app_env: str = Field(default="local", description="Application environment")
    aws_region: str = Field(default="us-west-2", description="AWS region of the store")
    aws_endpoint: Optional[str] = Field(
        default="http://localhost:8000", description="DynamoDB endpoint URL"
    )
    table_name: str = Field(
        default="client-entity", description="Name of the DynamoDB table"
    )
    ttl_seconds: int = Field(
        default=3600, ge=0, description="Delay before scheduled items expire"
    )
    max_workers: int = Field(
        default=1, ge=1, description="Concurrent item updates per invocation"
    )
    query_page_size: Optional[int] = Field(
        default=None, ge=1, description="Limit passed to each Query page"
    )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables.

        In 'local' mode (default), it first loads variables from a .env file.
        In 'dev' and 'prod' modes, it reads directly from environment variables.
        Unset variables fall back to placeholder values for a local DynamoDB.
        """

        app_env = os.getenv("APP_ENV", "local").lower()
        logger.debug("App environment", extra={"app_env": app_env})
        if app_env == "local":
            dotenv_path = Path(".env")
            load_dotenv(dotenv_path=dotenv_path, override=True)
            logger.debug("Loaded .env file", extra={"dotenv_path": str(dotenv_path)})
        elif app_env not in ["dev", "prod"]:
            raise ValueError(f"Invalid app environment: {app_env}")

        page_size = os.getenv("QUERY_PAGE_SIZE")

        return cls(
            app_env=app_env,
            aws_region=os.getenv("AWS_REGION") or "us-west-2",
            aws_endpoint=os.getenv("AWS_ENDPOINT") or "http://localhost:8000",
            table_name=os.getenv("TABLE_NAME") or "client-entity",
            ttl_seconds=int(os.getenv("TTL_SECONDS", "3600")),
            max_workers=int(os.getenv("MAX_WORKERS", "1")),
            query_page_size=int(page_size) if page_size else None,
        )
