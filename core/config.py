"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.schema import ExportConfig

DEFAULT_SAMPLE_PATH = Path(__file__).resolve().parent.parent / "samples" / "sample_statement.csv"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
    
    # Application
    app_name: str = Field(default="Card Statement Converter", alias="APP_NAME")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    
    # Sample statement
    sample_url: Optional[str] = Field(default=None, alias="SAMPLE_URL")
    sample_file_path: str = Field(default=str(DEFAULT_SAMPLE_PATH), alias="SAMPLE_FILE_PATH")
    sample_timeout: int = Field(default=10, alias="SAMPLE_TIMEOUT")
    
    # Output
    output_filename: str = Field(default="ledger_import.csv", alias="OUTPUT_FILENAME")
    
    # Export defaults
    default_method: str = Field(default="payment", alias="DEFAULT_METHOD")
    default_category: str = Field(default="その他", alias="DEFAULT_CATEGORY")
    default_subcategory: str = Field(default="その他", alias="DEFAULT_SUBCATEGORY")
    default_payment_source: str = Field(default="クレジットカード", alias="DEFAULT_PAYMENT_SOURCE")
    default_income_target: str = Field(default="", alias="DEFAULT_INCOME_TARGET")
    default_currency: str = Field(default="JPY", alias="DEFAULT_CURRENCY")
    default_aggregation_setting: str = Field(default="常に集計に含める", alias="DEFAULT_AGGREGATION_SETTING")
    default_item_prefix: str = Field(default="", alias="DEFAULT_ITEM_PREFIX")
    default_memo_prefix: str = Field(default="カード明細", alias="DEFAULT_MEMO_PREFIX")
    default_include_source_in_memo: bool = Field(default=True, alias="DEFAULT_INCLUDE_SOURCE_IN_MEMO")
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper
    
    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v
    
    @field_validator("sample_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v < 1:
            raise ValueError("Sample timeout must be at least 1 second")
        return v
    
    def default_export_config(self) -> ExportConfig:
        """Build the export configuration used when the caller supplies none."""
        return ExportConfig(
            method=self.default_method,
            category=self.default_category,
            subcategory=self.default_subcategory,
            payment_source=self.default_payment_source,
            income_target=self.default_income_target,
            currency=self.default_currency,
            aggregation_setting=self.default_aggregation_setting,
            item_prefix=self.default_item_prefix,
            memo_prefix=self.default_memo_prefix,
            include_source_in_memo=self.default_include_source_in_memo,
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.
    
    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
