"""
Pydantic schemas for transaction records and export configuration.
All models are frozen: once built they are read-only values.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionRecord(BaseModel):
    """One normalized card transaction."""
    model_config = ConfigDict(frozen=True)
    
    date: str = Field(..., pattern=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$", description="Date as YYYY-MM-DD")
    store: str = Field(default="", description="Payee or merchant name, may be empty")
    amount: float = Field(..., gt=0, description="Charged amount, always positive")
    source: str = Field(default="", description="Originating input, usually the file name")


class ExportConfig(BaseModel):
    """
    Column values applied to every row of the ledger import CSV.
    Accepts both snake_case names and the camelCase names used by form inputs.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    method: str = ""
    category: str = ""
    subcategory: str = ""
    payment_source: str = Field(default="", alias="paymentSource")
    income_target: str = Field(default="", alias="incomeTarget")
    currency: str = ""
    aggregation_setting: str = Field(default="", alias="aggregationSetting")
    item_prefix: str = Field(default="", alias="itemPrefix")
    memo_prefix: str = Field(default="", alias="memoPrefix")
    include_source_in_memo: bool = Field(default=False, alias="includeSourceInMemo")
    
    @field_validator(
        "method", "category", "subcategory", "payment_source", "income_target",
        "currency", "aggregation_setting", "item_prefix", "memo_prefix",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        """Treat missing text inputs as empty strings."""
        if v is None:
            return ""
        return v


class Summary(BaseModel):
    """Count and total of a record list."""
    model_config = ConfigDict(frozen=True)
    
    count: int = 0
    total: float = 0.0


class MonthlySummary(BaseModel):
    """Count and total for one calendar month."""
    model_config = ConfigDict(frozen=True)
    
    month: str = Field(..., description="Month as YYYY-MM")
    count: int
    total: float


class ConversionResult(BaseModel):
    """Everything derived from one conversion batch."""
    model_config = ConfigDict(frozen=True)
    
    records: List[TransactionRecord] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
    monthly: List[MonthlySummary] = Field(default_factory=list)
    csv: str = Field(default="", description="Ledger import CSV, empty when nothing to export")
    sources: List[str] = Field(default_factory=list)
