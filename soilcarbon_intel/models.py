from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from .rules import DEFAULT_QUERY, EXPORT_FILENAME


class ProcessingStatus(str, Enum):
    IDLE = "IDLE"
    SEARCHING = "SEARCHING"
    EXTRACTING = "EXTRACTING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class RawPaper(BaseModel):
    id: str
    text: str
    status: Literal["pending", "processing", "done", "failed"] = "pending"


class ExtractedData(BaseModel):
    """
    Metadata the LLM extracts from one abstract.

    Field names are the CSV column names. Enumerated fields stay plain
    strings here; their vocabularies live in the LLM response schema.
    """

    model_config = ConfigDict(extra="ignore")

    # Bibliometrics
    Year: Optional[int] = None
    Authors: Optional[str] = None
    Title: Optional[str] = None
    Journal: Optional[str] = None
    Open_Access: Optional[str] = None

    # Geography & sampling
    Scale: Optional[str] = None
    Continent: Optional[str] = None
    Country: Optional[str] = None
    # raw string from the LLM, float after cleaning
    Longitude: Optional[Union[float, str]] = None
    Latitude: Optional[Union[float, str]] = None
    Sampling_Year: Optional[str] = None
    Sampling_Design: Optional[str] = None
    Sampling_Depth: Optional[str] = None
    Soil_Status: Optional[str] = None
    LULC: Optional[str] = None

    # Spectral analysis
    Spectrometer: Optional[str] = None
    Spectral_Region: Optional[str] = None
    Spectral_Range_Val: Optional[str] = None
    Spectral_Library: Optional[str] = None
    Spectral_Preprocessing: Optional[str] = None
    Transfer_Learning: Optional[str] = None

    # Modelling & validation
    Target_Property: Optional[str] = None
    No_Samples_Cal: Optional[int] = None
    No_Samples_Val: Optional[int] = None
    Split_Method: Optional[str] = None
    Variable_Selection: Optional[str] = None
    Calibration_Model: Optional[str] = None
    Auxiliary_Predictors: Optional[str] = None
    Validation_Type: Optional[str] = None
    R2: Optional[float] = None
    RMSE: Optional[float] = None
    RPIQ: Optional[float] = None
    r: Optional[float] = None


class ProcessedPaper(ExtractedData):
    id: str
    raw_text: str


class SearchRequest(BaseModel):
    query: str = Field(default=DEFAULT_QUERY, min_length=1)


class ExtractRequest(BaseModel):
    text: str = Field(min_length=1)


class RunResponse(BaseModel):
    status: ProcessingStatus
    query: str
    papers: List[ProcessedPaper] = Field(default_factory=list)
    logs: List[str] = Field(default_factory=list)


class ExportRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    filename: str = Field(default=EXPORT_FILENAME, examples=[EXPORT_FILENAME])
    # also write a copy under the configured export directory
    save: bool = False


class ConfigResponse(BaseModel):
    model: str
    api_key_configured: bool
    headers: List[str]
    default_query: str


class HealthResponse(BaseModel):
    ok: bool = True
