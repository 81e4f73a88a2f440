"""
Pydantic models for the NSRDB dataset catalog query response.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DatasetLink(BaseModel):
    """Download link for one year/interval of a dataset."""
    year: Union[int, str]
    interval: Optional[int] = None
    link: str


class DatasetInfo(BaseModel):
    """One dataset entry from the catalog ``outputs`` list."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    display_name: str = Field("", alias="displayName")
    type: Optional[str] = None
    resolution: Optional[Union[str, int]] = None
    available_years: list[Union[int, str]] = Field(default_factory=list, alias="availableYears")
    links: list[DatasetLink] = Field(default_factory=list)
