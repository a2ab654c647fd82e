"""
Pydantic schemas for application settings.
"""
from pydantic import BaseModel
from typing import Dict, Optional, Union

SettingValue = Optional[Union[int, str]]
SettingsPayload = Dict[str, SettingValue]


class EmailTestRequest(BaseModel):
    email: str
    name: Optional[str] = "Test Student"
