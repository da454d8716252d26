"""Pydantic models for the /api/generate request and response"""
from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    # Every field is optional here so that missing values answer 400 with a
    # single message instead of FastAPI's per-field 422 detail.
    model_config = ConfigDict(populate_by_name=True)

    base64_image: str | None = Field(None, alias="base64Image")
    mime_type: str | None = Field(None, alias="mimeType")
    background_color: str | None = Field(None, alias="backgroundColor")
    outfit: str | None = None
    enable_beautification: bool | None = Field(None, alias="enableBeautification")

    def missing_fields(self) -> list[str]:
        missing = [
            alias
            for alias, value in (
                ("base64Image", self.base64_image),
                ("mimeType", self.mime_type),
                ("backgroundColor", self.background_color),
                ("outfit", self.outfit),
            )
            if not value
        ]
        # null is present and falsy; only an absent key counts as missing.
        if "enable_beautification" not in self.model_fields_set:
            missing.append("enableBeautification")
        return missing


class GenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base64_image: str = Field(..., alias="base64Image")
