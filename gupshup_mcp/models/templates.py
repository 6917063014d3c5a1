# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Template management tool parameters."""

from enum import Enum

from pydantic import BaseModel, Field


class TemplateCategory(str, Enum):
    MARKETING = "MARKETING"
    UTILITY = "UTILITY"
    AUTHENTICATION = "AUTHENTICATION"


class TemplateType(str, Enum):
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"
    LOCATION = "LOCATION"
    CAROUSEL = "CAROUSEL"
    PRODUCT = "PRODUCT"
    CATALOG = "CATALOG"
    LTO = "LTO"


class TemplateButton(BaseModel):
    type: str
    text: str
    url: str | None = None
    phone_number: str | None = Field(None, serialization_alias="phoneNumber")


class CreateTemplateParams(BaseModel):
    app_id: str | None = None
    element_name: str = Field(..., description="Template name (lowercase, underscores)")
    language_code: str = Field(..., description="e.g. en_US")
    category: TemplateCategory
    template_type: TemplateType
    content: str = Field(..., description="Template body with {{1}} style placeholders")
    header: str | None = None
    footer: str | None = None
    buttons: list[TemplateButton] | None = None
    example: str | None = Field(None, description="Body with the placeholders filled in")
    example_media: str | None = Field(None, description="handleId returned by upload_media")
    vertical: str | None = None
    allow_template_category_change: bool | None = None


class EditTemplateParams(BaseModel):
    app_id: str | None = None
    template_id: str
    content: str | None = None
    header: str | None = None
    footer: str | None = None
    buttons: list[TemplateButton] | None = None
    category: TemplateCategory | None = None
    template_type: TemplateType | None = None
    example: str | None = None
    example_media: str | None = None


class DeleteTemplateParams(BaseModel):
    app_id: str | None = None
    element_name: str
    template_id: str | None = Field(None, description="Delete a single language variant only")


class UploadMediaParams(BaseModel):
    app_id: str | None = None
    file: str = Field(..., description="Public URL of the media file")
    file_type: str = Field(..., description="MIME type, e.g. image/jpeg")
