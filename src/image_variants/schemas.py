"""Request and response bodies of the HTTP API.

Field names follow the JSON the front end already sends and reads
(``base64image``, ``imageID``, ``imagename``). Required fields are declared
optional here so that a missing value is reported as a 400 by the pipeline's
own validation rather than as a schema error.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class UploadImageRequest(BaseModel):
    base64image: Optional[str] = None


class ImageIDRequest(BaseModel):
    imageID: Optional[str] = None


class WatermarkAssetRequest(BaseModel):
    base64image: Optional[str] = None
    imagename: Optional[str] = None


class HealthResponse(BaseModel):
    message: str


class StatusResponse(BaseModel):
    status: str


class UploadImageResponse(StatusResponse):
    imageID: str


class WatermarkAssetResponse(StatusResponse):
    imageName: str
