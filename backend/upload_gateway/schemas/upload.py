from pydantic import BaseModel


class RootResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    error: str


class ForbiddenResponse(BaseModel):
    status: int
    message: str
