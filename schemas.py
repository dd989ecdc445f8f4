from pydantic import BaseModel, Field, StrictStr

from models import MAX_SHORT_ID_LENGTH


class CreateLinkRequest(BaseModel):
    short_id: StrictStr = Field(..., min_length=1, max_length=MAX_SHORT_ID_LENGTH)
    target_url: StrictStr = Field(..., min_length=1)


class CreateLinkResponse(BaseModel):
    message: str
    short_id: str
    target_url: str


class DeleteLinkResponse(BaseModel):
    message: str
