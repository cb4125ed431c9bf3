from pydantic import BaseModel, Field


class EnrollRequest(BaseModel):
    courseId: str = Field(..., min_length=1)
