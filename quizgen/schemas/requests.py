"""Request schemas."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class GenerateQuizRequest(BaseModel):
    topic: Optional[str] = Field(None, description="Free-text topic, 1-100 characters after trimming")

    class Config:
        json_schema_extra = {
            "example": {"topic": "Solar System"}
        }


class SubmitQuizRequest(BaseModel):
    quizId: Optional[str] = Field(None, description="Id returned by the generate endpoint")
    answers: Optional[Dict[str, str]] = Field(None, description="Question id -> chosen label (A-D)")

    class Config:
        json_schema_extra = {
            "example": {
                "quizId": "0b6f7c1e-6a53-4a8f-9a0e-2f7d3f1f8c11",
                "answers": {"q1": "A", "q2": "B", "q3": "A", "q4": "C", "q5": "D"}
            }
        }
