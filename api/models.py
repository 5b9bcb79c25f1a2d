from typing import List, Optional

from pydantic import BaseModel, Field

from graders.models import Answer, PlagiarismCase, Question, StudentSubmission, SubmissionText


class SimilarityRequest(BaseModel):
    student_text: str = ""
    reference_text: str = ""


class GradeRequest(BaseModel):
    questions: List[Question]
    answers: List[Answer]
    pass_threshold: Optional[float] = Field(default=None, ge=0, le=1)
    marks_per_question: Optional[float] = Field(default=None, ge=0)


class PlagiarismRequest(BaseModel):
    submissions: List[SubmissionText]


class PlagiarismResponse(BaseModel):
    total_pairs: int
    plagiarism_cases: List[PlagiarismCase]


class ReportRequest(BaseModel):
    questions: List[Question]
    submissions: List[StudentSubmission]
