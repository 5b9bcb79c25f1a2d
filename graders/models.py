from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Question(BaseModel):
    id: str
    text: str = ""
    answer_key: str
    # Overrides the configured marks per question when set
    max_marks: Optional[float] = Field(default=None, ge=0)


class Answer(BaseModel):
    question_id: str
    text: Optional[str] = ""
    # Opaque speech-to-text / client payload, never inspected
    metadata: Any = None


class Score(BaseModel):
    question_id: str
    similarity: float = Field(ge=0, le=1)
    awarded: float = Field(ge=0)


class GradingResult(BaseModel):
    scores: List[Score]
    total_awarded: float


class DetailedBreakdown(BaseModel):
    matched_keywords: List[str] = []
    missed_keywords: List[str] = []
    readability_score: float = 0.0


class SimilarityBreakdown(BaseModel):
    semantic_similarity: float
    stemmed_similarity: float
    keyword_similarity: float
    structural_similarity: float
    overall_similarity: float
    # Weighted sum before dampening, used for answer-to-answer comparison
    raw_similarity: float = 0.0
    detailed_breakdown: DetailedBreakdown


class SubmissionText(BaseModel):
    student_id: str
    answer_text: Optional[str] = ""


class PlagiarismCase(BaseModel):
    student_a: str
    student_b: str
    similarity: float
    risk_level: RiskLevel


class KeywordAnalysis(BaseModel):
    matched: List[str] = []
    missed: List[str] = []
    suggestions: List[str] = []


class StudentFeedback(BaseModel):
    overall_score: int
    banded_marks: float = 0
    strengths: List[str]
    improvements: List[str]
    keyword_analysis: KeywordAnalysis
    detailed_comments: str
    plagiarism_risk: RiskLevel
    sentiment: Dict[str, Optional[float]] = {}


class QuestionFeedback(BaseModel):
    question_id: str
    feedback: StudentFeedback
    breakdown: Optional[SimilarityBreakdown] = None


class SubmissionReport(BaseModel):
    scores: List[Score]
    total_awarded: float
    feedback: List[QuestionFeedback]


class ReportRow(BaseModel):
    student_id: str
    answer: str
    score: float = 0
    similarity: float = 0


class ScoreDistribution(BaseModel):
    excellent: int = 0  # 90-100%
    good: int = 0  # 70-89%
    average: int = 0  # 50-69%
    poor: int = 0  # 0-49%


class TeacherReport(BaseModel):
    question_id: str
    question_text: str
    total_submissions: int
    average_score: float
    score_distribution: ScoreDistribution
    common_mistakes: List[str]
    top_performers: int
    needs_attention: int


class StudentSubmission(BaseModel):
    """A stored submission as handed over by the persistence layer"""

    student_id: str
    answers: List[Answer]
    scores: List[Score] = []


class QuestionPlagiarism(BaseModel):
    question_id: str
    question_text: str
    plagiarism_cases: List[PlagiarismCase]


class AssignmentReport(BaseModel):
    total_submissions: int
    question_reports: List[TeacherReport]
    plagiarism_reports: List[QuestionPlagiarism]
