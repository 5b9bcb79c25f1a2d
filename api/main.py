import logging
import os
import sys

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from api.models import (
    GradeRequest,
    PlagiarismRequest,
    PlagiarismResponse,
    ReportRequest,
    SimilarityRequest,
)
from graders.models import AssignmentReport, SimilarityBreakdown, SubmissionReport
from graders.orchestrator import GradingOrchestrator
from utils.settings import GradingSettings

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = GradingSettings.from_env()

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address)

app = FastAPI(
    title="Answer Grader API",
    description="Similarity-based grading, feedback and plagiarism checks for assignment answers",
    version="1.0.0",
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

print("🚀 Starting Answer Grader API...")
orchestrator = GradingOrchestrator(settings)
print("✓ API ready\n")


@app.get("/")
@limiter.limit(settings.rate_limit)
async def root(request: Request):
    """Root endpoint - API health check"""
    return {
        "message": "Answer Grader API",
        "status": "running",
        "version": "1.0.0",
        "features": ["similarity", "grading", "feedback", "plagiarism", "rate_limiting"],
    }


@app.post("/similarity", response_model=SimilarityBreakdown)
@limiter.limit(settings.rate_limit)
async def similarity(request: Request, payload: SimilarityRequest):
    """Full similarity breakdown of a student answer against a reference"""
    try:
        return await run_in_threadpool(
            orchestrator.scorer.score, payload.student_text, payload.reference_text
        )
    except Exception as e:
        logger.exception("Similarity scoring failed")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/grade", response_model=SubmissionReport)
@limiter.limit(settings.rate_limit)
async def grade(request: Request, payload: GradeRequest):
    """
    Grade one submission against its assignment's answer keys.
    Every answer gets a score; unknown questions score zero.
    """
    try:
        return await run_in_threadpool(
            orchestrator.grade_submission,
            payload.questions,
            payload.answers,
            pass_threshold=payload.pass_threshold,
            marks_per_question=payload.marks_per_question,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Grading failed")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/plagiarism", response_model=PlagiarismResponse)
@limiter.limit(settings.rate_limit)
async def plagiarism(request: Request, payload: PlagiarismRequest):
    """Pairwise plagiarism check over answers to one question"""
    n = len(payload.submissions)
    try:
        # O(n²) scoring runs off the event loop
        cases = await run_in_threadpool(
            orchestrator.detector.detect_pairwise, payload.submissions
        )
    except Exception as e:
        logger.exception("Plagiarism check failed")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return PlagiarismResponse(total_pairs=n * (n - 1) // 2, plagiarism_cases=cases)


@app.post("/report", response_model=AssignmentReport)
@limiter.limit(settings.rate_limit)
async def report(request: Request, payload: ReportRequest):
    """Teacher report with per-question statistics and plagiarism cases"""
    try:
        return await run_in_threadpool(
            orchestrator.assignment_report, payload.questions, payload.submissions
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Report generation failed")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.get("/health")
@limiter.limit(settings.rate_limit)
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "orchestrator": "initialized",
        "components": ["normalizer", "scorer", "grader", "plagiarism", "feedback"],
        "pos_tagger": "ready" if orchestrator.extractor.tagger_ready else "fallback",
        "pass_threshold": settings.pass_threshold,
        "rate_limiting": "enabled",
    }


def run():
    """Serve the API with uvicorn (HOST and PORT from the environment)"""
    uvicorn.run(
        app,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").lower(),
    )


if __name__ == "__main__":
    run()
