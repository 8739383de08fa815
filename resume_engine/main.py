from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from resume_engine.api.routes.structure import router as structure_router
from resume_engine.core.rate_limiter import AIRateLimiter

SERVICE_NAME = "resume-structuring-engine"
API_VERSION = "0.1.0"

app = FastAPI(
    title="Resume Structuring Engine",
    description="Turns extracted resume text into an editable, structured CV record, with a rule-based fallback when AI structuring is unavailable",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Set to an (async) callable str -> JSON to enable AI-first structuring.
app.state.ai_structurer = None
app.state.ai_limiter = AIRateLimiter()

app.include_router(structure_router)


@app.get("/", tags=["health"])
def root():
    return {"service": SERVICE_NAME, "status": "running"}


@app.get("/health", tags=["health"])
def health():
    limiter = app.state.ai_limiter
    return {
        "status": "ok",
        "aiConfigured": app.state.ai_structurer is not None,
        "aiBlocked": limiter is not None and limiter.blocked,
    }


def custom_openapi():
    if not app.openapi_schema:
        app.openapi_schema = get_openapi(
            title="Resume Structuring API",
            version=API_VERSION,
            description=(
                "Reads DOCX, PDF and plain-text resumes, splits them into personal info, "
                "experience, education, skills and projects, and scores how complete the "
                "record is. Uses the configured AI structurer when it is available and "
                "rate limits allow; otherwise the rule-based parser answers."
            ),
            routes=app.routes,
        )
    return app.openapi_schema


app.openapi = custom_openapi
