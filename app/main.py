import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.exceptions import ConstraintViolation, NotFound, StoreUnavailable
from app.middleware import RequestLoggingMiddleware
from app.routers import answers, metrics, questions, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Q&A API",
    description="Users, questions and answers with contiguous sequence-assigned ids",
    version="1.0.0",
)

# Middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(users.router)
app.include_router(questions.router)
app.include_router(answers.router)
app.include_router(metrics.router)


# ---------------------------------------------------------------------------
# Failure -> response mapping
# ---------------------------------------------------------------------------

@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"code": exc.code, "message": exc.message})

@app.exception_handler(ConstraintViolation)
async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
    return JSONResponse(status_code=400, content={"message": exc.detail, "sql_state": exc.sql_state})

@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error("Store unavailable on %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=503, content={"message": exc.detail})

@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    # One message per offending body field, keyed by the field name.
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err["loc"] if part != "body"]
        errors[".".join(loc) or "body"] = err["msg"]
    return JSONResponse(status_code=400, content=errors)


@app.get("/welcome")
async def welcome():
    return {"message": "Welcome to the Q&A API"}

@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
