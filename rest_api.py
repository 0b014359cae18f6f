import datetime
import os
import time
from decimal import Decimal
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from config import APP_VERSION, load_settings
from db import ExerciseRepository
from errors import ExerciseError, ExerciseNotFoundError
from exercise_service import ExerciseService
from exercise_validator import ExerciseValidator
from localization import Translator
from logging_config import setup_logger
from range_query_service import RangeQueryService


class CreateExerciseRequest(BaseModel):
    date: str
    type: str
    title: Optional[str] = None
    target: Decimal


class UpdateExerciseProgressRequest(BaseModel):
    progress: Decimal


class RateLimiter:
    """Simple in-memory rate limiter."""

    def __init__(self, limit: int = 60, window: int = 60) -> None:
        self.limit = limit
        self.window = window
        self.requests: dict[str, list[float]] = {}

    async def __call__(self, request: Request, call_next):
        ip = request.client.host if request.client else "anon"
        now = time.time()
        history = [t for t in self.requests.get(ip, []) if now - t < self.window]
        if len(history) >= self.limit:
            logger.warning(f"Rate limit exceeded for {ip}")
            return Response("rate limit exceeded", status_code=429)
        history.append(now)
        self.requests[ip] = history
        return await call_next(request)


class CalendarAPI:
    """Provides REST endpoints for the exercise calendar."""

    def __init__(
        self,
        db_path: str = "calendar.db",
        yaml_path: str = "settings.yaml",
        *,
        today_provider: Callable[[], datetime.date] = datetime.date.today,
        rate_limit: int | None = None,
        rate_window: int | None = None,
    ) -> None:
        self.db_path = db_path
        self.settings = load_settings(yaml_path)
        setup_logger(self.settings.log_level, self.settings.log_file)
        self.translator = Translator(self.settings.language)
        self.exercises = ExerciseRepository(db_path)
        self.validator = ExerciseValidator(self.translator)
        self.service = ExerciseService(self.exercises, self.validator)
        self.queries = RangeQueryService(
            self.exercises, today_provider=today_provider
        )
        self.app = FastAPI(
            title="Sport Calendar API",
            description="REST API for planning exercises and tracking daily progress",
            version=APP_VERSION,
        )
        limit = rate_limit if rate_limit is not None else self.settings.rate_limit
        if limit is not None:
            window = rate_window or self.settings.rate_window
            limiter = RateLimiter(limit=limit, window=window)
            self.app.middleware("http")(limiter)
        self._setup_routes()

    @staticmethod
    def _bad_request(e: ExerciseError) -> HTTPException:
        logger.warning(f"Rejected request: {e} (field={e.field})")
        return HTTPException(status_code=400, detail=str(e))

    def _setup_routes(self) -> None:
        @self.app.exception_handler(RequestValidationError)
        async def request_validation_handler(
            request: Request, exc: RequestValidationError
        ):
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            logger.warning(
                f"Invalid request on {request.method} {request.url.path}: {problems}"
            )
            return JSONResponse(status_code=400, content={"detail": problems})

        @self.app.get(
            "/health",
            summary="Health check",
            description="Verify API and database connectivity.",
        )
        def health():
            """Return API and database connection status."""
            try:
                # simple query to verify database connectivity
                self.exercises.fetch_all("SELECT 1;")
                return {"status": "ok"}
            except Exception as e:  # pragma: no cover - connectivity failure
                raise HTTPException(status_code=500, detail=str(e))

        @self.app.get("/exercises", tags=["Exercises"])
        def list_exercises(
            start: str = Query(..., alias="from"),
            end: str = Query(..., alias="to"),
        ):
            try:
                rows = self.queries.list_exercises(start, end)
            except ExerciseError as e:
                raise self._bad_request(e)
            return [ex.to_dict() for ex in rows]

        @self.app.get("/exercises/daily-summary", tags=["Exercises"])
        def daily_summary(
            start: str = Query(..., alias="from"),
            end: str = Query(..., alias="to"),
        ):
            try:
                summaries = self.queries.summarize(start, end)
            except ExerciseError as e:
                raise self._bad_request(e)
            return [s.to_dict() for s in summaries]

        @self.app.get("/exercises/{exercise_id}", tags=["Exercises"])
        def get_exercise(exercise_id: str):
            try:
                return self.service.get(exercise_id).to_dict()
            except ExerciseNotFoundError as e:
                raise HTTPException(status_code=404, detail=str(e))

        @self.app.post("/exercises", status_code=201, tags=["Exercises"])
        def create_exercise(request: CreateExerciseRequest, response: Response):
            try:
                exercise = self.service.create(request.model_dump())
            except ExerciseError as e:
                raise self._bad_request(e)
            response.headers["Location"] = f"/exercises/{exercise.id}"
            return exercise.to_dict()

        @self.app.patch("/exercises/{exercise_id}/progress", tags=["Exercises"])
        def update_progress(exercise_id: str, request: UpdateExerciseProgressRequest):
            try:
                exercise = self.service.update_progress(exercise_id, request.progress)
            except ExerciseNotFoundError as e:
                raise HTTPException(status_code=404, detail=str(e))
            except ExerciseError as e:
                raise self._bad_request(e)
            return exercise.to_dict()


api = CalendarAPI(
    db_path=os.environ.get("DB_PATH", "calendar.db"),
    yaml_path=os.environ.get("SETTINGS_PATH", "settings.yaml"),
)
app = api.app

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app)
