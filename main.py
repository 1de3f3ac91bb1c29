from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database

from auth import get_current_owner
from config import settings
from database import describe, ensure_indexes, get_database
from diary_service import DiaryService
from errors import DiaryError
from logger import logger
from periods import parse_sort
from schemas import DiaryCount, DiaryList, DiaryOut, EmotionCount, Message, WriteDiary

app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_event():
    ensure_indexes(get_database())
    logger.info(f"{settings.app_name} v{settings.app_version} started")


@app.exception_handler(DiaryError)
async def diary_error_handler(request: Request, exc: DiaryError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def jsonable_errors(exc: RequestValidationError):
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Invalid parameters", "errors": jsonable_errors(exc)})


def get_service(db: Database = Depends(get_database)) -> DiaryService:
    return DiaryService.from_database(db)


@app.get("/")
def read_root():
    return {"message": f"{settings.app_name} is running"}


@app.get("/test")
def test_database(db: Database = Depends(get_database)):
    return describe(db)


# -------- Diary Endpoints --------

@app.get("/api/diaries", response_model=DiaryList)
def list_diaries(
    sort: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    owner: str = Depends(get_current_owner),
    service: DiaryService = Depends(get_service),
):
    entries = service.list_entries(owner, parse_sort(sort), search)
    return DiaryList(diaries=[e.to_response() for e in entries])


@app.get("/api/diaries/calendar", response_model=DiaryList)
def list_calendar(
    date: str = Query(""),
    type: str = Query(""),
    sort: Optional[str] = Query(None),
    owner: str = Depends(get_current_owner),
    service: DiaryService = Depends(get_service),
):
    entries = service.list_calendar(owner, type, date, parse_sort(sort))
    return DiaryList(diaries=[e.to_response() for e in entries])


@app.get("/api/diaries/count", response_model=DiaryCount)
def count_diaries(
    date: str = Query(""),
    type: str = Query(""),
    owner: str = Depends(get_current_owner),
    service: DiaryService = Depends(get_service),
):
    diary_count, day_count = service.count_entries(owner, type, date)
    return DiaryCount(diary_count=diary_count, day_count=day_count)


@app.get("/api/diaries/emotions", response_model=EmotionCount)
def count_emotions(
    date: str = Query(""),
    type: str = Query(""),
    owner: str = Depends(get_current_owner),
    service: DiaryService = Depends(get_service),
):
    return EmotionCount(emotions=service.count_emotions(owner, type, date))


@app.get("/api/diaries/{date}", response_model=DiaryOut)
def get_diary(
    date: str,
    owner: str = Depends(get_current_owner),
    service: DiaryService = Depends(get_service),
):
    return service.get_entry(owner, date).to_response()


@app.post("/api/diaries", response_model=Message)
def write_diary(
    payload: WriteDiary,
    owner: str = Depends(get_current_owner),
    service: DiaryService = Depends(get_service),
):
    service.write_entry(owner, payload)
    return Message(message="Diary saved")


@app.delete("/api/diaries/{date}", response_model=Message)
def delete_diary(
    date: str,
    owner: str = Depends(get_current_owner),
    service: DiaryService = Depends(get_service),
):
    service.delete_entry(owner, date)
    return Message(message="Diary deleted")


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.host}:{settings.port}")
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
