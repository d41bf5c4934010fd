from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from decouple import config, Csv
from app.routers import homework, schedule
from app.database import client
from app.utils.errors import AppError
from app.utils.uploads import upload_sink
from fastapi.middleware.cors import CORSMiddleware
import logging

LOG_LEVEL = config("LOG_LEVEL", default="INFO")
CORS_ORIGINS = config("CORS_ORIGINS", default="*", cast=Csv())

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting up...")

    upload_sink.init()

    yield

    logger.info("🛑 Shutting down...")
    client.close()

app = FastAPI(title="Tutoring Schedule API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(_: Request, exc: AppError):
    return JSONResponse(jsonable_encoder(exc.to_dict()), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError):
    return JSONResponse(
        {"error": "Неверный формат данных", "details": jsonable_encoder(exc.errors())},
        status_code=400,
    )


app.include_router(schedule.router, prefix="/schedule", tags=["Schedule"])
app.include_router(homework.router, prefix="/homework", tags=["Homework"])

@app.get("/")
def root():
    return {"message": "API is running!"}
