from fastapi import FastAPI
from medichat.api.chat import router as chat_router
from medichat.api.booking import router as booking_router
from fastapi.middleware.cors import CORSMiddleware
from medichat.core.config import ALLOWED_ORIGINS
from medichat.core.logging_config import setup_logging

setup_logging()

app = FastAPI(title="MediChat API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS.split(','),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router, prefix="/api", tags=["Chat"])
app.include_router(booking_router, prefix="/api", tags=["Booking"])

@app.get("/")
def read_root():
    return {"status": "API is running"}
