# file: main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foodbank.controllers.expiration import router as expiration_router
from foodbank.controllers.notification import router as notification_router
from foodbank.controllers.pickups import router as pickups_router
from foodbank.services.firebase_app import initialize_firebase
from foodbank.utils.log_setup import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Food Bank Notifications API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(expiration_router, prefix="/api/expiration", tags=["expiration"])
app.include_router(pickups_router, prefix="/api/pickups", tags=["pickups"])
app.include_router(notification_router, prefix="/api/notifications", tags=["notifications"])


@app.get("/")
async def root():
    return {"message": "Food Bank Notifications API is running"}


@app.on_event("startup")
async def startup_event():
    try:
        initialize_firebase()
    except Exception as e:
        logger.critical(f"FATAL: Error initializing Firebase Admin SDK: {e}")
