# benigna-api/benigna/config.py
import json
import logging
import os

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKEND = os.getenv("BENIGNA_STORAGE", "json")  # json | memory | firestore
DATA_DIR = os.getenv("BENIGNA_DATA_DIR", "./data")
UPLOAD_DIR = os.getenv("BENIGNA_UPLOAD_DIR", "./uploads")

JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Sao_Paulo")

NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
VIACEP_URL = os.getenv("VIACEP_URL", "https://viacep.com.br/ws")
GEOCODING_TIMEOUT = float(os.getenv("GEOCODING_TIMEOUT", "10"))
GEOCODING_USER_AGENT = os.getenv("GEOCODING_USER_AGENT", "benigna-api/1.0")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@benigna.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def init_firebase():
    import firebase_admin
    from firebase_admin import credentials, firestore

    if os.getenv("GOOGLE_APPLICATION_CREDENTIALS"):
        cred = credentials.ApplicationDefault()
    elif os.getenv("FIREBASE_SERVICE_ACCOUNT_JSON"):
        cred = credentials.Certificate(json.loads(os.getenv("FIREBASE_SERVICE_ACCOUNT_JSON")))
    elif os.path.exists("./serviceAccountKey.json"):
        cred = credentials.Certificate("./serviceAccountKey.json")
    else:
        raise RuntimeError("Firebase credentials not found.")

    try:
        firebase_admin.get_app()
    except ValueError:
        firebase_admin.initialize_app(cred)
    return firestore.client()
