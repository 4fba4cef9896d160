import os

from dotenv import load_dotenv

load_dotenv()


class FrontendConfig:
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000/api")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "60"))
