import os
import dotenv


dotenv.load_dotenv()


# Defaults
VERBOSE = False
LOG_PATH = ""
LOG_LEVEL = "INFO"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

# Deluge Web JSON-RPC endpoint
DELUGE_URL = "http://localhost:8112/json"
DELUGE_PASSWORD = "deluge"
DELUGE_TIMEOUT = ""


def _optional_float(value):
    return float(value) if value else None


class Config:
    VERBOSE = str(os.getenv("VERBOSE", VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # Deluge Configuration
    DELUGE_URL = os.getenv("DELUGE_URL", DELUGE_URL)
    DELUGE_PASSWORD = os.getenv("DELUGE_PASSWORD", DELUGE_PASSWORD)
    # Seconds; empty means no timeout beyond what requests applies
    DELUGE_TIMEOUT = _optional_float(os.getenv("DELUGE_TIMEOUT", DELUGE_TIMEOUT))
