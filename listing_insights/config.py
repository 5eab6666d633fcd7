"""Environment-driven defaults shared by the services and the API layer."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATA_DIR = os.getenv("DATA_DIR", str(Path(__file__).resolve().parents[1] / "data"))

DEFAULT_INTEREST_RATE = float(os.getenv("ASSUME_INTEREST_RATE", "6.5"))
DEFAULT_LOAN_TERM_YEARS = int(os.getenv("ASSUME_LOAN_TERM_YEARS", "30"))
DEFAULT_PMI_RATE = float(os.getenv("ASSUME_PMI_RATE", "0.5"))
DEFAULT_DOWN_PAYMENT_PERCENT = float(os.getenv("ASSUME_DOWN_PAYMENT_PERCENT", "20"))
TARGET_DTI_RATIO = float(os.getenv("TARGET_DTI_RATIO", "28"))

# Seconds an analysis stays in the in-process cache.
ANALYSIS_CACHE_TTL = float(os.getenv("ANALYSIS_CACHE_TTL", "21600"))
