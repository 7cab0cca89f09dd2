import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Local batch conversion: Teams attendance reports in, dashboard JSON out
INPUT_DIR = os.getenv("INPUT_DIR", "data/sample")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "public/data")
INPUT_EXTENSION = os.getenv("INPUT_EXTENSION", ".csv")

# Optional: also save the conversion report as JSON
REPORT_PATH = os.getenv("REPORT_PATH", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
