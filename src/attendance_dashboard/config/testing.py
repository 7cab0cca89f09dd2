import os

SECRET_KEY = "test-secret"

INPUT_DIR = os.getenv("INPUT_DIR", "tests/fixtures/input")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "tests/fixtures/output")
INPUT_EXTENSION = ".csv"

REPORT_PATH = ""

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DEBUG = False
TESTING = True
