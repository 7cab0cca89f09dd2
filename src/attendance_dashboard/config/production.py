import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

INPUT_DIR = os.getenv("INPUT_DIR", "data/sample")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "public/data")
INPUT_EXTENSION = os.getenv("INPUT_EXTENSION", ".csv")

REPORT_PATH = os.getenv("REPORT_PATH", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
