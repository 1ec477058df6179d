import os

DEBUG = False

PUNCH_MODE = os.getenv("PUNCH_MODE", "detailed")

WORKBOOK_CREATOR = os.getenv("WORKBOOK_CREATOR", "Ponto")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
