DEBUG = False
TESTING = True

PUNCH_MODE = "detailed"

WORKBOOK_CREATOR = "Ponto (testes)"

LOG_LEVEL = "WARNING"
