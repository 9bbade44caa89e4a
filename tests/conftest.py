import os

# keep test runs from configuring Logfire at import time
os.environ.setdefault("DISABLE_LOGFIRE", "true")
