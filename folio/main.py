# folio/main.py
# Entry point: uvicorn folio.main:app
from folio.app.main import app  # noqa: F401
