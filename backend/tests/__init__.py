# Seed the environment before anything imports `meeting_notes.main`, which
# builds the app (and therefore reads settings) at import time.
from __future__ import annotations

import os
import tempfile

os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="meeting-notes-logs-"))
