"""
main.py: Launcher for the portal API and the Streamlit dashboard.

Run this file to start both processes and open the predictor page:

    python main.py

The predictor opens at DASHBOARD_URL (default http://127.0.0.1:8501) and the
dataset explorer at DASHBOARD_URL/dataset. The proxy API listens on
API_HOST:API_PORT (default 127.0.0.1:3000) under /api.

This file does NOT contain application logic. See app.py for the FastAPI
application and dashboard/ for the views.

Direct usage (without the dashboard):
    uvicorn app:app --port 3000 --reload
"""

from __future__ import annotations

import subprocess
import sys
import threading
import time
import webbrowser
from pathlib import Path
from urllib.parse import urlparse

import uvicorn

from energy_portal.utils.config import get_settings


PROJECT_ROOT = Path(__file__).resolve().parent
DASHBOARD_SCRIPT = PROJECT_ROOT / "dashboard" / "app.py"


def _start_dashboard(port: int) -> subprocess.Popen:
    """Run the Streamlit dashboard as a child process."""
    return subprocess.Popen(
        [
            sys.executable,
            "-m",
            "streamlit",
            "run",
            str(DASHBOARD_SCRIPT),
            "--server.port",
            str(port),
            "--server.headless",
            "true",
        ],
        cwd=PROJECT_ROOT,
    )


def _open_browser_after_startup(url: str, delay_seconds: float = 3.0) -> None:
    time.sleep(delay_seconds)
    print(f"\n  Opening predictor at {url}\n")
    webbrowser.open(url)


def main() -> None:
    """Start the proxy API and the dashboard, then open the predictor."""
    settings = get_settings()
    dashboard_port = urlparse(settings.dashboard_url).port or 8501

    print("=" * 60)
    print(f"  {settings.app_name}")
    print("=" * 60)
    print(f"  API       : http://{settings.api_host}:{settings.api_port}{settings.api_prefix}")
    print(f"  Backend   : {settings.backend_url}")
    print(f"  Predictor : {settings.dashboard_url}/")
    print(f"  Dataset   : {settings.dashboard_url}/dataset")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    dashboard = _start_dashboard(dashboard_port)
    threading.Thread(
        target=_open_browser_after_startup,
        args=(f"{settings.dashboard_url}/",),
        daemon=True,
    ).start()

    try:
        uvicorn.run(
            "app:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=False,
            log_level=settings.log_level.lower(),
        )
    finally:
        dashboard.terminate()
        dashboard.wait(timeout=10)


if __name__ == "__main__":
    main()
