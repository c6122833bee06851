"""Single-file entry point for hosted deployments.

Hosts that expect ``streamlit_app.py`` at the repository root can point at
this file; it runs the live dashboard in ``streamlit_app/Home.py``. Run
``streamlit run streamlit_app/Home.py`` locally to also get the Scenario
Runner and Exports pages in the sidebar.
"""
from __future__ import annotations

from pathlib import Path
import runpy

DASHBOARD_PATH = Path(__file__).parent / "streamlit_app" / "Home.py"


def main() -> None:
    if not DASHBOARD_PATH.exists():
        raise FileNotFoundError(
            f"Hospital dashboard not found at {DASHBOARD_PATH}; "
            "the streamlit_app/ directory must sit next to this file."
        )
    runpy.run_path(str(DASHBOARD_PATH), run_name="__main__")


if __name__ == "__main__":
    main()
