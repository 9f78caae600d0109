import os
import sys

from streamlit.web import cli as stcli

if __name__ == "__main__":
    # Launch the Streamlit dashboard
    app_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "frontend", "app.py")
    sys.argv = ["streamlit", "run", app_path]
    sys.exit(stcli.main())
