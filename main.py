"""
main.py

Flask backend for qrdrop, an ephemeral file-sharing service.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, qrcode[pil], celery

Notes:
  - Uploaded files live for 10 minutes and are swept every minute
  - Swagger docs available at /docs
  - Only PORT is read from the environment for the HTTP listener
"""

import logging
import os

from app_factory import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", 3000))
    logging.getLogger(__name__).info(f"Server running at http://localhost:{port}")
    app.run(host="0.0.0.0", port=port, threaded=True)
