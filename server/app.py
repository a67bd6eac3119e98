import logging
import os

from . import create_app
from flask_cors import CORS

app = create_app(os.getenv("APP_ENV", "development"))

logging.basicConfig(
    level=app.config.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Session cookies must travel with cross-origin requests from the client app
CORS(
    app,
    resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"].split(",")}},
    supports_credentials=True,
)


if __name__ == "__main__":
    app.run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config.get("DEBUG", False),
    )
