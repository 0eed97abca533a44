import logging
import os

from flask import Flask

from routes import routes_bp

app = Flask(__name__)
app.config.from_object("config")
app.config.setdefault("MAX_CONTENT_LENGTH", 32 * 1024 * 1024)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key")

logging.basicConfig(
    level=app.config.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app.register_blueprint(routes_bp)


if __name__ == "__main__":
    app.run(
        host=os.environ.get("FLASK_HOST", "127.0.0.1"),
        port=int(os.environ.get("FLASK_PORT", "5000")),
    )
