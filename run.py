import os

from dotenv import load_dotenv

load_dotenv()

from realty import create_app

app = create_app(os.getenv("APP_ENV", "development"))


if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=int(os.getenv("PORT", "5000")),
        debug=app.config.get("DEBUG", False),
    )
