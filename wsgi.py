import os
from dotenv import load_dotenv

load_dotenv()

from realty import create_app

config = os.getenv("APP_ENV", "production")

app = create_app(config)
