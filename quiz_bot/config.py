from pathlib import Path
from dotenv import load_dotenv  # pip install python-dotenv
import os

# env file name comes from ENV_FILE, .env by default
env_file = os.getenv("ENV_FILE", ".env")
load_dotenv(Path(__file__).parent.parent / env_file)

ENV = os.getenv("ENV", "dev").lower()
bot_token = (
    os.getenv("BOT_TOKEN_PROD") if ENV == "prod" else os.getenv("BOT_TOKEN_DEV")
) or os.getenv("BOT_TOKEN")

QUIZ_PATH = Path(os.getenv("QUIZ_PATH", Path(__file__).parent / "data" / "quiz.json"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
