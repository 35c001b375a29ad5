from dotenv import load_dotenv
import os

load_dotenv()

# 저장소
MONGO_URL = os.getenv("MONGO_URL")
DB_NAME = os.getenv("DB_NAME", "cses_solver_blogs")
SOLUTION_STORE = os.getenv("SOLUTION_STORE", "mongo").lower()  # mongo | memory
SOLUTION_COLLECTION = "solutions"

# 관리자 계정
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
ADMIN_HASHED_PASSWORD = os.getenv("ADMIN_HASHED_PASSWORD")

# JWT
SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
ADMIN_COOKIE_NAME = "admin_auth_token"
ADMIN_COOKIE_PATH = "/admin"

# Gemini
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

AUTHOR_NAME = "CSES Solver Team"
